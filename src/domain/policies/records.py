"""Policies deciding which records take part in forecasts."""

from src.domain.constants import RECURRENCE_FREQUENCIES
from src.domain.models import Bill, Expense, Income


def is_forecastable_bill(bill: Bill) -> bool:
    """Return True when the bill is still due."""
    return not bill.is_paid


def is_recurring_record(record: Income | Bill | Expense) -> bool:
    """Return True when the record repeats on a known frequency.

    Args:
        record: Income, bill or expense record.

    Returns:
        bool: True for flagged recurring records with a repeating frequency.
    """
    return bool(record.is_recurring) and record.frequency in RECURRENCE_FREQUENCIES


__all__ = ["is_forecastable_bill", "is_recurring_record"]
