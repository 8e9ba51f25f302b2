"""Domain policies package."""

from .records import is_forecastable_bill, is_recurring_record

__all__ = ["is_forecastable_bill", "is_recurring_record"]
