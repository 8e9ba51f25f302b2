"""Domain models for cash-flow forecasts."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class ForecastItem:
    """Dated cash-flow event with the balance after it.

    Attributes:
        item_id: Identifier of the source record (or the anchor id).
        date: Instant of the event.
        amount: Signed amount (income positive, bills/expenses negative).
        category: Record category.
        name: Display name.
        type: One of income, bill, expense, balance, adjustment.
        running_balance: Balance after applying this event.
        description: Human readable summary.
    """

    item_id: str
    date: datetime
    amount: Decimal
    category: str
    name: str
    type: str
    running_balance: Decimal = Decimal("0")
    description: str = ""

    def to_dict(self) -> dict[str, str | float]:
        """Return the camelCase payload consumed by presentation layers."""
        return {
            "itemId": self.item_id,
            "date": self.date.isoformat(),
            "amount": float(self.amount),
            "category": self.category,
            "name": self.name,
            "type": self.type,
            "runningBalance": float(self.running_balance),
            "description": self.description,
        }


@dataclass(frozen=True)
class DailyForecastRow:
    """Per-day forecast aggregate, as returned by the remote forecast."""

    date: date
    income: Decimal
    expenses: Decimal
    net_change: Decimal
    balance: Decimal

    def to_dict(self) -> dict[str, str | float]:
        return {
            "date": self.date.isoformat(),
            "income": float(self.income),
            "expenses": float(self.expenses),
            "netChange": float(self.net_change),
            "balance": float(self.balance),
        }


__all__ = ["ForecastItem", "DailyForecastRow"]
