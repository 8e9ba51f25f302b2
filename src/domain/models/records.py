"""Domain models for stored financial records.

Records are read-only inputs to the forecaster and reports. Date fields keep
whatever the store returned (ISO string, ``date``, ``datetime`` or ``None``);
the domain services parse them and skip values they cannot read.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

RecordDate = str | date | datetime | None


@dataclass(frozen=True)
class Income:
    """Expected or received income.

    Attributes:
        id: Record identifier.
        name: Display name.
        amount: Positive amount.
        date: First (or only) occurrence.
        frequency: Recurrence frequency, ``once`` for one-off income.
        category: Income category.
        is_recurring: Whether the record repeats on ``frequency``.
    """

    id: str
    name: str
    amount: Decimal | None
    date: RecordDate
    frequency: str = "once"
    category: str | None = None
    is_recurring: bool = False


@dataclass(frozen=True)
class Bill:
    """Bill or scheduled payment.

    Attributes:
        id: Record identifier.
        name: Display name.
        amount: Amount due, stored positive.
        due_date: Next due date.
        frequency: Recurrence frequency (no ``daily`` for bills).
        is_paid: Paid bills never appear in forecasts.
        category: Bill category.
        is_recurring: Whether the bill repeats on ``frequency``.
        auto_pay: Whether the bill is paid automatically.
    """

    id: str
    name: str
    amount: Decimal | None
    due_date: RecordDate
    frequency: str = "once"
    is_paid: bool = False
    category: str | None = None
    is_recurring: bool = False
    auto_pay: bool = False


@dataclass(frozen=True)
class Expense:
    """Recorded or planned expense."""

    id: str
    name: str
    amount: Decimal | None
    date: RecordDate
    category: str | None = None
    frequency: str = "once"
    is_recurring: bool = False
    is_planned: bool = False


@dataclass(frozen=True)
class BalanceAdjustment:
    """Manual correction of the tracked balance."""

    id: str
    date: RecordDate
    amount: Decimal | None
    reason: str | None = None


@dataclass(frozen=True)
class FinancialProfile:
    """Per-user balance snapshot."""

    user_id: str
    current_balance: Decimal
    currency: str = "USD"
    last_updated: RecordDate = None


@dataclass(frozen=True)
class Budget:
    """Spending budget for a category over a date range."""

    id: str
    name: str
    amount: Decimal
    category: str
    start_date: RecordDate
    end_date: RecordDate
    period: str = "monthly"


@dataclass(frozen=True)
class Goal:
    """Savings goal."""

    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    target_date: RecordDate = None
    category: str | None = None
    is_completed: bool = False


__all__ = [
    "RecordDate",
    "Income",
    "Bill",
    "Expense",
    "BalanceAdjustment",
    "FinancialProfile",
    "Budget",
    "Goal",
]
