"""Domain models for financial reports."""

from dataclasses import dataclass
from decimal import Decimal

from .records import Bill


@dataclass(frozen=True)
class CategoryTotal:
    """Expense total aggregated for a category."""

    category: str
    total: Decimal
    count: int


@dataclass(frozen=True)
class MonthlySpending:
    """Expense total for a calendar month.

    Attributes:
        month: Label such as ``Jan 2024``.
        year: Calendar year.
        month_number: Calendar month (1-12).
        total: Sum of expense amounts in the month.
    """

    month: str
    year: int
    month_number: int
    total: Decimal


@dataclass(frozen=True)
class BudgetUtilization:
    """Share of a budget already spent."""

    budget_id: str
    name: str
    category: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class GoalProgress:
    """Share of a savings goal already reached."""

    goal_id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class BillsOverview:
    """Unpaid bills due soon or already late."""

    upcoming: list[Bill]
    overdue: list[Bill]
    total_due: Decimal


@dataclass(frozen=True)
class SpendingReport:
    """Spending summary for dashboards and reports."""

    categories: list[CategoryTotal]
    monthly: list[MonthlySpending]
    budgets: list[BudgetUtilization]
    goals: list[GoalProgress]


__all__ = [
    "CategoryTotal",
    "MonthlySpending",
    "BudgetUtilization",
    "GoalProgress",
    "BillsOverview",
    "SpendingReport",
]
