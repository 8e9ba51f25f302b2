"""Domain models package."""

from .finance import (
    BillsOverview,
    BudgetUtilization,
    CategoryTotal,
    GoalProgress,
    MonthlySpending,
    SpendingReport,
)
from .forecast import DailyForecastRow, ForecastItem
from .records import (
    BalanceAdjustment,
    Bill,
    Budget,
    Expense,
    FinancialProfile,
    Goal,
    Income,
    RecordDate,
)

__all__ = [
    "BalanceAdjustment",
    "Bill",
    "Budget",
    "Expense",
    "FinancialProfile",
    "Goal",
    "Income",
    "RecordDate",
    "ForecastItem",
    "DailyForecastRow",
    "BillsOverview",
    "BudgetUtilization",
    "CategoryTotal",
    "GoalProgress",
    "MonthlySpending",
    "SpendingReport",
]
