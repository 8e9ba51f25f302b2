"""Domain package for business rules and core models."""

from .constants import DEFAULT_FORECAST_DAYS, RECURRENCE_FREQUENCIES
from .models import (
    BalanceAdjustment,
    Bill,
    DailyForecastRow,
    Expense,
    ForecastItem,
    Income,
)
from .policies import is_forecastable_bill, is_recurring_record
from .services import (
    generate_forecast,
    generate_occurrences,
    summarize_daily,
)

__all__ = [
    "DEFAULT_FORECAST_DAYS",
    "RECURRENCE_FREQUENCIES",
    "BalanceAdjustment",
    "Bill",
    "DailyForecastRow",
    "Expense",
    "ForecastItem",
    "Income",
    "is_forecastable_bill",
    "is_recurring_record",
    "generate_forecast",
    "generate_occurrences",
    "summarize_daily",
]
