"""Domain services package."""

from .normalization import (
    match_category,
    normalize_frequency,
    parse_amount,
    parse_instant,
)
from .recurrence import (
    calculate_next_occurrence,
    generate_occurrences,
    project_first_occurrence,
    step_date,
)
from .reports import (
    calculate_budget_utilization,
    calculate_goal_progress,
    calculate_monthly_spending,
    days_until,
    format_currency,
    get_overdue_bills,
    get_upcoming_bills,
    group_expenses_by_category,
    is_overdue,
    is_upcoming,
)
from .forecast import (
    forecast_items_from_daily_rows,
    generate_forecast,
    summarize_daily,
)
from .validation import warn_on_sign_anomalies

__all__ = [
    "match_category",
    "normalize_frequency",
    "parse_amount",
    "parse_instant",
    "calculate_next_occurrence",
    "generate_occurrences",
    "project_first_occurrence",
    "step_date",
    "calculate_budget_utilization",
    "calculate_goal_progress",
    "calculate_monthly_spending",
    "days_until",
    "format_currency",
    "get_overdue_bills",
    "get_upcoming_bills",
    "group_expenses_by_category",
    "is_overdue",
    "is_upcoming",
    "forecast_items_from_daily_rows",
    "generate_forecast",
    "summarize_daily",
    "warn_on_sign_anomalies",
]
