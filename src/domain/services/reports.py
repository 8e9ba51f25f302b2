"""Domain services for dashboards, bill calendars and spending reports."""

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
import math

from dateutil.relativedelta import relativedelta

from src.domain.models import (
    Bill,
    Budget,
    CategoryTotal,
    Expense,
    Goal,
    MonthlySpending,
)
from src.domain.services.normalization import parse_amount, parse_instant
from src.utils.decimal_utils import parse_decimal


_HUNDRED = Decimal("100")
_CENT = Decimal("0.01")
_ONE_DAY = timedelta(days=1)


def format_currency(amount) -> str:
    """Format an amount as US dollars, ``$0.00`` when it is not numeric.

    Args:
        amount: Decimal, number or numeric string.

    Returns:
        str: Amount such as ``$1,234.56`` or ``-$20.00``.
    """
    value = parse_decimal(amount)
    if value is None:
        return "$0.00"
    rounded = value.quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.2f}"


def calculate_budget_utilization(
    budget: Budget,
    expenses: Iterable[Expense],
) -> Decimal:
    """Return the percentage of a budget spent, clamped to 0..100.

    Only expenses of the budget category dated inside the budget range count.
    Budgets with a non-positive amount report 0, as do refunds that leave
    the net spend negative.

    Args:
        budget: Budget to evaluate.
        expenses: Candidate expenses.

    Returns:
        Decimal: Utilization percentage between 0 and 100.
    """
    limit = parse_decimal(budget.amount)
    start = parse_instant(budget.start_date)
    end = parse_instant(budget.end_date)
    if limit is None or limit <= 0 or start is None or end is None:
        return Decimal("0")

    spent = Decimal("0")
    for expense in expenses:
        if expense.category != budget.category:
            continue
        occurred = parse_instant(expense.date)
        amount = parse_amount(expense.amount)
        if occurred is None or amount is None:
            continue
        if start <= occurred <= end:
            spent += amount
    return max(min(spent / limit * _HUNDRED, _HUNDRED), Decimal("0"))


def calculate_goal_progress(goal: Goal) -> Decimal:
    """Return the percentage of a savings goal reached, capped at 100."""
    target = parse_decimal(goal.target_amount)
    current = parse_decimal(goal.current_amount) or Decimal("0")
    if target is None or target <= 0:
        return Decimal("0")
    return min(current / target * _HUNDRED, _HUNDRED)


def group_expenses_by_category(
    expenses: Iterable[Expense],
) -> list[CategoryTotal]:
    """Aggregate expense totals per category, largest first.

    Args:
        expenses: Expenses to aggregate; non-numeric amounts are skipped.

    Returns:
        list[CategoryTotal]: Totals sorted by descending amount.
    """
    totals: dict[str, Decimal] = {}
    counts: dict[str, int] = {}
    for expense in expenses:
        amount = parse_amount(expense.amount)
        if amount is None:
            continue
        category = expense.category or "Other"
        totals[category] = totals.get(category, Decimal("0")) + amount
        counts[category] = counts.get(category, 0) + 1

    categories = [
        CategoryTotal(category=category, total=total, count=counts[category])
        for category, total in totals.items()
    ]
    return sorted(categories, key=lambda item: item.total, reverse=True)


def calculate_monthly_spending(
    expenses: Iterable[Expense],
    *,
    today: date,
    months: int = 6,
) -> list[MonthlySpending]:
    """Return expense totals for the last ``months`` calendar months.

    Args:
        expenses: Expenses to aggregate.
        today: Reference day; its month is the most recent one.
        months: Number of months to report.

    Returns:
        list[MonthlySpending]: Oldest month first.
    """
    by_month: dict[tuple[int, int], Decimal] = {}
    for expense in expenses:
        occurred = parse_instant(expense.date)
        amount = parse_amount(expense.amount)
        if occurred is None or amount is None:
            continue
        key = (occurred.year, occurred.month)
        by_month[key] = by_month.get(key, Decimal("0")) + amount

    first_of_month = date(today.year, today.month, 1)
    result: list[MonthlySpending] = []
    for offset in range(months - 1, -1, -1):
        month_start = first_of_month - relativedelta(months=offset)
        result.append(
            MonthlySpending(
                month=month_start.strftime("%b %Y"),
                year=month_start.year,
                month_number=month_start.month,
                total=by_month.get(
                    (month_start.year, month_start.month),
                    Decimal("0"),
                ),
            )
        )
    return result


def is_upcoming(value, *, now: datetime, days_threshold: int = 7) -> bool:
    """Return True when ``value`` falls within ``days_threshold`` days."""
    when = parse_instant(value)
    if when is None:
        return False
    remaining = math.ceil((when - now) / _ONE_DAY)
    return 0 <= remaining <= days_threshold


def is_overdue(value, *, now: datetime) -> bool:
    """Return True when the whole day of ``value`` is already past."""
    when = parse_instant(value)
    if when is None:
        return False
    end_of_day = when.replace(hour=23, minute=59, second=59, microsecond=999999)
    return end_of_day < now


def days_until(value, *, now: datetime) -> int:
    """Return whole days until ``value``, never negative."""
    when = parse_instant(value)
    if when is None:
        return 0
    return max(math.ceil((when - now) / _ONE_DAY), 0)


def get_upcoming_bills(
    bills: Iterable[Bill],
    *,
    now: datetime,
    days: int = 7,
) -> list[Bill]:
    """Return unpaid bills due within ``days`` days, soonest first.

    Bills already overdue are left out even when their due instant is
    less than a day ago.
    """
    upcoming = [
        bill
        for bill in bills
        if not bill.is_paid
        and is_upcoming(bill.due_date, now=now, days_threshold=days)
        and not is_overdue(bill.due_date, now=now)
    ]
    return sorted(upcoming, key=lambda bill: parse_instant(bill.due_date))


def get_overdue_bills(bills: Iterable[Bill], *, now: datetime) -> list[Bill]:
    """Return unpaid bills whose due day has passed, oldest first."""
    overdue = [
        bill
        for bill in bills
        if not bill.is_paid and is_overdue(bill.due_date, now=now)
    ]
    return sorted(overdue, key=lambda bill: parse_instant(bill.due_date))


__all__ = [
    "format_currency",
    "calculate_budget_utilization",
    "calculate_goal_progress",
    "group_expenses_by_category",
    "calculate_monthly_spending",
    "is_upcoming",
    "is_overdue",
    "days_until",
    "get_upcoming_bills",
    "get_overdue_bills",
]
