"""Recurring cash-flow forecaster.

``generate_forecast`` is the single source of truth for projected cash flow:
the local forecast, the dashboards and the comparison against the remote
forecast all go through it. The function is pure: ``start_date`` is always
passed in and no clock is read.
"""

from collections.abc import Iterable, Sequence
from dataclasses import replace
from datetime import date, datetime, timedelta
from decimal import Decimal

from src.domain.constants import (
    ANCHOR_DESCRIPTION,
    ANCHOR_ITEM_ID,
    ANCHOR_NAME,
)
from src.domain.models import (
    BalanceAdjustment,
    Bill,
    DailyForecastRow,
    Expense,
    ForecastItem,
    Income,
)
from src.domain.policies import is_forecastable_bill, is_recurring_record
from src.domain.services.normalization import parse_amount, parse_instant
from src.domain.services.recurrence import generate_occurrences
from src.domain.services.reports import format_currency
from src.utils.decimal_utils import coerce_decimal


RECURRING_SUFFIX = " - Recurring"


def generate_forecast(
    *,
    start_date: date | datetime,
    days: int,
    starting_balance: Decimal | int | float | str,
    incomes: Iterable[Income] = (),
    bills: Iterable[Bill] = (),
    expenses: Iterable[Expense] = (),
    adjustments: Iterable[BalanceAdjustment] = (),
    expand_recurring: bool = False,
) -> list[ForecastItem]:
    """Project dated cash-flow events with a running balance.

    Args:
        start_date: Start of the inclusive window ``[start, start + days]``.
        days: Window length in days.
        starting_balance: Balance before the first event, may be negative.
        incomes: Income records; amounts are used as-is.
        bills: Bill records; paid bills are dropped, amounts become negative.
        expenses: Expense records; amounts become negative.
        adjustments: Balance adjustments, always included.
        expand_recurring: Expand recurring records into every occurrence of
            the window instead of using their stored date only.

    Returns:
        list[ForecastItem]: Anchor first, then events by ascending date (ties
        keep emission order: incomes, bills, expenses, adjustments).
        Adjustments dated before ``start_date`` still follow the anchor, so
        the dates are only non-decreasing after the anchor.

    Raises:
        ValueError: If ``start_date`` cannot be read as a date.
    """
    start = parse_instant(start_date)
    if start is None:
        raise ValueError(f"Invalid forecast start date: {start_date!r}")
    opening = coerce_decimal(starting_balance)
    end = start + timedelta(days=days)

    anchor = ForecastItem(
        item_id=ANCHOR_ITEM_ID,
        date=start,
        amount=opening,
        category="balance",
        name=ANCHOR_NAME,
        type="balance",
        running_balance=opening,
        description=ANCHOR_DESCRIPTION,
    )

    events: list[ForecastItem] = []
    for income in incomes:
        events.extend(
            _income_events(income, start, end, days, expand_recurring)
        )
    for bill in bills:
        if not is_forecastable_bill(bill):
            continue
        events.extend(_bill_events(bill, start, end, days, expand_recurring))
    for expense in expenses:
        events.extend(
            _expense_events(expense, start, end, days, expand_recurring)
        )
    for adjustment in adjustments:
        event = _adjustment_event(adjustment)
        if event is not None:
            events.append(event)

    events.sort(key=lambda item: item.date)
    return [anchor, *apply_running_balance(events, opening)]


def apply_running_balance(
    events: Sequence[ForecastItem],
    opening: Decimal,
) -> list[ForecastItem]:
    """Return copies of ``events`` carrying the cumulative balance."""
    running = opening
    result: list[ForecastItem] = []
    for event in events:
        running += event.amount
        result.append(replace(event, running_balance=running))
    return result


def summarize_daily(items: Sequence[ForecastItem]) -> list[DailyForecastRow]:
    """Group forecast events by calendar day.

    The anchor is skipped; ``balance`` is the running balance after the last
    event of the day. The output has the same shape as the remote forecast.

    Args:
        items: Output of ``generate_forecast``.

    Returns:
        list[DailyForecastRow]: One row per day with events, ascending.
    """
    rows: list[DailyForecastRow] = []
    totals: dict[date, list[Decimal]] = {}
    order: list[date] = []
    for item in items:
        if item.type == "balance" and item.item_id == ANCHOR_ITEM_ID:
            continue
        day = item.date.date()
        if day not in totals:
            order.append(day)
            totals[day] = [Decimal("0"), Decimal("0"), Decimal("0")]
        income, expenses, _ = totals[day]
        if item.amount > 0:
            income += item.amount
        else:
            expenses += item.amount
        totals[day] = [income, expenses, item.running_balance]

    for day in sorted(order):
        income, expenses, balance = totals[day]
        rows.append(
            DailyForecastRow(
                date=day,
                income=income,
                expenses=expenses,
                net_change=income + expenses,
                balance=balance,
            )
        )
    return rows


def forecast_items_from_daily_rows(
    rows: Iterable[DailyForecastRow],
) -> list[ForecastItem]:
    """Convert remote per-day rows to forecast items for presentation."""
    items: list[ForecastItem] = []
    for row in rows:
        if row.income > 0:
            kind = "income"
        elif row.expenses < 0:
            kind = "expense"
        else:
            kind = "balance"
        items.append(
            ForecastItem(
                item_id=f"forecast-{row.date.isoformat()}",
                date=datetime.combine(row.date, datetime.min.time()),
                amount=row.net_change,
                category=kind,
                name=kind.capitalize(),
                type=kind,
                running_balance=row.balance,
                description=(
                    f"Income {format_currency(row.income)}, "
                    f"expenses {format_currency(row.expenses)}"
                ),
            )
        )
    return items


def _income_events(
    income: Income,
    start: datetime,
    end: datetime,
    days: int,
    expand_recurring: bool,
) -> list[ForecastItem]:
    occurred = parse_instant(income.date)
    amount = parse_amount(income.amount)
    if occurred is None or amount is None:
        return []
    category = income.category or "Income"
    name = income.name or "Income"
    description = f"{name} ({category})"
    dates = _event_dates(
        income, occurred, start, end, days, expand_recurring
    )
    return [
        ForecastItem(
            item_id=income.id,
            date=when,
            amount=amount,
            category=category,
            name=name,
            type="income",
            description=_describe(description, income, expand_recurring),
        )
        for when in dates
    ]


def _bill_events(
    bill: Bill,
    start: datetime,
    end: datetime,
    days: int,
    expand_recurring: bool,
) -> list[ForecastItem]:
    due = parse_instant(bill.due_date)
    amount = parse_amount(bill.amount)
    if due is None or amount is None:
        return []
    category = bill.category or "Bill"
    name = bill.name or "Bill"
    description = f"{name} ({category}) - Due"
    if bill.auto_pay:
        description += " - AutoPay"
    dates = _event_dates(bill, due, start, end, days, expand_recurring)
    return [
        ForecastItem(
            item_id=bill.id,
            date=when,
            amount=-abs(amount),
            category=category,
            name=name,
            type="bill",
            description=_describe(description, bill, expand_recurring),
        )
        for when in dates
    ]


def _expense_events(
    expense: Expense,
    start: datetime,
    end: datetime,
    days: int,
    expand_recurring: bool,
) -> list[ForecastItem]:
    occurred = parse_instant(expense.date)
    amount = parse_amount(expense.amount)
    if occurred is None or amount is None:
        return []
    category = expense.category or "Expense"
    name = expense.name or "Expense"
    description = f"{name} ({category})"
    dates = _event_dates(
        expense, occurred, start, end, days, expand_recurring
    )
    return [
        ForecastItem(
            item_id=expense.id,
            date=when,
            amount=-abs(amount),
            category=category,
            name=name,
            type="expense",
            description=_describe(description, expense, expand_recurring),
        )
        for when in dates
    ]


def _adjustment_event(adjustment: BalanceAdjustment) -> ForecastItem | None:
    occurred = parse_instant(adjustment.date)
    amount = parse_amount(adjustment.amount)
    if occurred is None or amount is None:
        return None
    reason = adjustment.reason or "No reason provided"
    return ForecastItem(
        item_id=adjustment.id,
        date=occurred,
        amount=amount,
        category="adjustment",
        name=adjustment.reason or "Balance Adjustment",
        type="adjustment",
        description=(
            f"Balance adjusted by {format_currency(amount)} - {reason}"
        ),
    )


def _event_dates(
    record: Income | Bill | Expense,
    occurred: datetime,
    start: datetime,
    end: datetime,
    days: int,
    expand_recurring: bool,
) -> list[datetime]:
    if expand_recurring and is_recurring_record(record):
        return generate_occurrences(
            occurred,
            record.frequency,
            window_start=start,
            days=days,
        )
    if start <= occurred <= end:
        return [occurred]
    return []


def _describe(
    description: str,
    record: Income | Bill | Expense,
    expand_recurring: bool,
) -> str:
    if expand_recurring and is_recurring_record(record):
        return f"{description}{RECURRING_SUFFIX}"
    return description


__all__ = [
    "generate_forecast",
    "apply_running_balance",
    "summarize_daily",
    "forecast_items_from_daily_rows",
]
