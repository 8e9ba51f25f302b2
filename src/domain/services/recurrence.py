"""Calendar recurrence helpers for recurring incomes, bills and expenses.

Day-based frequencies step by fixed ``timedelta`` values. Month-based
frequencies step by calendar months with ``dateutil.relativedelta``, which
clamps to the last day of shorter months (Jan 31 -> Feb 28/29).

Occurrences that started before the forecast window are projected forward in
whole periods. Month-based projections use the calendar month difference, so
the projected occurrence can skip the nearest one (original Jan 25, window
start Mar 20 gives Apr 25, not Mar 25), and quarterly/semiannual/annual steps
from clamped dates keep the clamped day. Both behaviours are deliberate
approximations carried over unchanged.
"""

from datetime import datetime, timedelta
import math

from dateutil.relativedelta import relativedelta

from src.domain.constants import RECURRENCE_FREQUENCIES


_DAY_STEPS = {
    "daily": 1,
    "weekly": 7,
    "biweekly": 14,
}

_MONTH_STEPS = {
    "monthly": 1,
    "quarterly": 3,
    "semiannually": 6,
    "annually": 12,
}


def is_recurring_frequency(frequency: str | None) -> bool:
    """Return True when the frequency describes a repeating schedule."""
    return frequency in RECURRENCE_FREQUENCIES


def step_date(
    value: datetime,
    frequency: str,
    *,
    anchor_day: int | None = None,
) -> datetime | None:
    """Return the occurrence following ``value``.

    Args:
        value: Current occurrence.
        frequency: Recurrence frequency.
        anchor_day: Day of month to keep for monthly steps, defaults to the
            day of ``value``.

    Returns:
        datetime | None: Next occurrence, None for ``once`` or unknown values.
    """
    if frequency in _DAY_STEPS:
        return value + timedelta(days=_DAY_STEPS[frequency])
    if frequency == "monthly":
        return value + relativedelta(months=1, day=anchor_day or value.day)
    if frequency == "annually":
        return value + relativedelta(years=1)
    if frequency in _MONTH_STEPS:
        return value + relativedelta(months=_MONTH_STEPS[frequency])
    return None


def project_first_occurrence(
    original: datetime,
    frequency: str,
    now: datetime,
) -> datetime:
    """Project a past occurrence forward to the first one at or after ``now``.

    Day-based frequencies use ``ceil(elapsed / period)`` whole periods.
    Month-based frequencies use the calendar month (or year) difference plus
    one period, which is an approximation (see module docstring).

    Args:
        original: First recorded occurrence.
        frequency: Recurrence frequency.
        now: Reference instant, usually the forecast start.

    Returns:
        datetime: ``original`` when it is not in the past, else the projection.
    """
    if original >= now or not is_recurring_frequency(frequency):
        return original

    if frequency in _DAY_STEPS:
        period = timedelta(days=_DAY_STEPS[frequency])
        steps = math.ceil((now - original) / period)
        return original + period * steps

    if frequency == "annually":
        years = now.year - original.year
        return original + relativedelta(years=years + 1)

    month_step = _MONTH_STEPS[frequency]
    months_diff = (now.year - original.year) * 12 + now.month - original.month
    periods = months_diff // month_step + 1
    return original + relativedelta(months=periods * month_step)


def calculate_next_occurrence(
    value: datetime,
    frequency: str,
    now: datetime,
) -> datetime:
    """Return the first occurrence strictly after ``now``.

    Steps one period at a time from ``value``. Non-recurring values are
    returned unchanged.
    """
    if value > now or not is_recurring_frequency(frequency):
        return value
    anchor_day = value.day
    current = value
    while current <= now:
        following = step_date(current, frequency, anchor_day=anchor_day)
        if following is None or following <= current:
            return current
        current = following
    return current


def max_occurrences_for(days: int) -> int:
    """Return the per-record occurrence cap for a forecast horizon."""
    if days >= 180:
        return 100
    if days >= 90:
        return 50
    return 30


def generate_occurrences(
    original: datetime,
    frequency: str,
    *,
    window_start: datetime,
    days: int,
) -> list[datetime]:
    """Return every occurrence of a record inside the forecast window.

    Args:
        original: First recorded occurrence.
        frequency: Recurrence frequency; ``once`` and unknown values yield at
            most the original date.
        window_start: Start of the inclusive window.
        days: Window length in days.

    Returns:
        list[datetime]: Occurrences in ascending order, capped by
        ``max_occurrences_for(days)``.
    """
    window_end = window_start + timedelta(days=days)
    if not is_recurring_frequency(frequency):
        if window_start <= original <= window_end:
            return [original]
        return []

    limit = max_occurrences_for(days)
    current = project_first_occurrence(original, frequency, window_start)
    occurrences: list[datetime] = []
    while current <= window_end and len(occurrences) < limit:
        occurrences.append(current)
        following = step_date(current, frequency, anchor_day=original.day)
        if following is None or following <= current:
            break
        current = following
    return occurrences


__all__ = [
    "is_recurring_frequency",
    "step_date",
    "project_first_occurrence",
    "calculate_next_occurrence",
    "max_occurrences_for",
    "generate_occurrences",
]
