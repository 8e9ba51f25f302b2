"""Tests for recurrence helpers."""

from datetime import datetime

import pytest

from src.domain.services.recurrence import (
    calculate_next_occurrence,
    generate_occurrences,
    is_recurring_frequency,
    max_occurrences_for,
    project_first_occurrence,
    step_date,
)


@pytest.mark.parametrize(
    ("frequency", "expected"),
    [
        ("daily", datetime(2025, 1, 16)),
        ("weekly", datetime(2025, 1, 22)),
        ("biweekly", datetime(2025, 1, 29)),
        ("monthly", datetime(2025, 2, 15)),
        ("quarterly", datetime(2025, 4, 15)),
        ("semiannually", datetime(2025, 7, 15)),
        ("annually", datetime(2026, 1, 15)),
    ],
)
def test_step_date_per_frequency(frequency, expected) -> None:
    assert step_date(datetime(2025, 1, 15), frequency) == expected


def test_step_date_returns_none_for_once_and_unknown() -> None:
    assert step_date(datetime(2025, 1, 15), "once") is None
    assert step_date(datetime(2025, 1, 15), "fortnightly") is None


def test_monthly_steps_clamp_then_restore_anchor_day() -> None:
    february = step_date(datetime(2025, 1, 31), "monthly", anchor_day=31)
    march = step_date(february, "monthly", anchor_day=31)

    assert february == datetime(2025, 2, 28)
    assert march == datetime(2025, 3, 31)


def test_is_recurring_frequency() -> None:
    assert is_recurring_frequency("weekly") is True
    assert is_recurring_frequency("once") is False
    assert is_recurring_frequency(None) is False


def test_project_first_occurrence_uses_whole_day_periods() -> None:
    projected = project_first_occurrence(
        datetime(2025, 1, 1),
        "weekly",
        datetime(2025, 1, 10),
    )

    assert projected == datetime(2025, 1, 15)


def test_project_first_occurrence_monthly_uses_calendar_difference() -> None:
    """The month difference plus one period can skip the nearest date."""
    projected = project_first_occurrence(
        datetime(2025, 1, 25),
        "monthly",
        datetime(2025, 3, 20),
    )

    assert projected == datetime(2025, 4, 25)


def test_project_first_occurrence_keeps_future_dates() -> None:
    original = datetime(2025, 5, 1)

    assert project_first_occurrence(
        original,
        "monthly",
        datetime(2025, 1, 1),
    ) == original


def test_calculate_next_occurrence_is_strictly_after_now() -> None:
    assert calculate_next_occurrence(
        datetime(2025, 1, 15),
        "monthly",
        datetime(2025, 3, 15),
    ) == datetime(2025, 4, 15)
    assert calculate_next_occurrence(
        datetime(2025, 1, 15),
        "once",
        datetime(2025, 3, 15),
    ) == datetime(2025, 1, 15)


@pytest.mark.parametrize(
    ("days", "expected"),
    [(30, 30), (89, 30), (90, 50), (179, 50), (180, 100), (365, 100)],
)
def test_max_occurrences_for(days, expected) -> None:
    assert max_occurrences_for(days) == expected


def test_generate_occurrences_weekly_window() -> None:
    occurrences = generate_occurrences(
        datetime(2025, 1, 1),
        "weekly",
        window_start=datetime(2025, 1, 1),
        days=30,
    )

    assert [value.day for value in occurrences] == [1, 8, 15, 22, 29]


def test_generate_occurrences_respects_cap() -> None:
    occurrences = generate_occurrences(
        datetime(2025, 1, 1),
        "daily",
        window_start=datetime(2025, 1, 1),
        days=30,
    )

    assert len(occurrences) == 30


def test_generate_occurrences_non_recurring_is_window_filtered() -> None:
    window_start = datetime(2025, 1, 1)

    assert generate_occurrences(
        datetime(2024, 12, 1),
        "once",
        window_start=window_start,
        days=30,
    ) == []
    assert generate_occurrences(
        datetime(2025, 1, 9),
        "once",
        window_start=window_start,
        days=30,
    ) == [datetime(2025, 1, 9)]
