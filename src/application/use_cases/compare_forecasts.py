"""Use case to compare the local forecast with the remote forecast.

The remote service computes a per-day forecast with its own query. The two
are compared on output shape (consistent per-day rows, same days, closing
balance), not on line-by-line logic. Remote rows with missing or extra
fields are rejected by the client before they get here.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from src.application.ports.remote_forecast import RemoteForecastPort
from src.application.use_cases.get_cashflow_forecast import (
    GetCashflowForecastUseCase,
)
from src.domain.models import DailyForecastRow
from src.domain.services.forecast import summarize_daily
from src.infrastructure.logging.logger import get_app_logger


_CENT = Decimal("0.01")


@dataclass(frozen=True)
class ForecastSnapshot:
    """Totals and coverage of one forecast source."""

    name: str
    day_count: int
    first_day: date | None
    last_day: date | None
    total_income: Decimal
    total_expenses: Decimal
    closing_balance: Decimal | None


@dataclass(frozen=True)
class ForecastDiff:
    """Difference between two forecast snapshots (right - left)."""

    day_count_delta: int
    missing_days: list[date]
    extra_days: list[date]
    income_delta: Decimal
    expenses_delta: Decimal
    closing_balance_delta: Decimal | None


@dataclass(frozen=True)
class ForecastComparison:
    """Comparison result for the local and remote forecasts."""

    left: ForecastSnapshot
    right: ForecastSnapshot
    diff: ForecastDiff
    shape_matches: bool


class CompareForecastsUseCase:
    """Compare the per-day output of the local and remote forecasts."""

    def __init__(
        self,
        local_forecast: GetCashflowForecastUseCase,
        remote_forecast: RemoteForecastPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            local_forecast: Use case building the forecast from records.
            remote_forecast: Port returning the remote per-day forecast.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._local_forecast = local_forecast
        self._remote_forecast = remote_forecast
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        *,
        start_date: date | datetime,
        days: int,
        left_name: str = "local",
        right_name: str = "remote",
    ) -> ForecastComparison:
        """Return a comparison between the two forecasts.

        Args:
            user_id: Owner of the records used by the local forecast.
            start_date: Start of the local window; the remote service uses
                its own current date.
            days: Window length in days for both sides.
            left_name: Label for the baseline forecast.
            right_name: Label for the compared forecast.

        Returns:
            ForecastComparison: Snapshots, differences and the shape check.
        """
        local_rows = summarize_daily(
            self._local_forecast.execute(
                user_id,
                start_date=start_date,
                days=days,
            )
        )
        remote_rows = self._remote_forecast.fetch_forecast(days)

        left = self._build_snapshot(left_name, local_rows)
        right = self._build_snapshot(right_name, remote_rows)
        left_days = {row.date for row in local_rows}
        right_days = {row.date for row in remote_rows}
        closing_delta = (
            right.closing_balance - left.closing_balance
            if left.closing_balance is not None
            and right.closing_balance is not None
            else None
        )
        diff = ForecastDiff(
            day_count_delta=right.day_count - left.day_count,
            missing_days=sorted(left_days - right_days),
            extra_days=sorted(right_days - left_days),
            income_delta=right.total_income - left.total_income,
            expenses_delta=right.total_expenses - left.total_expenses,
            closing_balance_delta=closing_delta,
        )
        shape_matches = self._same_shape(local_rows, remote_rows)
        self._logger.info(
            f"Forecast comparison: {left_name}={left.day_count} days, "
            f"{right_name}={right.day_count} days, "
            f"shape_matches={shape_matches}"
        )
        return ForecastComparison(
            left=left,
            right=right,
            diff=diff,
            shape_matches=shape_matches,
        )

    @staticmethod
    def _build_snapshot(
        name: str,
        rows: list[DailyForecastRow],
    ) -> ForecastSnapshot:
        ordered = sorted(rows, key=lambda row: row.date)
        return ForecastSnapshot(
            name=name,
            day_count=len(ordered),
            first_day=ordered[0].date if ordered else None,
            last_day=ordered[-1].date if ordered else None,
            total_income=sum(
                (row.income for row in ordered),
                start=Decimal("0"),
            ),
            total_expenses=sum(
                (row.expenses for row in ordered),
                start=Decimal("0"),
            ),
            closing_balance=ordered[-1].balance if ordered else None,
        )

    @staticmethod
    def _same_shape(
        left: list[DailyForecastRow],
        right: list[DailyForecastRow],
    ) -> bool:
        """Return True when every row's net change matches to the cent."""
        return all(
            abs(row.income + row.expenses - row.net_change) < _CENT
            for row in [*left, *right]
        )


__all__ = [
    "ForecastSnapshot",
    "ForecastDiff",
    "ForecastComparison",
    "CompareForecastsUseCase",
]
