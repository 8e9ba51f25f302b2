"""CLI adapter to compare the local and remote forecasts."""

from datetime import date

from src.application.ports.remote_forecast import RemoteForecastError
from src.application.use_cases.compare_forecasts import (
    CompareForecastsUseCase,
)
from src.application.use_cases.get_cashflow_forecast import (
    GetCashflowForecastUseCase,
)
from src.infrastructure.container import (
    build_financial_records_repository,
    build_remote_forecast_client,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import ForecastSettings


def main() -> None:
    """Run a sanity check comparing local vs remote forecast outputs."""
    logger = get_app_logger()
    settings = ForecastSettings.from_env()
    if not settings.user_id:
        logger.warning(
            "FORECAST_USER_ID is required to compare forecasts."
        )
        return
    start_date = settings.start_date or date.today()

    try:
        remote_client = build_remote_forecast_client(settings)
    except RuntimeError as exc:
        logger.error(str(exc))
        return

    local_use_case = GetCashflowForecastUseCase(
        records_repository=build_financial_records_repository(),
        logger=logger,
    )
    use_case = CompareForecastsUseCase(
        local_forecast=local_use_case,
        remote_forecast=remote_client,
        logger=logger,
    )
    try:
        result = use_case.execute(
            settings.user_id,
            start_date=start_date,
            days=settings.days,
            left_name="local",
            right_name="remote",
        )
    except RemoteForecastError as exc:
        logger.error(f"Remote forecast failed: {exc}")
        return
    except RuntimeError as exc:
        logger.error(str(exc))
        return

    print(
        "Forecast comparison "
        f"(user={settings.user_id}, start={start_date}, days={settings.days})"
    )
    for snapshot in (result.left, result.right):
        print(
            f"{snapshot.name}: days={snapshot.day_count}, "
            f"first={snapshot.first_day}, last={snapshot.last_day}, "
            f"income={snapshot.total_income}, "
            f"expenses={snapshot.total_expenses}, "
            f"closing={snapshot.closing_balance}"
        )
    print(
        "Deltas (right - left): "
        f"days={result.diff.day_count_delta}, "
        f"income={result.diff.income_delta}, "
        f"expenses={result.diff.expenses_delta}, "
        f"closing={result.diff.closing_balance_delta}"
    )
    if result.diff.missing_days:
        print(
            "Missing on right: "
            + ", ".join(day.isoformat() for day in result.diff.missing_days)
        )
    if result.diff.extra_days:
        print(
            "Extra on right: "
            + ", ".join(day.isoformat() for day in result.diff.extra_days)
        )
    print(f"Shape matches: {result.shape_matches}")


if __name__ == "__main__":  # pragma: no cover
    main()
