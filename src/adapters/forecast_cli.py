"""CLI adapter printing the cash-flow forecast of a user."""

from datetime import date

from src.application.ports.remote_forecast import RemoteForecastError
from src.application.use_cases.get_cashflow_forecast import (
    GetCashflowForecastUseCase,
)
from src.application.use_cases.get_remote_forecast import (
    GetRemoteForecastUseCase,
)
from src.domain.services.reports import format_currency
from src.infrastructure.container import (
    build_financial_records_repository,
    build_remote_forecast_client,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import ForecastSettings


def _format_row(item) -> str:
    """Format one forecast item as a fixed-width table row."""
    return (
        f"{item.date.date().isoformat():<12}"
        f"{item.type:<10}"
        f"{item.name[:28]:<30}"
        f"{format_currency(item.amount):>14}"
        f"{format_currency(item.running_balance):>16}"
    )


def main() -> None:
    """Compute the forecast with the configured backend and print it."""
    logger = get_app_logger()
    settings = ForecastSettings.from_env()
    start_date = settings.start_date or date.today()

    try:
        if settings.backend == "remote":
            use_case = GetRemoteForecastUseCase(
                remote_forecast=build_remote_forecast_client(settings),
                logger=logger,
            )
            items = use_case.execute(days=settings.days)
        else:
            if not settings.user_id:
                logger.warning(
                    "FORECAST_USER_ID is required for the local forecast."
                )
                return
            use_case = GetCashflowForecastUseCase(
                records_repository=build_financial_records_repository(),
                logger=logger,
            )
            items = use_case.execute(
                settings.user_id,
                start_date=start_date,
                days=settings.days,
            )
    except RemoteForecastError as exc:
        logger.error(f"Remote forecast failed: {exc}")
        return
    except (RuntimeError, ValueError) as exc:
        logger.error(str(exc))
        return

    print(
        f"Cash-flow forecast (backend={settings.backend}, "
        f"start={start_date}, days={settings.days})"
    )
    print(
        f"{'Date':<12}{'Type':<10}{'Name':<30}"
        f"{'Amount':>14}{'Balance':>16}"
    )
    for item in items:
        print(_format_row(item))
    if items:
        print(
            f"Closing balance: {format_currency(items[-1].running_balance)}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
