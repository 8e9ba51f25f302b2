"""Use case to read the forecast computed by the remote service."""

from src.application.ports.remote_forecast import RemoteForecastPort
from src.domain.constants import DEFAULT_FORECAST_DAYS
from src.domain.models import ForecastItem
from src.domain.services.forecast import forecast_items_from_daily_rows
from src.infrastructure.logging.logger import get_app_logger


class GetRemoteForecastUseCase:
    """Fetch the remote per-day forecast as presentation-ready items."""

    def __init__(
        self,
        remote_forecast: RemoteForecastPort,
        logger=None,
    ) -> None:
        self._remote_forecast = remote_forecast
        self._logger = logger or get_app_logger()

    def execute(self, days: int = DEFAULT_FORECAST_DAYS) -> list[ForecastItem]:
        """Return one forecast item per day reported by the remote service.

        Raises:
            ValueError: If ``days`` is not a positive integer.
            RemoteForecastError: If the remote call fails.
        """
        if days <= 0:
            raise ValueError(f"Forecast horizon must be positive, got {days}")
        self._logger.info(f"Requesting {days}-day forecast from remote service")
        rows = self._remote_forecast.fetch_forecast(days)
        self._logger.info(f"Remote forecast returned {len(rows)} days")
        return forecast_items_from_daily_rows(rows)


__all__ = ["GetRemoteForecastUseCase"]
