"""Port for the remotely computed forecast."""

from typing import Protocol

from src.domain.models import DailyForecastRow


class RemoteForecastError(RuntimeError):
    """Failure reported by, or while reaching, the remote forecast.

    Attributes:
        code: Transport classification (``internal``, ``unauthenticated``).
        message: Human readable message.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


class RemoteForecastPort(Protocol):
    """Port exposing the per-day forecast computed by the remote service."""

    def fetch_forecast(self, days: int) -> list[DailyForecastRow]:
        """Return one row per day with events in the next ``days`` days.

        Raises:
            RemoteForecastError: If the call fails for any reason.
        """


__all__ = ["RemoteForecastError", "RemoteForecastPort"]
