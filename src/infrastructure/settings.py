"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from datetime import date
import os
from typing import Optional

import dotenv

from src.domain.constants import DEFAULT_FORECAST_DAYS
from src.infrastructure.logging.logger import get_app_logger


FORECAST_BACKENDS = ("local", "remote")


@dataclass(frozen=True)
class ForecastSettings:
    """Settings for producing forecasts.

    Attributes:
        backend: Forecast source (local or remote).
        days: Default forecast horizon in days.
        function_url: URL of the remote forecast callable.
        id_token: Identity token sent to the remote callable.
        timeout_seconds: Timeout for remote calls.
        user_id: Default user for CLIs.
        start_date: Optional pinned forecast start date.
    """

    backend: str = "local"
    days: int = DEFAULT_FORECAST_DAYS
    function_url: Optional[str] = None
    id_token: Optional[str] = None
    timeout_seconds: float = 30.0
    user_id: Optional[str] = None
    start_date: Optional[date] = None

    @classmethod
    def from_env(cls) -> "ForecastSettings":
        """Build settings from environment variables (and a local .env).

        Returns:
            ForecastSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        backend = os.getenv("FORECAST_BACKEND", "local").strip().lower()
        if backend not in FORECAST_BACKENDS:
            logger.warning(
                f"Unknown FORECAST_BACKEND '{backend}', using 'local'"
            )
            backend = "local"
        return cls(
            backend=backend,
            days=cls._parse_positive_int(
                os.getenv("FORECAST_DAYS"),
                DEFAULT_FORECAST_DAYS,
                logger=logger,
            ),
            function_url=os.getenv("FORECAST_FUNCTION_URL") or None,
            id_token=os.getenv("FORECAST_ID_TOKEN") or None,
            timeout_seconds=cls._parse_timeout(
                os.getenv("FORECAST_TIMEOUT_SECONDS"),
                logger=logger,
            ),
            user_id=os.getenv("FORECAST_USER_ID") or None,
            start_date=cls._parse_date(
                os.getenv("FORECAST_START_DATE"),
                logger=logger,
            ),
        )

    @staticmethod
    def _parse_positive_int(raw: str | None, default: int, logger) -> int:
        """Parse a positive integer, falling back to the default.

        Args:
            raw: Raw environment value.
            default: Value used when raw is missing or invalid.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value or default.
        """
        if not raw:
            return default
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Invalid FORECAST_DAYS '{raw}', using {default}")
            return default
        if value <= 0:
            logger.warning(f"Invalid FORECAST_DAYS '{raw}', using {default}")
            return default
        return value

    @staticmethod
    def _parse_timeout(raw: str | None, logger) -> float:
        if not raw:
            return 30.0
        try:
            return float(raw)
        except ValueError:
            logger.warning(
                f"Invalid FORECAST_TIMEOUT_SECONDS '{raw}', using 30"
            )
            return 30.0

    @staticmethod
    def _parse_date(raw: str | None, logger) -> date | None:
        if not raw:
            return None
        try:
            return date.fromisoformat(raw.strip())
        except ValueError:
            logger.warning(
                f"Invalid FORECAST_START_DATE '{raw}'. Expected YYYY-MM-DD."
            )
            return None


__all__ = ["ForecastSettings", "FORECAST_BACKENDS"]
