"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.financial_records_repository import (
    FinancialRecordsRepositoryPort,
)
from src.application.ports.remote_forecast import RemoteForecastPort
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.financial_records_repository import (
    SqlAlchemyFinancialRecordsRepository,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.remote_forecast_client import (
    HttpsCallableForecastClient,
)
from src.infrastructure.settings import ForecastSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_financial_records_repository(
    db_port: DatabaseEnginePort | None = None,
) -> FinancialRecordsRepositoryPort:
    """Return the repository reading user records."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyFinancialRecordsRepository(resolved_db)


def build_remote_forecast_client(
    settings: ForecastSettings | None = None,
) -> RemoteForecastPort:
    """Return the client for the remote forecast callable."""
    resolved = settings or ForecastSettings.from_env()
    if not resolved.function_url:
        raise RuntimeError(
            "Remote forecast requires a FORECAST_FUNCTION_URL value."
        )
    return HttpsCallableForecastClient(
        resolved.function_url,
        resolved.id_token,
        timeout_seconds=resolved.timeout_seconds,
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_financial_records_repository",
    "build_remote_forecast_client",
]
