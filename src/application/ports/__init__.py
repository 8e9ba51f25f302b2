"""Application ports package."""

from .database import DatabaseEnginePort
from .financial_records_repository import FinancialRecordsRepositoryPort
from .remote_forecast import RemoteForecastError, RemoteForecastPort

__all__ = [
    "DatabaseEnginePort",
    "FinancialRecordsRepositoryPort",
    "RemoteForecastError",
    "RemoteForecastPort",
]
