"""Application use cases package."""

from .get_cashflow_forecast import GetCashflowForecastUseCase, ForecastItem
from .get_remote_forecast import GetRemoteForecastUseCase
from .compare_forecasts import (
    CompareForecastsUseCase,
    ForecastComparison,
    ForecastDiff,
    ForecastSnapshot,
)
from .get_bills_overview import GetBillsOverviewUseCase, BillsOverview
from .get_spending_report import GetSpendingReportUseCase, SpendingReport
from .records_csv import (
    CsvImportResult,
    ExportRecordsCsvUseCase,
    ImportRecordsCsvUseCase,
)

__all__ = [
    "GetCashflowForecastUseCase",
    "ForecastItem",
    "GetRemoteForecastUseCase",
    "CompareForecastsUseCase",
    "ForecastComparison",
    "ForecastDiff",
    "ForecastSnapshot",
    "GetBillsOverviewUseCase",
    "BillsOverview",
    "GetSpendingReportUseCase",
    "SpendingReport",
    "CsvImportResult",
    "ExportRecordsCsvUseCase",
    "ImportRecordsCsvUseCase",
]
