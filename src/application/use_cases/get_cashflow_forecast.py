"""Use case to project a user's cash flow from stored records."""

from datetime import date, datetime
from decimal import Decimal

from src.application.ports.financial_records_repository import (
    FinancialRecordsRepositoryPort,
)
from src.domain.constants import DEFAULT_FORECAST_DAYS
from src.domain.models import ForecastItem
from src.domain.services.forecast import generate_forecast
from src.domain.services.validation import warn_on_sign_anomalies
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


class GetCashflowForecastUseCase:
    """Build the cash-flow forecast of a user."""

    def __init__(
        self,
        records_repository: FinancialRecordsRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            records_repository: Port providing the user's records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._records_repository = records_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        *,
        start_date: date | datetime,
        days: int = DEFAULT_FORECAST_DAYS,
        expand_recurring: bool = True,
        starting_balance: Decimal | None = None,
    ) -> list[ForecastItem]:
        """Return the forecast items for the window starting at start_date.

        Args:
            user_id: Owner of the records.
            start_date: Start of the forecast window (never defaulted).
            days: Window length in days.
            expand_recurring: Expand recurring records into occurrences.
            starting_balance: Optional balance override; defaults to the
                profile balance, or 0 when the user has no profile.

        Returns:
            list[ForecastItem]: Anchor first, then events by date.

        Raises:
            ValueError: If ``days`` is not a positive integer.
        """
        if days <= 0:
            raise ValueError(f"Forecast horizon must be positive, got {days}")

        balance = (
            coerce_decimal(starting_balance)
            if starting_balance is not None
            else self._load_balance(user_id)
        )
        incomes = self._records_repository.fetch_incomes(user_id)
        bills = self._records_repository.fetch_bills(user_id)
        expenses = self._records_repository.fetch_expenses(user_id)
        adjustments = self._records_repository.fetch_balance_adjustments(
            user_id
        )
        self._logger.info(
            f"Fetched records for user={user_id}: incomes={len(incomes)}, "
            f"bills={len(bills)}, expenses={len(expenses)}, "
            f"adjustments={len(adjustments)}"
        )
        warn_on_sign_anomalies(incomes, bills, expenses, self._logger)

        items = generate_forecast(
            start_date=start_date,
            days=days,
            starting_balance=balance,
            incomes=incomes,
            bills=bills,
            expenses=expenses,
            adjustments=adjustments,
            expand_recurring=expand_recurring,
        )
        self._logger.info(
            f"Forecast generated for user={user_id}: items={len(items)}, "
            f"days={days}, closing_balance={items[-1].running_balance}"
        )
        return items

    def _load_balance(self, user_id: str) -> Decimal:
        profile = self._records_repository.fetch_profile(user_id)
        if profile is None:
            self._logger.warning(
                f"No financial profile for user={user_id}; starting at 0"
            )
            return Decimal("0")
        return coerce_decimal(profile.current_balance)


__all__ = ["GetCashflowForecastUseCase", "ForecastItem"]
