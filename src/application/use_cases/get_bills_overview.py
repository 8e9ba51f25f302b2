"""Use case to list unpaid bills due soon or already late."""

from datetime import datetime
from decimal import Decimal

from src.application.ports.financial_records_repository import (
    FinancialRecordsRepositoryPort,
)
from src.domain.models import BillsOverview
from src.domain.services.normalization import parse_amount
from src.domain.services.reports import get_overdue_bills, get_upcoming_bills
from src.infrastructure.logging.logger import get_app_logger


class GetBillsOverviewUseCase:
    """Split a user's unpaid bills into upcoming and overdue."""

    def __init__(
        self,
        records_repository: FinancialRecordsRepositoryPort,
        logger=None,
    ) -> None:
        self._records_repository = records_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        *,
        now: datetime,
        days: int = 7,
    ) -> BillsOverview:
        """Return upcoming and overdue bills with the total still due.

        Args:
            user_id: Owner of the bills.
            now: Reference instant.
            days: Horizon, in days, for upcoming bills.

        Returns:
            BillsOverview: Bills sorted by due date and their total.
        """
        bills = self._records_repository.fetch_bills(user_id)
        upcoming = get_upcoming_bills(bills, now=now, days=days)
        overdue = get_overdue_bills(bills, now=now)
        total_due = sum(
            (
                abs(parse_amount(bill.amount) or Decimal("0"))
                for bill in [*upcoming, *overdue]
            ),
            start=Decimal("0"),
        )
        self._logger.info(
            f"Bills overview for user={user_id}: upcoming={len(upcoming)}, "
            f"overdue={len(overdue)}, total_due={total_due}"
        )
        return BillsOverview(
            upcoming=upcoming,
            overdue=overdue,
            total_due=total_due,
        )


__all__ = ["GetBillsOverviewUseCase", "BillsOverview"]
