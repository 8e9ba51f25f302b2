"""Port for user-scoped financial record reads."""

from typing import Protocol

from src.domain.models import (
    BalanceAdjustment,
    Bill,
    Budget,
    Expense,
    FinancialProfile,
    Goal,
    Income,
)


class FinancialRecordsRepositoryPort(Protocol):
    """Port exposing the records needed by forecasts and reports."""

    def fetch_profile(self, user_id: str) -> FinancialProfile | None:
        """Return the balance profile of a user, None when missing."""

    def fetch_incomes(self, user_id: str) -> list[Income]:
        """Return the incomes of a user."""

    def fetch_bills(self, user_id: str) -> list[Bill]:
        """Return the bills of a user."""

    def fetch_expenses(self, user_id: str) -> list[Expense]:
        """Return the expenses of a user."""

    def fetch_balance_adjustments(
        self,
        user_id: str,
    ) -> list[BalanceAdjustment]:
        """Return the manual balance adjustments of a user."""

    def fetch_budgets(self, user_id: str) -> list[Budget]:
        """Return the budgets of a user."""

    def fetch_goals(self, user_id: str) -> list[Goal]:
        """Return the savings goals of a user."""


__all__ = ["FinancialRecordsRepositoryPort"]
