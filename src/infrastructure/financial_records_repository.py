"""SQLAlchemy-backed repository for user financial records."""

from decimal import Decimal

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.financial_records_repository import (
    FinancialRecordsRepositoryPort,
)
from src.domain.models import (
    BalanceAdjustment,
    Bill,
    Budget,
    Expense,
    FinancialProfile,
    Goal,
    Income,
)
from src.domain.services.normalization import (
    normalize_bill_frequency,
    normalize_frequency,
)
from src.utils.decimal_utils import parse_decimal


SELECT_PROFILE_SQL = text(
    """
    SELECT user_id, current_balance, currency, last_updated
    FROM financial_profiles
    WHERE user_id = :user_id
    LIMIT 1
    """
)

SELECT_INCOMES_SQL = text(
    """
    SELECT id, name, amount, date, frequency, category, is_recurring
    FROM incomes
    WHERE user_id = :user_id
    ORDER BY date, id
    """
)

SELECT_BILLS_SQL = text(
    """
    SELECT id, name, amount, due_date, frequency, is_paid, category,
           is_recurring, auto_pay
    FROM bills
    WHERE user_id = :user_id
    ORDER BY due_date, id
    """
)

SELECT_EXPENSES_SQL = text(
    """
    SELECT id, name, amount, date, category, frequency, is_recurring,
           is_planned
    FROM expenses
    WHERE user_id = :user_id
    ORDER BY date, id
    """
)

SELECT_ADJUSTMENTS_SQL = text(
    """
    SELECT id, date, amount, reason
    FROM balance_adjustments
    WHERE user_id = :user_id
    ORDER BY date, id
    """
)

SELECT_BUDGETS_SQL = text(
    """
    SELECT id, name, amount, category, start_date, end_date, period
    FROM budgets
    WHERE user_id = :user_id
    ORDER BY start_date, id
    """
)

SELECT_GOALS_SQL = text(
    """
    SELECT id, name, target_amount, current_amount, target_date, category,
           is_completed
    FROM goals
    WHERE user_id = :user_id
    ORDER BY target_date, id
    """
)


class SqlAlchemyFinancialRecordsRepository(FinancialRecordsRepositoryPort):
    """Repository reading user-scoped records from the finance database.

    Dates are passed through untouched. Record amounts that are not numeric
    come back as None so the domain services can skip them; balances, budget
    limits and goal amounts fall back to zero. Daily bill frequencies read
    as once.
    """

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the finance engine.
        """
        self._db_port = db_port

    def fetch_profile(self, user_id: str) -> FinancialProfile | None:
        rows = self._fetch(SELECT_PROFILE_SQL, user_id)
        if not rows:
            return None
        row = rows[0]
        return FinancialProfile(
            user_id=row.user_id,
            current_balance=_decimal_or_zero(row.current_balance),
            currency=row.currency or "USD",
            last_updated=row.last_updated,
        )

    def fetch_incomes(self, user_id: str) -> list[Income]:
        return [
            Income(
                id=str(row.id),
                name=row.name,
                amount=parse_decimal(row.amount),
                date=row.date,
                frequency=normalize_frequency(row.frequency),
                category=row.category,
                is_recurring=bool(row.is_recurring),
            )
            for row in self._fetch(SELECT_INCOMES_SQL, user_id)
        ]

    def fetch_bills(self, user_id: str) -> list[Bill]:
        return [
            Bill(
                id=str(row.id),
                name=row.name,
                amount=parse_decimal(row.amount),
                due_date=row.due_date,
                frequency=normalize_bill_frequency(row.frequency),
                is_paid=bool(row.is_paid),
                category=row.category,
                is_recurring=bool(row.is_recurring),
                auto_pay=bool(row.auto_pay),
            )
            for row in self._fetch(SELECT_BILLS_SQL, user_id)
        ]

    def fetch_expenses(self, user_id: str) -> list[Expense]:
        return [
            Expense(
                id=str(row.id),
                name=row.name,
                amount=parse_decimal(row.amount),
                date=row.date,
                category=row.category,
                frequency=normalize_frequency(row.frequency),
                is_recurring=bool(row.is_recurring),
                is_planned=bool(row.is_planned),
            )
            for row in self._fetch(SELECT_EXPENSES_SQL, user_id)
        ]

    def fetch_balance_adjustments(
        self,
        user_id: str,
    ) -> list[BalanceAdjustment]:
        return [
            BalanceAdjustment(
                id=str(row.id),
                date=row.date,
                amount=parse_decimal(row.amount),
                reason=row.reason,
            )
            for row in self._fetch(SELECT_ADJUSTMENTS_SQL, user_id)
        ]

    def fetch_budgets(self, user_id: str) -> list[Budget]:
        return [
            Budget(
                id=str(row.id),
                name=row.name,
                amount=_decimal_or_zero(row.amount),
                category=row.category,
                start_date=row.start_date,
                end_date=row.end_date,
                period=row.period or "monthly",
            )
            for row in self._fetch(SELECT_BUDGETS_SQL, user_id)
        ]

    def fetch_goals(self, user_id: str) -> list[Goal]:
        return [
            Goal(
                id=str(row.id),
                name=row.name,
                target_amount=_decimal_or_zero(row.target_amount),
                current_amount=_decimal_or_zero(row.current_amount),
                target_date=row.target_date,
                category=row.category,
                is_completed=bool(row.is_completed),
            )
            for row in self._fetch(SELECT_GOALS_SQL, user_id)
        ]

    def _fetch(self, query, user_id: str) -> list:
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            return conn.execute(query, {"user_id": user_id}).all()


def _decimal_or_zero(value) -> Decimal:
    parsed = parse_decimal(value)
    return Decimal("0") if parsed is None else parsed


__all__ = ["SqlAlchemyFinancialRecordsRepository"]
