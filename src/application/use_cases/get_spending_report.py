"""Use case to summarize spending, budgets and goals."""

from datetime import date

from src.application.ports.financial_records_repository import (
    FinancialRecordsRepositoryPort,
)
from src.domain.models import BudgetUtilization, GoalProgress, SpendingReport
from src.domain.services.reports import (
    calculate_budget_utilization,
    calculate_goal_progress,
    calculate_monthly_spending,
    group_expenses_by_category,
)
from src.infrastructure.logging.logger import get_app_logger


class GetSpendingReportUseCase:
    """Compute the spending report shown on dashboards."""

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
        today: date,
        months: int = 6,
    ) -> SpendingReport:
        """Return category totals, monthly trend, budgets and goals.

        Args:
            user_id: Owner of the records.
            today: Reference day for the monthly trend.
            months: Number of months in the trend.

        Returns:
            SpendingReport: Aggregated report.
        """
        expenses = self._records_repository.fetch_expenses(user_id)
        budgets = self._records_repository.fetch_budgets(user_id)
        goals = self._records_repository.fetch_goals(user_id)

        budget_rows = [
            BudgetUtilization(
                budget_id=budget.id,
                name=budget.name,
                category=budget.category,
                amount=budget.amount,
                percentage=calculate_budget_utilization(budget, expenses),
            )
            for budget in budgets
        ]
        goal_rows = [
            GoalProgress(
                goal_id=goal.id,
                name=goal.name,
                target_amount=goal.target_amount,
                current_amount=goal.current_amount,
                percentage=calculate_goal_progress(goal),
            )
            for goal in goals
        ]
        report = SpendingReport(
            categories=group_expenses_by_category(expenses),
            monthly=calculate_monthly_spending(
                expenses,
                today=today,
                months=months,
            ),
            budgets=budget_rows,
            goals=goal_rows,
        )
        self._logger.info(
            f"Spending report for user={user_id}: "
            f"categories={len(report.categories)}, budgets={len(budget_rows)}, "
            f"goals={len(goal_rows)}"
        )
        return report


__all__ = ["GetSpendingReportUseCase", "SpendingReport"]
