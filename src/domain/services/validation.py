"""Domain validation helpers."""

from collections.abc import Iterable
from logging import Logger

from src.domain.models import Bill, Expense, Income
from src.domain.services.normalization import parse_amount


def warn_on_sign_anomalies(
    incomes: Iterable[Income],
    bills: Iterable[Bill],
    expenses: Iterable[Expense],
    logger: Logger,
) -> int:
    """Warn when stored amounts violate expected sign conventions.

    Incomes should be positive; bills and expenses are stored positive and
    negated by the forecaster. Amounts are never changed here.

    Args:
        incomes: Income records.
        bills: Bill records.
        expenses: Expense records.
        logger: Logger used for warnings.

    Returns:
        int: Number of records that triggered a warning.
    """
    flagged = 0
    for income in incomes:
        amount = parse_amount(income.amount)
        if amount is not None and amount < 0:
            logger.warning(
                f"Income amount is negative for id={income.id}: {amount}"
            )
            flagged += 1
    for label, records in (("Bill", bills), ("Expense", expenses)):
        for record in records:
            amount = parse_amount(record.amount)
            if amount is not None and amount < 0:
                logger.warning(
                    f"{label} amount is stored negative for "
                    f"id={record.id}: {amount}"
                )
                flagged += 1
    return flagged


__all__ = ["warn_on_sign_anomalies"]
