"""Tests for the bills and expenses CSV use cases."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.records_csv import (
    ExportRecordsCsvUseCase,
    ImportRecordsCsvUseCase,
    records_to_csv,
)
from src.domain.models import Bill, Expense


BILLS_CSV = """name,amount,category,dueDate,frequency,autoPay,isPaid
Rent,"$1,200.00",housing,2025-02-01,Monthly,yes,
Gym,15,subscription,02/10/2025,daily,no,true
Broken,abc,Utilities,2025-02-03,monthly,,
Nameless,10,Utilities,,monthly,,
"""


def test_import_bills_normalizes_rows_and_reports_rejects() -> None:
    logger = MagicMock()

    result = ImportRecordsCsvUseCase(logger=logger).execute(BILLS_CSV, "bills")

    rent, gym = result.records
    assert rent == Bill(
        id="csv-2",
        name="Rent",
        amount=Decimal("1200.00"),
        due_date="2025-02-01",
        frequency="monthly",
        is_paid=False,
        category="Housing",
        is_recurring=True,
        auto_pay=True,
    )
    assert gym.category == "Subscriptions"
    assert gym.due_date == "2025-02-10"
    assert gym.frequency == "once"
    assert gym.is_recurring is False
    assert gym.is_paid is True
    assert result.errors == [
        "Line 4: amount 'abc' is not a number",
        "Line 5: dueDate is required",
    ]
    assert logger.warning.call_count == 2


def test_import_expenses_keeps_ids_and_flags() -> None:
    content = (
        "id,name,amount,category,date,isPlanned\n"
        "e-9,Groceries,-$45.10,foods,2025-03-02T10:00:00Z,TRUE\n"
    )

    result = ImportRecordsCsvUseCase(logger=MagicMock()).execute(
        content,
        "expenses",
    )

    assert result.errors == []
    assert result.records == [
        Expense(
            id="e-9",
            name="Groceries",
            amount=Decimal("-45.10"),
            date="2025-03-02",
            category="Food",
            frequency="once",
            is_recurring=False,
            is_planned=True,
        )
    ]


def test_import_rejects_missing_columns() -> None:
    use_case = ImportRecordsCsvUseCase(logger=MagicMock())

    with pytest.raises(ValueError) as excinfo:
        use_case.execute("name,amount\nRent,10\n", "bills")

    assert str(excinfo.value) == (
        "Missing required fields: category, dueDate, frequency"
    )


@pytest.mark.parametrize("content", ["", "  \n", "name,amount,category,date\n"])
def test_import_rejects_empty_files(content) -> None:
    use_case = ImportRecordsCsvUseCase(logger=MagicMock())

    with pytest.raises(ValueError, match="The CSV file is empty"):
        use_case.execute(content, "expenses")


def test_unknown_kind_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown record kind 'incomes'"):
        ImportRecordsCsvUseCase(logger=MagicMock()).execute(BILLS_CSV, "incomes")


def test_export_bills_quotes_every_value() -> None:
    repo = MagicMock()
    repo.fetch_bills.return_value = [
        Bill(
            id="b1",
            name="Rent",
            amount=Decimal("1200"),
            due_date=date(2025, 1, 5),
            frequency="monthly",
            category="Housing",
            is_recurring=True,
            auto_pay=True,
        )
    ]
    logger = MagicMock()

    content = ExportRecordsCsvUseCase(repo, logger=logger).execute("u1", "bills")

    assert content == (
        '"id","name","amount","category","frequency","dueDate",'
        '"isRecurring","autoPay","isPaid"\n'
        '"b1","Rent","1200","Housing","monthly","2025-01-05",'
        '"true","true","false"\n'
    )
    repo.fetch_bills.assert_called_once_with("u1")
    logger.info.assert_called_once_with("Exporting 1 bills for user=u1")


def test_export_expenses_leaves_unreadable_values_blank() -> None:
    repo = MagicMock()
    repo.fetch_expenses.return_value = [
        Expense(id="e1", name="Market", amount=None, date="soon"),
    ]

    content = ExportRecordsCsvUseCase(repo, logger=MagicMock()).execute(
        "u1",
        "expenses",
    )

    assert content.splitlines()[1] == (
        '"e1","Market","","","","once","false","false"'
    )


def test_exported_bills_import_unchanged() -> None:
    bill = Bill(
        id="b1",
        name="Insurance",
        amount=Decimal("89.99"),
        due_date="2025-04-01",
        frequency="quarterly",
        category="Insurance",
        is_recurring=True,
    )

    result = ImportRecordsCsvUseCase(logger=MagicMock()).execute(
        records_to_csv("bills", [bill]),
        "bills",
    )

    assert result.records == [bill]
