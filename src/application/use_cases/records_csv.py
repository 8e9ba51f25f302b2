"""Use cases to import and export bills and expenses as CSV.

Files use the camelCase headers of the bulk editor (``dueDate``, ``autoPay``,
``isPaid``...). Imported rows are normalized the way typed input is: amounts
lose currency symbols and separators, categories snap to the known list and
frequencies to the supported values.
"""

from dataclasses import dataclass, field
import csv
import io

from dateutil import parser as date_parser
import pandas as pd

from src.application.ports.financial_records_repository import (
    FinancialRecordsRepositoryPort,
)
from src.domain.constants import (
    BILL_CATEGORIES,
    EXPENSE_CATEGORIES,
    FREQUENCY_ONCE,
)
from src.domain.models import Bill, Expense
from src.domain.services.normalization import (
    match_category,
    normalize_amount,
    normalize_bill_frequency,
    normalize_frequency,
    parse_flag,
    parse_instant,
)
from src.infrastructure.logging.logger import get_app_logger


RECORD_KINDS = ("bills", "expenses")

CSV_COLUMNS = {
    "bills": (
        "id",
        "name",
        "amount",
        "category",
        "frequency",
        "dueDate",
        "isRecurring",
        "autoPay",
        "isPaid",
    ),
    "expenses": (
        "id",
        "name",
        "amount",
        "category",
        "date",
        "frequency",
        "isRecurring",
        "isPlanned",
    ),
}

REQUIRED_COLUMNS = {
    "bills": ("name", "amount", "category", "dueDate", "frequency"),
    "expenses": ("name", "amount", "category", "date"),
}


@dataclass(frozen=True)
class CsvImportResult:
    """Records read from a CSV file.

    Attributes:
        kind: ``bills`` or ``expenses``.
        records: Normalized records, in file order.
        errors: One message per rejected row, with its line number.
    """

    kind: str
    records: list[Bill] | list[Expense]
    errors: list[str] = field(default_factory=list)


def records_to_csv(kind: str, records) -> str:
    """Serialize bills or expenses with every value quoted.

    Args:
        kind: ``bills`` or ``expenses``.
        records: Records of that kind.

    Returns:
        str: CSV text with a header row, dates as ``YYYY-MM-DD``.
    """
    _check_kind(kind)
    to_row = _bill_row if kind == "bills" else _expense_row
    frame = pd.DataFrame(
        [to_row(record) for record in records],
        columns=list(CSV_COLUMNS[kind]),
    )
    return frame.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")


class ImportRecordsCsvUseCase:
    """Parse and normalize a bills or expenses CSV file."""

    def __init__(self, logger=None) -> None:
        self._logger = logger or get_app_logger()

    def execute(self, content: str, kind: str) -> CsvImportResult:
        """Read records from CSV text.

        Rows that cannot be read are reported in ``errors`` and skipped; the
        other rows are still returned.

        Args:
            content: CSV text with a header row.
            kind: ``bills`` or ``expenses``.

        Returns:
            CsvImportResult: Normalized records and row errors.

        Raises:
            ValueError: If the kind is unknown, the file is empty or malformed,
                or a required column is missing.
        """
        _check_kind(kind)
        frame = self._read_frame(content)
        missing = [
            column
            for column in REQUIRED_COLUMNS[kind]
            if column not in frame.columns
        ]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")

        if kind == "bills":
            to_record = self._bill_from_row
        else:
            to_record = self._expense_from_row
        records = []
        errors = []
        for line, row in enumerate(frame.to_dict(orient="records"), start=2):
            try:
                records.append(to_record(row, line))
            except ValueError as exc:
                message = f"Line {line}: {exc}"
                self._logger.warning(f"Skipping CSV row. {message}")
                errors.append(message)
        self._logger.info(
            f"Imported {len(records)} {kind} from CSV "
            f"({len(errors)} rejected)"
        )
        return CsvImportResult(kind=kind, records=records, errors=errors)

    @staticmethod
    def _read_frame(content: str) -> pd.DataFrame:
        if not content or not content.strip():
            raise ValueError("The CSV file is empty")
        try:
            frame = pd.read_csv(
                io.StringIO(content.strip()),
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
            )
        except pd.errors.EmptyDataError as exc:
            raise ValueError("The CSV file is empty") from exc
        except pd.errors.ParserError as exc:
            raise ValueError(f"The CSV file is malformed: {exc}") from exc
        if frame.empty:
            raise ValueError("The CSV file is empty")
        frame.columns = [str(column).strip() for column in frame.columns]
        return frame

    @staticmethod
    def _bill_from_row(row: dict, line: int) -> Bill:
        name, amount = _name_and_amount(row)
        due = _parse_csv_date(_cell(row, "dueDate"), "dueDate")
        frequency = normalize_bill_frequency(_cell(row, "frequency"))
        return Bill(
            id=_cell(row, "id") or f"csv-{line}",
            name=name,
            amount=amount,
            due_date=due,
            frequency=frequency,
            is_paid=parse_flag(_cell(row, "isPaid")),
            category=match_category(_cell(row, "category"), BILL_CATEGORIES),
            is_recurring=parse_flag(
                _cell(row, "isRecurring"),
                default=frequency != FREQUENCY_ONCE,
            ),
            auto_pay=parse_flag(_cell(row, "autoPay")),
        )

    @staticmethod
    def _expense_from_row(row: dict, line: int) -> Expense:
        name, amount = _name_and_amount(row)
        occurred = _parse_csv_date(_cell(row, "date"), "date")
        frequency = normalize_frequency(_cell(row, "frequency"))
        return Expense(
            id=_cell(row, "id") or f"csv-{line}",
            name=name,
            amount=amount,
            date=occurred,
            category=match_category(
                _cell(row, "category"),
                EXPENSE_CATEGORIES,
            ),
            frequency=frequency,
            is_recurring=parse_flag(
                _cell(row, "isRecurring"),
                default=frequency != FREQUENCY_ONCE,
            ),
            is_planned=parse_flag(_cell(row, "isPlanned")),
        )


class ExportRecordsCsvUseCase:
    """Export a user's bills or expenses as CSV text."""

    def __init__(
        self,
        records_repository: FinancialRecordsRepositoryPort,
        logger=None,
    ) -> None:
        self._records_repository = records_repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, kind: str) -> str:
        _check_kind(kind)
        if kind == "bills":
            records = self._records_repository.fetch_bills(user_id)
        else:
            records = self._records_repository.fetch_expenses(user_id)
        self._logger.info(
            f"Exporting {len(records)} {kind} for user={user_id}"
        )
        return records_to_csv(kind, records)


def _check_kind(kind: str) -> None:
    if kind not in RECORD_KINDS:
        raise ValueError(
            f"Unknown record kind '{kind}'. Expected one of: "
            f"{', '.join(RECORD_KINDS)}"
        )


def _cell(row: dict, column: str) -> str | None:
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _name_and_amount(row: dict):
    name = _cell(row, "name")
    if not name:
        raise ValueError("name is required")
    raw_amount = _cell(row, "amount")
    amount = normalize_amount(raw_amount)
    if amount is None:
        raise ValueError(f"amount {raw_amount!r} is not a number")
    return name, amount


def _parse_csv_date(raw: str | None, column: str) -> str:
    """Return the cell as ``YYYY-MM-DD``; ISO first, then free-form dates."""
    cleaned = (raw or "").strip("\"' ")
    if not cleaned:
        raise ValueError(f"{column} is required")
    when = parse_instant(cleaned)
    if when is None:
        try:
            when = date_parser.parse(cleaned)
        except (ValueError, OverflowError):
            when = None
    if when is None:
        raise ValueError(f"{column} {raw!r} is not a date")
    return when.date().isoformat()


def _format_date(value) -> str:
    when = parse_instant(value)
    return when.date().isoformat() if when is not None else ""


def _format_flag(value: bool) -> str:
    return "true" if value else "false"


def _format_amount(value) -> str:
    return "" if value is None else str(value)


def _bill_row(bill: Bill) -> dict[str, str]:
    return {
        "id": bill.id,
        "name": bill.name,
        "amount": _format_amount(bill.amount),
        "category": bill.category or "",
        "frequency": bill.frequency,
        "dueDate": _format_date(bill.due_date),
        "isRecurring": _format_flag(bill.is_recurring),
        "autoPay": _format_flag(bill.auto_pay),
        "isPaid": _format_flag(bill.is_paid),
    }


def _expense_row(expense: Expense) -> dict[str, str]:
    return {
        "id": expense.id,
        "name": expense.name,
        "amount": _format_amount(expense.amount),
        "category": expense.category or "",
        "date": _format_date(expense.date),
        "frequency": expense.frequency,
        "isRecurring": _format_flag(expense.is_recurring),
        "isPlanned": _format_flag(expense.is_planned),
    }


__all__ = [
    "RECORD_KINDS",
    "CSV_COLUMNS",
    "REQUIRED_COLUMNS",
    "CsvImportResult",
    "records_to_csv",
    "ImportRecordsCsvUseCase",
    "ExportRecordsCsvUseCase",
]
