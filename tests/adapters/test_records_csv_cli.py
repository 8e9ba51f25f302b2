"""Tests for the records_csv_cli adapter."""

from decimal import Decimal
from unittest.mock import MagicMock

from click.testing import CliRunner

from src.adapters import records_csv_cli
from src.domain.models import Expense
from src.infrastructure.settings import ForecastSettings


class _Logger:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def warning(self, msg: str) -> None:
        self.messages.append(msg)

    def error(self, msg: str) -> None:
        self.messages.append(msg)

    def info(self, msg: str) -> None:
        self.messages.append(msg)


def _unexpected_repository():
    raise AssertionError("repository should not be built without a user")


def _patch_common(monkeypatch, user_id=None) -> _Logger:
    logger = _Logger()
    monkeypatch.setattr(records_csv_cli, "get_app_logger", lambda: logger)
    monkeypatch.setattr(
        records_csv_cli.ForecastSettings,
        "from_env",
        classmethod(lambda cls: ForecastSettings(user_id=user_id)),
    )
    return logger


def test_export_writes_expenses_to_file(monkeypatch, tmp_path) -> None:
    _patch_common(monkeypatch, user_id="u1")
    repo = MagicMock()
    repo.fetch_expenses.return_value = [
        Expense(
            id="e1",
            name="Market",
            amount=Decimal("12.5"),
            date="2025-01-03",
            category="Food",
        )
    ]
    monkeypatch.setattr(
        records_csv_cli,
        "build_financial_records_repository",
        lambda: repo,
    )
    out_path = tmp_path / "expenses.csv"

    result = CliRunner().invoke(
        records_csv_cli.main,
        ["export", "expenses", "--out", str(out_path)],
    )

    assert result.exit_code == 0
    lines = out_path.read_text(encoding="utf-8").splitlines()
    assert lines[1] == (
        '"e1","Market","12.5","Food","2025-01-03","once","false","false"'
    )
    repo.fetch_expenses.assert_called_once_with("u1")


def test_export_without_user_warns(monkeypatch) -> None:
    logger = _patch_common(monkeypatch)
    monkeypatch.setattr(
        records_csv_cli,
        "build_financial_records_repository",
        _unexpected_repository,
    )

    result = CliRunner().invoke(records_csv_cli.main, ["export", "bills"])

    assert result.exit_code == 0
    assert logger.messages == [
        "FORECAST_USER_ID is required to export records."
    ]


def test_import_prints_normalized_bills(monkeypatch, tmp_path) -> None:
    _patch_common(monkeypatch)
    source = tmp_path / "bills.csv"
    source.write_text(
        "name,amount,category,dueDate,frequency\n"
        "Car cover,$60,insurances,2025-01-04,Monthly\n"
        "Junk,n/a,Other,2025-01-05,monthly\n",
        encoding="utf-8",
    )

    result = CliRunner().invoke(
        records_csv_cli.main,
        ["import", "bills", str(source)],
    )

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        '"id","name","amount","category","frequency","dueDate",'
        '"isRecurring","autoPay","isPaid"',
        '"csv-2","Car cover","60","Insurance","monthly","2025-01-04",'
        '"true","false","false"',
    ]


def test_import_logs_file_level_errors(monkeypatch, tmp_path) -> None:
    logger = _patch_common(monkeypatch)
    source = tmp_path / "bills.csv"
    source.write_text("name,amount\nPower,60\n", encoding="utf-8")

    result = CliRunner().invoke(
        records_csv_cli.main,
        ["import", "bills", str(source)],
    )

    assert result.exit_code == 0
    assert result.output == ""
    assert logger.messages == [
        "Missing required fields: category, dueDate, frequency"
    ]
