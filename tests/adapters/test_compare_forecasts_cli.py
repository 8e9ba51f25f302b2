"""Tests for the compare_forecasts_cli adapter."""

from datetime import date
from decimal import Decimal

from src.adapters import compare_forecasts_cli
from src.application.use_cases.compare_forecasts import (
    ForecastComparison,
    ForecastDiff,
    ForecastSnapshot,
)
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


def _snapshot(name: str, closing: str) -> ForecastSnapshot:
    return ForecastSnapshot(
        name=name,
        day_count=2,
        first_day=date(2025, 1, 2),
        last_day=date(2025, 1, 5),
        total_income=Decimal("50"),
        total_expenses=Decimal("-30"),
        closing_balance=Decimal(closing),
    )


def _patch_settings(monkeypatch, settings: ForecastSettings) -> _Logger:
    logger = _Logger()
    monkeypatch.setattr(compare_forecasts_cli, "get_app_logger", lambda: logger)
    monkeypatch.setattr(
        compare_forecasts_cli.ForecastSettings,
        "from_env",
        classmethod(lambda cls: settings),
    )
    return logger


def test_main_runs_use_case_and_prints_result(monkeypatch, capsys) -> None:
    """The CLI should wire both sides and print the summary."""
    _patch_settings(
        monkeypatch,
        ForecastSettings(
            user_id="u1",
            start_date=date(2025, 1, 1),
            function_url="https://fn.test",
            id_token="tok",
        ),
    )
    dummy_repo = object()
    dummy_client = object()
    comparison = ForecastComparison(
        left=_snapshot("local", "120"),
        right=_snapshot("remote", "110"),
        diff=ForecastDiff(
            day_count_delta=0,
            missing_days=[date(2025, 1, 3)],
            extra_days=[date(2025, 1, 5)],
            income_delta=Decimal("0"),
            expenses_delta=Decimal("0"),
            closing_balance_delta=Decimal("-10"),
        ),
        shape_matches=True,
    )

    class _FakeUseCase:
        def __init__(self, local_forecast, remote_forecast, logger=None):
            assert local_forecast._records_repository is dummy_repo
            assert remote_forecast is dummy_client
            assert logger is not None

        def execute(self, user_id, **kwargs):
            assert user_id == "u1"
            assert kwargs["start_date"] == date(2025, 1, 1)
            return comparison

    monkeypatch.setattr(
        compare_forecasts_cli,
        "build_financial_records_repository",
        lambda: dummy_repo,
    )
    monkeypatch.setattr(
        compare_forecasts_cli,
        "build_remote_forecast_client",
        lambda settings: dummy_client,
    )
    monkeypatch.setattr(
        compare_forecasts_cli,
        "CompareForecastsUseCase",
        _FakeUseCase,
    )

    compare_forecasts_cli.main()

    out = capsys.readouterr().out
    assert "Forecast comparison" in out
    assert "Deltas (right - left)" in out
    assert "closing=-10" in out
    assert "Missing on right: 2025-01-03" in out
    assert "Extra on right: 2025-01-05" in out
    assert "Shape matches: True" in out


def test_main_requires_user(monkeypatch, capsys) -> None:
    logger = _patch_settings(monkeypatch, ForecastSettings())

    compare_forecasts_cli.main()

    assert capsys.readouterr().out == ""
    assert "FORECAST_USER_ID" in logger.messages[0]


def test_main_logs_missing_function_url(monkeypatch, capsys) -> None:
    logger = _patch_settings(monkeypatch, ForecastSettings(user_id="u1"))

    compare_forecasts_cli.main()

    assert capsys.readouterr().out == ""
    assert "FORECAST_FUNCTION_URL" in logger.messages[0]
