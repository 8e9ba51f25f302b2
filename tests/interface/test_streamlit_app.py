"""Tests for the Streamlit app module."""

from datetime import date, datetime
from decimal import Decimal
import json
from unittest.mock import MagicMock

from src.adapters.interface.streamlit import app
from src.application.ports.remote_forecast import RemoteForecastError
from src.domain.models import (
    Bill,
    BillsOverview,
    BudgetUtilization,
    ForecastItem,
    GoalProgress,
    SpendingReport,
)
from src.infrastructure.settings import ForecastSettings


ITEMS = [
    ForecastItem(
        item_id="initial-balance",
        date=datetime(2025, 1, 1),
        amount=Decimal("100"),
        category="balance",
        name="Current Balance",
        type="balance",
        running_balance=Decimal("100"),
    ),
    ForecastItem(
        item_id="b1",
        date=datetime(2025, 1, 3),
        amount=Decimal("-150"),
        category="Housing",
        name="Rent",
        type="bill",
        running_balance=Decimal("-50"),
    ),
]


class _Column:
    def __init__(self, owner) -> None:
        self.owner = owner

    def metric(self, label, value, *args, **kwargs):
        self.owner.metrics[label] = value


class _Sidebar:
    def __init__(self, user: str, choices: dict[str, str]) -> None:
        self.user = user
        self.choices = choices

    def text_input(self, label, value=""):
        return self.user

    def selectbox(self, label, options):
        return self.choices.get(label, list(options)[0])


class _FakeStreamlit:
    def __init__(self, user: str = "u1", choices=None) -> None:
        self.sidebar = _Sidebar(user, choices or {})
        self.metrics: dict[str, str] = {}
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self.dataframes: list = []
        self.charts: list = []
        self.captions: list[str] = []
        self.infos: list[str] = []
        self.progress_values: list[float] = []
        self.downloads: list[dict] = []

    def set_page_config(self, **kwargs):
        self.config_kwargs = kwargs

    def title(self, text: str):
        self.title_text = text

    def columns(self, count: int):
        return [_Column(self) for _ in range(count)]

    def metric(self, label, value, *args, **kwargs):
        self.metrics[label] = value

    def warning(self, text: str):
        self.warnings.append(text)

    def error(self, text: str):
        self.errors.append(text)

    def info(self, text: str):
        self.infos.append(text)

    def caption(self, text: str):
        self.captions.append(text)

    def subheader(self, text: str):
        pass

    def progress(self, value, text=None):
        self.progress_values.append(value)

    def download_button(self, label, data, **kwargs):
        self.downloads.append({"label": label, "data": data, **kwargs})

    def dataframe(self, data, **kwargs):
        self.dataframes.append((data, kwargs))

    def altair_chart(self, chart, **kwargs):
        self.charts.append(chart)


def _patch_main(monkeypatch, fake_st, settings=None) -> MagicMock:
    usage_logger = MagicMock()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", lambda: usage_logger)
    monkeypatch.setattr(
        app.ForecastSettings,
        "from_env",
        classmethod(
            lambda cls: settings or ForecastSettings(
                start_date=date(2025, 1, 1)
            )
        ),
    )
    return usage_logger


def test_fetch_forecast_local_backend(monkeypatch) -> None:
    """_fetch_forecast should call the local use case with a pinned start."""
    calls = {}

    class _FakeUseCase:
        def __init__(self, records_repository):
            calls["repo"] = records_repository

        def execute(self, user_id, **kwargs):
            calls["args"] = (user_id, kwargs)
            return ITEMS

    monkeypatch.setattr(
        app,
        "build_financial_records_repository",
        lambda: "repo",
    )
    monkeypatch.setattr(app, "GetCashflowForecastUseCase", _FakeUseCase)

    result = app._fetch_forecast("u1", date(2025, 1, 1), 30, "local")

    assert result == ITEMS
    assert calls["repo"] == "repo"
    assert calls["args"] == (
        "u1",
        {"start_date": date(2025, 1, 1), "days": 30},
    )


def test_fetch_forecast_remote_backend(monkeypatch) -> None:
    class _FakeRemoteUseCase:
        def __init__(self, remote_forecast):
            assert remote_forecast == "client"

        def execute(self, days):
            return ITEMS[1:]

    monkeypatch.setattr(app, "build_remote_forecast_client", lambda: "client")
    monkeypatch.setattr(app, "GetRemoteForecastUseCase", _FakeRemoteUseCase)

    assert app._fetch_forecast("u1", date(2025, 1, 1), 7, "remote") == ITEMS[1:]


def test_load_forecast_uses_fetch(monkeypatch) -> None:
    """The cached loader should delegate to _fetch_forecast."""
    monkeypatch.setattr(
        app,
        "_fetch_forecast",
        lambda user_id, start_date, days, backend: ["cached", user_id],
    )

    assert app._load_forecast("cache-user", date(2025, 1, 1), 30) == [
        "cached",
        "cache-user",
    ]


def test_main_warns_without_user(monkeypatch) -> None:
    fake_st = _FakeStreamlit(user="")
    usage_logger = _patch_main(monkeypatch, fake_st)

    app.main()

    assert fake_st.title_text == "Family Finance Forecast"
    assert fake_st.warnings == ["Enter a user to load the records."]
    usage_logger.info.assert_not_called()


def test_main_renders_forecast_page(monkeypatch) -> None:
    fake_st = _FakeStreamlit()
    usage_logger = _patch_main(monkeypatch, fake_st)
    requested = {}

    def _fake_load(user_id, start_date, days, backend="local"):
        requested.update(
            user_id=user_id,
            start_date=start_date,
            days=days,
            backend=backend,
        )
        return ITEMS

    monkeypatch.setattr(app, "_load_forecast", _fake_load)
    monkeypatch.setattr(app, "_check_altair_dependencies", lambda: (True, None))

    app.main()

    assert requested == {
        "user_id": "u1",
        "start_date": date(2025, 1, 1),
        "days": 30,
        "backend": "local",
    }
    assert fake_st.metrics["Ending balance"] == "-$50.00"
    assert fake_st.metrics["Lowest balance"] == "-$50.00"
    assert fake_st.warnings
    assert len(fake_st.charts) == 1
    table, kwargs = fake_st.dataframes[0]
    assert table[1]["Name"] == "Rent"
    assert kwargs["hide_index"] is True
    usage_logger.info.assert_called_once_with("page=Forecast user=u1")
    (download,) = fake_st.downloads
    assert download["file_name"] == "forecast-2025-01-01-30d.json"
    payload = json.loads(download["data"])
    assert list(payload[1]) == [
        "itemId",
        "date",
        "amount",
        "category",
        "name",
        "type",
        "runningBalance",
        "description",
    ]
    assert payload[1]["runningBalance"] == -50.0


def test_main_shows_remote_errors(monkeypatch) -> None:
    fake_st = _FakeStreamlit()
    _patch_main(monkeypatch, fake_st)

    def _failing_load(*_args, **_kwargs):
        raise RemoteForecastError("internal", "Failed to generate forecast")

    monkeypatch.setattr(app, "_load_forecast", _failing_load)

    app.main()

    assert fake_st.errors == [
        "Remote forecast failed: Failed to generate forecast"
    ]


def test_main_renders_bills_page(monkeypatch) -> None:
    fake_st = _FakeStreamlit(choices={"Page": "Bills"})
    _patch_main(monkeypatch, fake_st)
    overview = BillsOverview(
        upcoming=[
            Bill(id="b1", name="Power", amount=Decimal("60"),
                 due_date="2025-01-04", auto_pay=True),
        ],
        overdue=[],
        total_due=Decimal("60"),
    )
    seen = {}

    def _fake_load(user_id, now):
        seen["now"] = now
        return overview

    monkeypatch.setattr(app, "_load_bills_overview", _fake_load)

    app.main()

    assert seen["now"] == datetime(2025, 1, 1)
    assert fake_st.metrics["Total due"] == "$60.00"
    assert fake_st.captions == ["No overdue bills."]
    table, _ = fake_st.dataframes[0]
    assert table[0]["Days"] == 3
    assert table[0]["AutoPay"] == "yes"


def test_main_renders_spending_progress_within_bounds(monkeypatch) -> None:
    fake_st = _FakeStreamlit(choices={"Page": "Spending"})
    _patch_main(monkeypatch, fake_st)
    report = SpendingReport(
        categories=[],
        monthly=[],
        budgets=[
            BudgetUtilization(
                budget_id="bud",
                name="Food",
                category="Food",
                amount=Decimal("200"),
                percentage=Decimal("-15"),
            ),
        ],
        goals=[
            GoalProgress(
                goal_id="g1",
                name="Trip",
                target_amount=Decimal("1000"),
                current_amount=Decimal("250"),
                percentage=Decimal("25"),
            ),
        ],
    )
    monkeypatch.setattr(
        app,
        "_load_spending_report",
        lambda user_id, today: report,
    )

    app.main()

    assert fake_st.progress_values == [0.0, 0.25]


def test_progress_value_clamps_to_unit_range() -> None:
    assert app._progress_value(Decimal("150")) == 1.0
    assert app._progress_value(Decimal("-1")) == 0.0
    assert app._progress_value(Decimal("40")) == 0.4
