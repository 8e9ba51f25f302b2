"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date, datetime
import importlib
import json

import streamlit as st

from src.application.ports.remote_forecast import RemoteForecastError
from src.application.use_cases.get_bills_overview import (
    BillsOverview,
    GetBillsOverviewUseCase,
)
from src.application.use_cases.get_cashflow_forecast import (
    ForecastItem,
    GetCashflowForecastUseCase,
)
from src.application.use_cases.get_remote_forecast import (
    GetRemoteForecastUseCase,
)
from src.application.use_cases.get_spending_report import (
    GetSpendingReportUseCase,
    SpendingReport,
)
from src.domain.services.reports import days_until, format_currency
from src.infrastructure.container import (
    build_financial_records_repository,
    build_remote_forecast_client,
)
from src.infrastructure.logging.logger import get_usage_logger
from src.infrastructure.settings import ForecastSettings
from src.adapters.interface.streamlit.forecast_chart import (
    build_forecast_chart,
    lowest_balance,
)


HORIZON_OPTIONS = {"30 days": 30, "90 days": 90, "180 days": 180, "1 year": 365}


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Return whether numpy/pandas are importable in a usable state."""
    try:
        numpy = importlib.import_module("numpy")
        pandas = importlib.import_module("pandas")
    except ImportError as exc:
        return False, f"Chart dependencies are not installed: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "numpy is installed but incomplete (no ndarray)."
    if not hasattr(pandas, "Timestamp"):
        return False, "pandas is installed but incomplete (no Timestamp)."
    return True, None


def _fetch_forecast(
    user_id: str,
    start_date: date,
    days: int,
    backend: str,
) -> Sequence[ForecastItem]:
    """Fetch the forecast from the selected backend."""
    if backend == "remote":
        use_case = GetRemoteForecastUseCase(
            remote_forecast=build_remote_forecast_client()
        )
        return use_case.execute(days=days)
    use_case = GetCashflowForecastUseCase(
        records_repository=build_financial_records_repository()
    )
    return use_case.execute(user_id, start_date=start_date, days=days)


@st.cache_data(show_spinner=False)
def _load_forecast(
    user_id: str,
    start_date: date,
    days: int,
    backend: str = "local",
) -> Sequence[ForecastItem]:
    """Cached wrapper around _fetch_forecast for Streamlit sessions."""
    return _fetch_forecast(user_id, start_date, days, backend)


def _fetch_bills_overview(user_id: str, now: datetime) -> BillsOverview:
    """Fetch upcoming and overdue bills."""
    use_case = GetBillsOverviewUseCase(
        records_repository=build_financial_records_repository()
    )
    return use_case.execute(user_id, now=now)


@st.cache_data(show_spinner=False)
def _load_bills_overview(user_id: str, now: datetime) -> BillsOverview:
    """Cached wrapper around _fetch_bills_overview."""
    return _fetch_bills_overview(user_id, now)


def _fetch_spending_report(user_id: str, today: date) -> SpendingReport:
    """Fetch the spending report."""
    use_case = GetSpendingReportUseCase(
        records_repository=build_financial_records_repository()
    )
    return use_case.execute(user_id, today=today)


@st.cache_data(show_spinner=False)
def _load_spending_report(user_id: str, today: date) -> SpendingReport:
    """Cached wrapper around _fetch_spending_report."""
    return _fetch_spending_report(user_id, today)


def _forecast_table(items: Sequence[ForecastItem]) -> list[dict[str, str]]:
    """Return table rows for the forecast items."""
    return [
        {
            "Date": item.date.date().isoformat(),
            "Type": item.type,
            "Name": item.name,
            "Amount": format_currency(item.amount),
            "Balance": format_currency(item.running_balance),
            "Description": item.description,
        }
        for item in items
    ]


def _forecast_json(items: Sequence[ForecastItem]) -> str:
    """Serialize forecast items with their camelCase payload."""
    return json.dumps([item.to_dict() for item in items], indent=2)


def _progress_value(percentage) -> float:
    """Convert a percentage to the 0..1 range accepted by st.progress."""
    return min(max(float(percentage) / 100, 0.0), 1.0)


def _bills_table(bills, now: datetime) -> list[dict[str, str | int]]:
    """Return table rows for bills with days left until due."""
    return [
        {
            "Name": bill.name,
            "Category": bill.category or "Bill",
            "Amount": format_currency(bill.amount),
            "Due": str(bill.due_date),
            "Days": days_until(bill.due_date, now=now),
            "AutoPay": "yes" if bill.auto_pay else "no",
        }
        for bill in bills
    ]


def _render_forecast(
    user_id: str,
    today: date,
    backend: str,
) -> None:
    """Render the forecast page."""
    horizon = st.sidebar.selectbox("Horizon", list(HORIZON_OPTIONS))
    days = HORIZON_OPTIONS[horizon]
    try:
        items = _load_forecast(user_id, today, days, backend)
    except RemoteForecastError as exc:
        st.error(f"Remote forecast failed: {exc.message}")
        return

    if not items:
        st.warning("The forecast is empty.")
        return

    opening_col, closing_col, lowest_col = st.columns(3)
    opening_col.metric(
        "Starting balance",
        format_currency(items[0].running_balance),
    )
    closing_col.metric(
        "Ending balance",
        format_currency(items[-1].running_balance),
    )
    lowest = lowest_balance(items)
    lowest_col.metric("Lowest balance", format_currency(lowest))
    if lowest is not None and lowest < 0:
        st.warning("The balance goes negative within the forecast window.")

    ok, message = _check_altair_dependencies()
    if ok:
        st.altair_chart(build_forecast_chart(items), width="stretch")
    else:
        st.info(message)
    st.dataframe(_forecast_table(items), width="stretch", hide_index=True)
    st.download_button(
        "Download forecast (JSON)",
        data=_forecast_json(items),
        file_name=f"forecast-{today.isoformat()}-{days}d.json",
        mime="application/json",
    )


def _render_bills(user_id: str, now: datetime) -> None:
    """Render the bills page."""
    overview = _load_bills_overview(user_id, now)
    st.metric("Total due", format_currency(overview.total_due))
    st.subheader("Overdue")
    if overview.overdue:
        st.dataframe(
            _bills_table(overview.overdue, now),
            width="stretch",
            hide_index=True,
        )
    else:
        st.caption("No overdue bills.")
    st.subheader("Due in the next 7 days")
    if overview.upcoming:
        st.dataframe(
            _bills_table(overview.upcoming, now),
            width="stretch",
            hide_index=True,
        )
    else:
        st.caption("No upcoming bills.")


def _render_spending(user_id: str, today: date) -> None:
    """Render the spending page."""
    report = _load_spending_report(user_id, today)
    st.subheader("Spending by category")
    st.dataframe(
        [
            {
                "Category": row.category,
                "Total": format_currency(row.total),
                "Count": row.count,
            }
            for row in report.categories
        ],
        width="stretch",
        hide_index=True,
    )
    st.subheader("Monthly spending")
    st.dataframe(
        [
            {"Month": row.month, "Total": format_currency(row.total)}
            for row in report.monthly
        ],
        width="stretch",
        hide_index=True,
    )
    st.subheader("Budgets")
    for budget in report.budgets:
        st.progress(
            _progress_value(budget.percentage),
            text=f"{budget.name}: {budget.percentage:.0f}% of "
            f"{format_currency(budget.amount)}",
        )
    st.subheader("Goals")
    for goal in report.goals:
        st.progress(
            _progress_value(goal.percentage),
            text=f"{goal.name}: {format_currency(goal.current_amount)} of "
            f"{format_currency(goal.target_amount)}",
        )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Family Finance Forecast", layout="wide")
    st.title("Family Finance Forecast")

    settings = ForecastSettings.from_env()
    user_id = st.sidebar.text_input("User", value=settings.user_id or "")
    page = st.sidebar.selectbox("Page", ["Forecast", "Bills", "Spending"])
    if not user_id:
        st.warning("Enter a user to load the records.")
        return

    get_usage_logger().info(f"page={page} user={user_id}")
    today = settings.start_date or date.today()
    if page == "Forecast":
        _render_forecast(user_id, today, settings.backend)
    elif page == "Bills":
        _render_bills(user_id, datetime.combine(today, datetime.min.time()))
    else:
        _render_spending(user_id, today)


if __name__ == "__main__":  # pragma: no cover
    main()
