"""Helpers to render the forecast running balance with Altair."""

from collections.abc import Sequence
from decimal import Decimal

import altair as alt

from src.domain.constants import FORECAST_ITEM_TYPES
from src.domain.models import ForecastItem
from src.domain.services.reports import format_currency


def build_forecast_chart_data(
    items: Sequence[ForecastItem],
) -> list[dict[str, str | float]]:
    """Prepare Altair-ready rows from forecast items.

    Args:
        items: Forecast items, anchor first.

    Returns:
        One row per item with the running balance and tooltip labels.
    """
    return [
        {
            "date": item.date.isoformat(),
            "balance": float(item.running_balance),
            "amount": float(item.amount),
            "name": item.name,
            "type": item.type,
            "amount_label": format_currency(item.amount),
            "balance_label": format_currency(item.running_balance),
        }
        for item in items
    ]


def lowest_balance(items: Sequence[ForecastItem]) -> Decimal | None:
    """Return the lowest running balance of the forecast, if any."""
    if not items:
        return None
    return min(item.running_balance for item in items)


def build_forecast_chart(
    items: Sequence[ForecastItem],
    height: int = 360,
) -> alt.LayerChart:
    """Build a step line of the running balance with a zero rule.

    Args:
        items: Forecast items to plot.
        height: Chart height in pixels.

    Returns:
        alt.LayerChart: Line, points and zero-balance rule.
    """
    data = build_forecast_chart_data(items)
    base = alt.Chart(alt.Data(values=data)).encode(
        x=alt.X("date:T", title=None),
        y=alt.Y("balance:Q", title="Balance"),
    )
    line = base.mark_line(interpolate="step-after", color="#1b9aaa")
    points = base.mark_circle(size=60).encode(
        color=alt.Color(
            "type:N",
            scale=alt.Scale(
                domain=list(FORECAST_ITEM_TYPES),
                range=["#6c8ead", "#2e7d32", "#e76f51", "#f4a261", "#f6c453"],
            ),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("date:T"),
            alt.Tooltip("name:N"),
            alt.Tooltip("type:N"),
            alt.Tooltip("amount_label:N", title="Amount"),
            alt.Tooltip("balance_label:N", title="Balance"),
        ],
    )
    zero_rule = alt.Chart(alt.Data(values=[{"zero": 0}])).mark_rule(
        strokeDash=[4, 4],
        color="#9aa5b1",
    ).encode(y="zero:Q")
    return alt.layer(line, points, zero_rule).properties(height=height)


__all__ = [
    "build_forecast_chart",
    "build_forecast_chart_data",
    "lowest_balance",
]
