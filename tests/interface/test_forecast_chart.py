"""Tests for the forecast chart helpers."""

from datetime import datetime
from decimal import Decimal

import altair as alt

from src.adapters.interface.streamlit.forecast_chart import (
    build_forecast_chart,
    build_forecast_chart_data,
    lowest_balance,
)
from src.domain.models import ForecastItem


def _item(day: int, amount: str, balance: str, kind: str) -> ForecastItem:
    return ForecastItem(
        item_id=f"{kind}-{day}",
        date=datetime(2025, 1, day),
        amount=Decimal(amount),
        category=kind,
        name=kind.title(),
        type=kind,
        running_balance=Decimal(balance),
    )


ITEMS = [
    _item(1, "100", "100", "balance"),
    _item(2, "-130", "-30", "bill"),
    _item(5, "500", "470", "income"),
]


def test_build_forecast_chart_data_formats_rows() -> None:
    data = build_forecast_chart_data(ITEMS)

    assert data[1] == {
        "date": "2025-01-02T00:00:00",
        "balance": -30.0,
        "amount": -130.0,
        "name": "Bill",
        "type": "bill",
        "amount_label": "-$130.00",
        "balance_label": "-$30.00",
    }
    assert [row["balance"] for row in data] == [100.0, -30.0, 470.0]


def test_lowest_balance() -> None:
    assert lowest_balance(ITEMS) == Decimal("-30")
    assert lowest_balance([]) is None


def test_build_forecast_chart_layers_line_points_and_rule() -> None:
    chart = build_forecast_chart(ITEMS, height=200)

    assert isinstance(chart, alt.LayerChart)
    assert len(chart.layer) == 3
    assert chart.height == 200


def test_point_colors_cover_every_item_type() -> None:
    chart = build_forecast_chart(ITEMS)

    scale = chart.layer[1].encoding.color.scale

    assert scale.domain == [
        "balance",
        "income",
        "bill",
        "expense",
        "adjustment",
    ]
    assert len(scale.range) == len(scale.domain)
