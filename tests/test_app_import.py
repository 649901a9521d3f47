import importlib
from datetime import datetime

import plotly.graph_objects as go

from analytics.periods import PeriodQuery, resolve_window
from analytics.summary import summarize
from core import RecurrenceRule, RepeatUnit, SubscriptionRecord, build_breakdown_frame
from visualization import build_breakdown_chart, build_share_chart


def test_app_package_exports_main():
    module = importlib.import_module("app")

    assert hasattr(module, "main"), "app package should expose main entrypoint"


def test_charts_render_breakdown():
    window = resolve_window(PeriodQuery(period="month", date="2024-03-15"))
    subscriptions = [
        SubscriptionRecord(
            id="video",
            name="Video Stream",
            amount=649.0,
            rule=RecurrenceRule(datetime(2024, 1, 5), 1, RepeatUnit.MONTH),
        ),
        SubscriptionRecord(
            id="milk",
            name="Milk Delivery",
            amount=64.0,
            rule=RecurrenceRule(datetime(2024, 1, 1), 1, RepeatUnit.DAY),
        ),
    ]
    frame = build_breakdown_frame(summarize(subscriptions, window))

    bars = build_breakdown_chart(frame, currency_symbol="₹")
    donut = build_share_chart(frame)

    assert isinstance(bars, go.Figure)
    assert list(bars.data[0].y) == ["Video Stream", "Milk Delivery"]
    assert len(donut.data) == 1


def test_charts_show_placeholder_when_empty():
    window = resolve_window(PeriodQuery(period="day", date="2024-03-15"))
    frame = build_breakdown_frame(summarize([], window))

    figure = build_breakdown_chart(frame)

    assert figure.data == ()
    assert figure.layout.annotations[0].text.startswith("No subscription payments")
