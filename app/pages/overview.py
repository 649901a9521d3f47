"""Summary dashboard page layout."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from app.layout import card
from core import SummaryResult, build_breakdown_frame, format_amount
from visualization import build_breakdown_chart, build_share_chart
from visualization.theme import theme_tokens

TOKENS = theme_tokens()


def _render_total_card(result: SummaryResult, currency: str) -> None:
    start = result["period_start"]
    end = result["period_end"]
    st.metric("Total due in period", format_amount(result["total"], currency))
    metric_cols = st.columns((1, 1))
    metric_cols[0].metric("Subscriptions charged", len(result["breakdown"]))
    metric_cols[1].metric(
        "Payments",
        sum(entry["occurrences"] for entry in result["breakdown"]),
    )
    st.caption(f"{start:{TOKENS.date_format}} – {end:{TOKENS.date_format}}")


def _render_upcoming_card(result: SummaryResult, currency: str) -> None:
    upcoming = sorted(
        (entry for entry in result["breakdown"] if entry["next_due_date"] is not None),
        key=lambda entry: entry["next_due_date"],
    )
    if not upcoming:
        st.info("No upcoming payments after this period.")
        return

    for entry in upcoming:
        due = entry["next_due_date"]
        st.markdown(
            f"<div class='st-due-row'><span>{entry['item_name']}</span>"
            f"<span>{due:{TOKENS.date_format}} · "
            f"{format_amount(entry['amount_per_occurrence'], entry['currency'] or currency)}</span></div>",
            unsafe_allow_html=True,
        )


def _render_breakdown_table(breakdown_df: pd.DataFrame) -> None:
    if breakdown_df.empty:
        st.info("No subscription payments fall in this period.")
        return

    st.dataframe(
        breakdown_df,
        hide_index=True,
        use_container_width=True,
        column_config={
            "PerOccurrence": st.column_config.NumberColumn("Per payment", format="%.2f"),
            "Subtotal": st.column_config.NumberColumn("Subtotal", format="%.2f"),
            "Share": st.column_config.ProgressColumn("Share", min_value=0.0, max_value=1.0),
            "NextDue": st.column_config.DatetimeColumn("Next due", format="D MMM YYYY"),
        },
    )


def render_page(result: SummaryResult, currency: str) -> None:
    """Render the subscription summary page."""

    st.title("Subscriptions")
    st.caption("What your recurring payments cost over the selected period.")

    breakdown_df = build_breakdown_frame(result)

    row_one_left, row_one_right = st.columns([1, 2], gap="medium")
    with row_one_left:
        with card("This period", suffix="Summary"):
            _render_total_card(result, currency)
    with row_one_right:
        with card("Cost by subscription", suffix="Breakdown"):
            chart = build_breakdown_chart(breakdown_df)
            st.plotly_chart(chart, use_container_width=True, key="breakdown-bars")

    row_two_left, row_two_right = st.columns([3, 2], gap="medium")
    with row_two_left:
        with card("Details"):
            _render_breakdown_table(breakdown_df)
    with row_two_right:
        with card("Share of total"):
            st.plotly_chart(build_share_chart(breakdown_df), use_container_width=True, key="share-donut")
        with card("Next due", suffix="After period"):
            _render_upcoming_card(result, currency)


__all__ = ["render_page"]
