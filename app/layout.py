"""Shared layout primitives for the SubTally Streamlit app."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from typing import Final

import streamlit as st

from analytics.periods import PeriodQuery

PERIOD_OPTIONS: Final[tuple[str, ...]] = ("day", "week", "month", "year", "custom")
PERIOD_LABELS: Final[dict[str, str]] = {
    "day": "Day",
    "week": "Week (Mon-Sun)",
    "month": "Month",
    "year": "Year",
    "custom": "Custom range",
}


def inject_css() -> None:
    """Inject global CSS tokens and card styling into the Streamlit app."""

    st.markdown(
        """
        <style>
          :root {
            --gap: 16px;
            --radius: 12px;
            --card-bg: #FFFFFF;
            --border: #E6EAF2;
            --shadow: 0 1px 2px rgba(16, 24, 40, 0.05), 0 1px 3px rgba(16, 24, 40, 0.06);
          }

          body, [data-testid="stAppViewContainer"] > .main {
            background: #F4F6FB;
          }

          .block-container {
            max-width: 1200px;
            padding-top: 2.5rem;
            padding-bottom: 4rem;
          }

          .st-brand {
            font-size: 1.5rem;
            font-weight: 700;
            color: #0B3FD6;
            padding: 0.9rem 0;
          }

          .st-card-anchor {
            display: none;
          }

          [data-testid="stVerticalBlock"]:has(> .st-card-anchor) {
            background: var(--card-bg);
            border: 1px solid var(--border);
            border-radius: var(--radius);
            box-shadow: var(--shadow);
            padding: 16px;
            margin-bottom: var(--gap);
            display: flex;
            flex-direction: column;
            gap: 12px;
          }

          .st-card__head {
            display: flex;
            align-items: center;
            justify-content: space-between;
            gap: 12px;
            font-weight: 600;
            color: #111827;
            margin-bottom: 4px;
            flex-wrap: wrap;
          }

          .st-card__title {
            font-size: 1.05rem;
          }

          .st-chip {
            font-size: 12px;
            padding: 2px 8px;
            border-radius: 999px;
            border: 1px solid #D6DEFF;
            background: #F0F4FF;
            color: #3346FF;
            white-space: nowrap;
          }

          .st-due-row {
            display: flex;
            align-items: center;
            justify-content: space-between;
            font-weight: 600;
            color: #1F2937;
            margin-top: 8px;
          }
        </style>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def card(title: str, suffix: str | None = None):
    """Render content inside a reusable SubTally card."""

    chip_html = f'<span class="st-chip">{suffix}</span>' if suffix else ""
    container = st.container()
    with container:
        st.markdown('<div class="st-card-anchor"></div>', unsafe_allow_html=True)
        st.markdown(
            f'<div class="st-card__head"><span class="st-card__title">{title}</span>'
            f'{chip_html}</div>',
            unsafe_allow_html=True,
        )
        yield


def render_brand() -> None:
    st.markdown('<div class="st-brand">SubTally</div>', unsafe_allow_html=True)


def render_sidebar_filters(today: date) -> tuple[PeriodQuery, str | None]:
    """Render the sidebar filters and return the chosen query and user id."""

    raw_period = st.query_params.get("period", "month")
    if isinstance(raw_period, list):
        raw_period = raw_period[0] if raw_period else "month"
    default_index = PERIOD_OPTIONS.index(raw_period) if raw_period in PERIOD_OPTIONS else 2

    with st.sidebar:
        st.markdown("### Filters")
        period = st.selectbox(
            "Period",
            PERIOD_OPTIONS,
            index=default_index,
            key="period_selector",
            format_func=lambda key: PERIOD_LABELS[key],
        )

        if period == "custom":
            start = st.date_input("From", value=today.replace(day=1), key="range_start")
            end = st.date_input("To", value=today, key="range_end")
            query = PeriodQuery(start=start, end=end)
        else:
            anchor = st.date_input("Anchor date", value=today, key="anchor_date")
            query = PeriodQuery(period=period, date=anchor)

        st.markdown("---")
        user_id = st.text_input("User id", value="", key="user_id").strip() or None

    sync_period_query_param(period)
    return query, user_id


def sync_period_query_param(period: str | None) -> None:
    """Ensure the ``period`` query param mirrors the current selection."""

    current_param = st.query_params.get("period")
    if isinstance(current_param, list):
        current_param = current_param[0] if current_param else None

    if period:
        if current_param != period:
            st.query_params["period"] = period
    else:
        if "period" in st.query_params:
            st.query_params.pop("period")


__all__ = [
    "PERIOD_LABELS",
    "PERIOD_OPTIONS",
    "card",
    "inject_css",
    "render_brand",
    "render_sidebar_filters",
    "sync_period_query_param",
]
