"""SubTally dashboard for recurring subscription spend."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import streamlit as st

from analytics.periods import InvalidInputError, PeriodQuery
from app.layout import inject_css, render_brand, render_sidebar_filters
from app.pages import render_overview_page
from config import configure_logging, get_logger, get_settings
from core import SubscriptionDataError, SummaryResult
from core.summary_service import prepare_summary

logger = get_logger(__name__)


@st.cache_data(show_spinner=False)
def _load_summary(data_path: str, query: PeriodQuery, user_id: str | None) -> SummaryResult:
    """Load and cache the summary for a query from the subscription CSV."""

    return prepare_summary(Path(data_path), query, user_id=user_id)


def main() -> None:
    """Application entrypoint for the SubTally dashboard."""

    st.set_page_config(
        page_title="SubTally | Subscriptions",
        page_icon="🔁",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    settings = get_settings()
    configure_logging(level=settings.log_level, format_json=settings.log_json)

    inject_css()
    render_brand()
    query, user_id = render_sidebar_filters(date.today())

    try:
        result = _load_summary(str(settings.data_path), query, user_id)
    except InvalidInputError as exc:
        st.error(str(exc))
        return
    except FileNotFoundError as exc:
        logger.error("subscription_source_missing", path=str(settings.data_path))
        st.error(str(exc))
        return
    except SubscriptionDataError as exc:
        logger.error("subscription_source_invalid", path=str(settings.data_path), error=str(exc))
        st.error(f"Subscription data could not be read: {exc}")
        return

    render_overview_page(result, settings.default_currency)


if __name__ == "__main__":
    main()
