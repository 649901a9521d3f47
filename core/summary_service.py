"""Core logic for assembling SubTally spending summaries."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

from analytics.periods import PeriodQuery, resolve_window
from analytics.summary import summarize
from config.log_config import get_logger
from config.settings import Settings, get_settings
from core.data_loader import load_subscriptions
from core.models import SummaryResult

__all__ = ["prepare_summary"]

logger = get_logger(__name__)


def prepare_summary(
    csv_path: str | Path,
    query: PeriodQuery,
    *,
    user_id: Optional[str] = None,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
) -> SummaryResult:
    settings = settings or get_settings()
    window = resolve_window(query, now=now)
    subscriptions = load_subscriptions(
        csv_path,
        user_id=user_id,
        default_currency=settings.default_currency,
    )

    result = summarize(subscriptions, window, max_steps=settings.max_recurrence_steps)
    logger.info(
        "summary_prepared",
        user_id=user_id,
        period_start=window.start.isoformat(),
        period_end=window.end.isoformat(),
        subscriptions=len(subscriptions),
        listed=len(result["breakdown"]),
        total=result["total"],
    )
    return result
