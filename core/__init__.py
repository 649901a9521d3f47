"""Core domain package for the SubTally application.

The summary service lives in :mod:`core.summary_service`; it depends on
:mod:`analytics`, which itself builds on the models exported here.
"""

from .data_loader import SubscriptionDataError, load_subscriptions
from .formatting import build_breakdown_frame, format_amount, format_timestamp, summary_to_payload
from .models import (
    BreakdownEntry,
    RecurrenceRule,
    RepeatUnit,
    SubscriptionRecord,
    SummaryResult,
    Window,
)

__all__ = [
    "BreakdownEntry",
    "RecurrenceRule",
    "RepeatUnit",
    "SubscriptionRecord",
    "SummaryResult",
    "Window",
    "SubscriptionDataError",
    "load_subscriptions",
    "build_breakdown_frame",
    "format_amount",
    "format_timestamp",
    "summary_to_payload",
]
