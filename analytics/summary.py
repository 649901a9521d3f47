"""Aggregation of subscription occurrences into a spending summary."""

from __future__ import annotations

from typing import Iterable

from analytics.recurrence import count_occurrences_between, next_occurrence_after
from config.settings import DEFAULT_MAX_RECURRENCE_STEPS
from core.models import BreakdownEntry, SubscriptionRecord, SummaryResult, Window

__all__ = ["summarize"]


def summarize(
    subscriptions: Iterable[SubscriptionRecord],
    window: Window,
    *,
    max_steps: int = DEFAULT_MAX_RECURRENCE_STEPS,
) -> SummaryResult:
    """Total every subscription's occurrences within ``window``.

    Subscriptions without occurrences still feed ``total`` (with zero) but
    are left out of ``breakdown``, which keeps the input order otherwise.
    """

    total = 0.0
    breakdown: list[BreakdownEntry] = []

    for subscription in subscriptions:
        rule = subscription.rule
        occurrences = count_occurrences_between(rule, window, max_steps=max_steps)
        amount = float(subscription.amount or 0.0)
        subtotal = occurrences * amount
        average = subtotal / occurrences if occurrences > 0 else 0.0
        next_due = next_occurrence_after(rule, window.end, max_steps=max_steps)

        if subtotal > 0:
            breakdown.append(
                {
                    "subscription_id": subscription.id,
                    "item_name": subscription.name,
                    "occurrences": occurrences,
                    "amount_per_occurrence": amount,
                    "subtotal": subtotal,
                    "average_per_occurrence": average,
                    "next_due_date": next_due,
                    "currency": subscription.currency,
                }
            )

        total += subtotal

    return {
        "total": total,
        "period_start": window.start,
        "period_end": window.end,
        "breakdown": breakdown,
    }
