"""Formatting helpers for SubTally summaries."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pandas as pd

from core.models import SummaryResult

__all__ = [
    "build_breakdown_frame",
    "format_amount",
    "format_timestamp",
    "summary_to_payload",
]

_CURRENCY_SYMBOLS = {
    "INR": "₹",
    "GBP": "£",
    "USD": "$",
    "EUR": "€",
}


def format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds")


def format_amount(value: float, currency: str | None = None) -> str:
    code = (currency or "").upper()
    symbol = _CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{symbol}{value:,.2f}"
    if code:
        return f"{value:,.2f} {code}"
    return f"{value:,.2f}"


def summary_to_payload(result: SummaryResult) -> dict[str, Any]:
    """Serialise a summary into the JSON shape returned to API consumers."""

    return {
        "total": result["total"],
        "periodStart": format_timestamp(result["period_start"]),
        "periodEnd": format_timestamp(result["period_end"]),
        "breakdown": [
            {
                "subscriptionId": entry["subscription_id"],
                "itemName": entry["item_name"],
                "occurrences": entry["occurrences"],
                "amountPerOccurrence": entry["amount_per_occurrence"],
                "subtotal": entry["subtotal"],
                "averagePerOccurrence": entry["average_per_occurrence"],
                "nextDueDate": format_timestamp(entry["next_due_date"]),
            }
            for entry in result["breakdown"]
        ],
    }


def build_breakdown_frame(result: SummaryResult) -> pd.DataFrame:
    """Return the breakdown as a frame ordered by subtotal, largest first."""

    columns = ["Subscription", "Occurrences", "PerOccurrence", "Subtotal", "Share", "NextDue", "Currency"]
    if not result["breakdown"]:
        return pd.DataFrame(columns=columns)

    total = result["total"]
    rows = [
        {
            "Subscription": entry["item_name"],
            "Occurrences": entry["occurrences"],
            "PerOccurrence": entry["amount_per_occurrence"],
            "Subtotal": entry["subtotal"],
            "Share": entry["subtotal"] / total if total else 0.0,
            "NextDue": pd.Timestamp(entry["next_due_date"]) if entry["next_due_date"] else pd.NaT,
            "Currency": entry["currency"],
        }
        for entry in result["breakdown"]
    ]
    df = pd.DataFrame(rows, columns=columns)
    return df.sort_values(by="Subtotal", ascending=False, kind="stable").reset_index(drop=True)
