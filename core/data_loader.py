"""Data loading utilities for SubTally's subscription records."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Final

import pandas as pd

from config.log_config import get_logger
from config.settings import DEFAULT_CURRENCY
from core.models import RecurrenceRule, RepeatUnit, SubscriptionRecord

__all__ = ["SubscriptionDataError", "load_subscriptions"]

logger = get_logger(__name__)

_CACHE_SIZE: Final[int] = 8
_REQUIRED_COLUMNS: Final[tuple[str, ...]] = (
    "id",
    "name",
    "first_date",
    "repeats_every",
    "repeats_unit",
    "amount",
)
_TEXT_COLUMNS: Final[dict[str, type]] = {
    "id": str,
    "user_id": str,
    "name": str,
    "description": str,
    "repeats_unit": str,
    "currency": str,
}


class SubscriptionDataError(ValueError):
    """Raised when a subscription source contains unusable rows."""


@lru_cache(maxsize=_CACHE_SIZE)
def _read_subscription_frame(csv_path: str) -> pd.DataFrame:
    """Return the parsed subscription frame for ``csv_path``.

    Results are cached so repeated summaries over the same source file do not
    re-read it from disk.
    """

    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")

    df = pd.read_csv(path, dtype=_TEXT_COLUMNS)
    missing = [column for column in _REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise SubscriptionDataError(f"Missing columns in {path.name}: {', '.join(missing)}")

    df["first_date"] = pd.to_datetime(df["first_date"], format="ISO8601", errors="coerce")
    df["repeats_every"] = pd.to_numeric(df["repeats_every"], errors="coerce")
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce")
    return df


def load_subscriptions(
    csv_path: str | Path,
    user_id: str | None = None,
    *,
    default_currency: str = DEFAULT_CURRENCY,
) -> list[SubscriptionRecord]:
    """Load the subscription records owned by ``user_id`` from a CSV file.

    When ``user_id`` is ``None`` every record in the file is returned.
    """

    df = _read_subscription_frame(str(Path(csv_path)))
    if user_id is not None:
        if "user_id" not in df.columns:
            raise SubscriptionDataError("Cannot filter by user: the source has no user_id column")
        df = df[df["user_id"] == str(user_id)]

    records = [
        _record_from_row(row, line_number=int(index) + 2, default_currency=default_currency)
        for index, row in df.iterrows()
    ]
    logger.debug("subscriptions_loaded", path=str(csv_path), user_id=user_id, count=len(records))
    return records


def _record_from_row(row: pd.Series, *, line_number: int, default_currency: str) -> SubscriptionRecord:
    first_date = row["first_date"]
    if pd.isna(first_date):
        raise SubscriptionDataError(f"Line {line_number}: invalid first_date")
    if first_date.tzinfo is not None:
        first_date = first_date.tz_localize(None)

    interval = row["repeats_every"]
    if pd.isna(interval) or float(interval) != int(interval) or int(interval) < 1:
        raise SubscriptionDataError(f"Line {line_number}: repeats_every must be a whole number >= 1")

    amount = row["amount"]
    if pd.isna(amount) or float(amount) < 0:
        raise SubscriptionDataError(f"Line {line_number}: amount must be a number >= 0")

    try:
        unit = RepeatUnit.parse(row["repeats_unit"])
    except ValueError as exc:
        raise SubscriptionDataError(f"Line {line_number}: {exc}") from exc

    rule = RecurrenceRule(
        first_date=pd.Timestamp(first_date).to_pydatetime(),
        interval=int(interval),
        unit=unit,
    )
    return SubscriptionRecord(
        id=str(row["id"]),
        name=str(row["name"]),
        amount=float(amount),
        rule=rule,
        currency=_optional_text(row.get("currency")) or default_currency,
        user_id=_optional_text(row.get("user_id")),
        description=_optional_text(row.get("description")),
    )


def _optional_text(value: Any) -> str | None:
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None
