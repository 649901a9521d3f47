"""Resolution of reporting periods into concrete closed windows."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Final, Union

import pandas as pd

from core.models import Window

__all__ = [
    "InvalidInputError",
    "PERIOD_FREQUENCIES",
    "PeriodQuery",
    "parse_date",
    "resolve_window",
]

DateLike = Union[str, date, datetime, pd.Timestamp]

# Weeks end on Sunday so that each period starts on the ISO Monday.
PERIOD_FREQUENCIES: Final[dict[str, str]] = {
    "day": "D",
    "week": "W-SUN",
    "month": "M",
    "year": "Y",
}


class InvalidInputError(ValueError):
    """Raised when period or date parameters cannot describe a window."""


@dataclass(frozen=True)
class PeriodQuery:
    """Query parameters accepted by :func:`resolve_window`.

    Either ``start`` and ``end`` or ``period`` (with an optional ``date``
    anchor) must be supplied. An explicit range wins when both are present.
    """

    period: str | None = None
    date: DateLike | None = None
    start: DateLike | None = None
    end: DateLike | None = None


def parse_date(value: DateLike, *, field_name: str = "date") -> pd.Timestamp:
    """Parse an ISO-8601 string or date value into a naive local timestamp."""

    try:
        parsed = pd.Timestamp(value)
    except pd.errors.OutOfBoundsDatetime as exc:
        raise InvalidInputError(f"Invalid {field_name}: {value!r} is outside the supported date range") from exc
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidInputError(f"Invalid {field_name}: {value!r}") from exc
    if pd.isna(parsed):
        raise InvalidInputError(f"Invalid {field_name}: {value!r}")
    if parsed.tzinfo is not None:
        parsed = parsed.tz_localize(None)
    if not pd.Timestamp.min <= parsed <= pd.Timestamp.max:
        raise InvalidInputError(f"Invalid {field_name}: {value!r} is outside the supported date range")
    return parsed


def resolve_window(query: PeriodQuery, *, now: datetime | None = None) -> Window:
    """Turn ``query`` into a closed window with day-aligned bounds.

    Parameters
    ----------
    query:
        Either an explicit ``start``/``end`` pair or a ``period`` name with an
        optional anchor ``date``.
    now:
        Anchor used when ``query.date`` is absent. Defaults to the system clock.

    Returns
    -------
    Window
        Starts at 00:00:00.000 on its first day and ends at 23:59:59.999 on
        its last day.
    """

    if query.start and query.end:
        start_day = parse_date(query.start, field_name="start")
        end_day = parse_date(query.end, field_name="end")
        if end_day.normalize() < start_day.normalize():
            raise InvalidInputError("end must not be before start")
        return _window_from_periods(
            pd.Period(start_day, freq="D"),
            pd.Period(end_day, freq="D"),
        )

    if query.period:
        if query.date:
            anchor = parse_date(query.date)
        else:
            anchor = pd.Timestamp(now) if now is not None else pd.Timestamp.now()

        freq = PERIOD_FREQUENCIES.get(str(query.period).strip().lower())
        if freq is None:
            raise InvalidInputError(f"Invalid period: {query.period!r}")
        period = pd.Period(anchor, freq=freq)
        return _window_from_periods(period, period)

    raise InvalidInputError("Provide either period+date OR start+end query params")


def _window_from_periods(first: pd.Period, last: pd.Period) -> Window:
    try:
        start = first.start_time.normalize()
        end = last.end_time.floor("ms")
    except pd.errors.OutOfBoundsDatetime as exc:
        raise InvalidInputError("Period falls outside the supported date range") from exc
    return Window(start=start.to_pydatetime(), end=end.to_pydatetime())
