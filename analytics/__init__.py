"""Recurrence analytics shared across SubTally services."""

from analytics.calendar_step import add_units
from analytics.periods import (
    PERIOD_FREQUENCIES,
    InvalidInputError,
    PeriodQuery,
    parse_date,
    resolve_window,
)
from analytics.recurrence import count_occurrences_between, next_occurrence_after
from analytics.summary import summarize

__all__ = [
    "add_units",
    "count_occurrences_between",
    "next_occurrence_after",
    "PERIOD_FREQUENCIES",
    "InvalidInputError",
    "PeriodQuery",
    "parse_date",
    "resolve_window",
    "summarize",
]
