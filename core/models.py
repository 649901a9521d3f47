"""Shared data model definitions for SubTally."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TypedDict

from config.settings import DEFAULT_CURRENCY


class RepeatUnit(str, Enum):
    """Calendar unit a subscription repeats in."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value: "RepeatUnit | str") -> "RepeatUnit":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unsupported repeat unit: {value!r}") from exc


@dataclass(frozen=True)
class RecurrenceRule:
    first_date: datetime
    interval: int
    unit: RepeatUnit

    def __post_init__(self) -> None:
        if isinstance(self.interval, bool) or not isinstance(self.interval, int):
            raise ValueError(f"interval must be an integer, got {self.interval!r}")
        if self.interval < 1:
            raise ValueError(f"interval must be >= 1, got {self.interval}")
        object.__setattr__(self, "unit", RepeatUnit.parse(self.unit))


@dataclass(frozen=True)
class Window:
    """Closed ``[start, end]`` range; both endpoints count as inside."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError("Window start must be <= end")


@dataclass(frozen=True)
class SubscriptionRecord:
    id: str
    name: str
    amount: float
    rule: RecurrenceRule
    currency: str = DEFAULT_CURRENCY
    user_id: str | None = None
    description: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"amount must be >= 0, got {self.amount}")


class BreakdownEntry(TypedDict):
    subscription_id: str
    item_name: str
    occurrences: int
    amount_per_occurrence: float
    subtotal: float
    average_per_occurrence: float
    next_due_date: datetime | None
    currency: str


class SummaryResult(TypedDict):
    total: float
    period_start: datetime
    period_end: datetime
    breakdown: list[BreakdownEntry]


__all__ = [
    "RepeatUnit",
    "RecurrenceRule",
    "Window",
    "SubscriptionRecord",
    "BreakdownEntry",
    "SummaryResult",
]
