"""Occurrence counting and next-due lookup for recurrence rules."""

from __future__ import annotations

from datetime import datetime, timedelta

from analytics.calendar_step import add_units
from config.log_config import get_logger
from config.settings import DEFAULT_MAX_RECURRENCE_STEPS
from core.models import RecurrenceRule, RepeatUnit, Window

__all__ = [
    "count_occurrences_between",
    "next_occurrence_after",
]

logger = get_logger(__name__)


def count_occurrences_between(
    rule: RecurrenceRule,
    window: Window,
    *,
    max_steps: int = DEFAULT_MAX_RECURRENCE_STEPS,
) -> int:
    """Count occurrences of ``rule`` inside the closed ``window``.

    Parameters
    ----------
    rule:
        Recurrence rule anchored at ``rule.first_date``.
    window:
        Inclusive range; occurrences landing exactly on either endpoint count.
    max_steps:
        Upper bound on the stepping loop used for month and year rules. When
        reached the count is truncated to ``max_steps``.

    Returns
    -------
    int
        Number of occurrences ``first_date + k * interval * unit`` within the window.
    """

    first = rule.first_date
    if first > window.end:
        return 0

    # An occurrence past the end of the calendar cannot fall inside the window.
    try:
        if rule.unit in (RepeatUnit.DAY, RepeatUnit.WEEK):
            step = _fixed_step(rule)
            first_index = 0 if first >= window.start else -((first - window.start) // step)
            first_occurrence = first + first_index * step
            if first_occurrence > window.end:
                return 0
            return (window.end - first_occurrence) // step + 1

        current = _fast_forward(rule, window.start)
        while current < window.start:
            current = add_units(current, rule.interval, rule.unit)
    except OverflowError:
        return 0

    count = 0
    while current <= window.end:
        if count >= max_steps:
            logger.warning(
                "occurrence_count_truncated",
                max_steps=max_steps,
                unit=rule.unit.value,
                interval=rule.interval,
                window_start=window.start.isoformat(),
                window_end=window.end.isoformat(),
            )
            break
        count += 1
        try:
            current = add_units(current, rule.interval, rule.unit)
        except OverflowError:
            break
    return count


def next_occurrence_after(
    rule: RecurrenceRule,
    after: datetime,
    *,
    max_steps: int = DEFAULT_MAX_RECURRENCE_STEPS,
) -> datetime | None:
    """Return the first occurrence strictly later than ``after``.

    ``None`` means no next occurrence could be determined: either the month or
    year stepping loop exhausted ``max_steps`` before passing ``after`` or the
    next occurrence lies beyond the representable calendar.
    """

    first = rule.first_date
    if first > after:
        return first

    try:
        if rule.unit in (RepeatUnit.DAY, RepeatUnit.WEEK):
            step = _fixed_step(rule)
            next_index = (after - first) // step + 1
            return first + next_index * step

        current = _fast_forward(rule, after)
        steps = 0
        while current <= after and steps < max_steps:
            current = add_units(current, rule.interval, rule.unit)
            steps += 1
    except OverflowError:
        return None

    if current <= after:
        logger.warning(
            "next_occurrence_unresolved",
            max_steps=max_steps,
            unit=rule.unit.value,
            interval=rule.interval,
            after=after.isoformat(),
        )
        return None
    return current


def _fixed_step(rule: RecurrenceRule) -> timedelta:
    if rule.unit is RepeatUnit.DAY:
        return timedelta(days=rule.interval)
    if rule.unit is RepeatUnit.WEEK:
        return timedelta(weeks=rule.interval)
    raise ValueError(f"{rule.unit.value} is not a fixed-length unit")


def _fast_forward(rule: RecurrenceRule, target: datetime) -> datetime:
    """Jump close to ``target`` while staying at least one interval short of it.

    Month overflow can make stepped occurrences drift past their nominal
    day, so the jump leaves one interval of slack for linear stepping to close.
    """

    first = rule.first_date
    if first >= target:
        return first

    if rule.unit is RepeatUnit.MONTH:
        elapsed = (target.year - first.year) * 12 + (target.month - first.month)
    elif rule.unit is RepeatUnit.YEAR:
        elapsed = target.year - first.year
    else:
        raise ValueError(f"{rule.unit.value} does not need fast-forwarding")

    jumps = max(0, elapsed // rule.interval - 1)
    if jumps == 0:
        return first
    return add_units(first, jumps * rule.interval, rule.unit)
