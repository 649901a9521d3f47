"""Unit tests for calendar stepping, occurrence counting and next-due lookup."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from analytics.calendar_step import add_units
from analytics.recurrence import count_occurrences_between, next_occurrence_after
from core.models import RecurrenceRule, RepeatUnit, Window


def _window(start: str, end: str) -> Window:
    return Window(
        start=datetime.fromisoformat(start),
        end=datetime.fromisoformat(end).replace(hour=23, minute=59, second=59, microsecond=999000),
    )


def _brute_force_count(rule: RecurrenceRule, window: Window) -> int:
    step = timedelta(days=rule.interval * (7 if rule.unit is RepeatUnit.WEEK else 1))
    count = 0
    current = rule.first_date
    while current <= window.end:
        if current >= window.start:
            count += 1
        current += step
    return count


def test_month_step_overflows_into_following_month():
    assert add_units(datetime(2023, 1, 31), 1, "month") == datetime(2023, 3, 3)
    assert add_units(datetime(2024, 1, 31), 1, RepeatUnit.MONTH) == datetime(2024, 3, 2)
    assert add_units(datetime(2023, 3, 31), 1, RepeatUnit.MONTH) == datetime(2023, 5, 1)


def test_month_step_carries_year_and_keeps_time_of_day():
    start = datetime(2023, 11, 15, 8, 30, 5, 250000)
    assert add_units(start, 3, RepeatUnit.MONTH) == datetime(2024, 2, 15, 8, 30, 5, 250000)
    assert add_units(start, -11, RepeatUnit.MONTH) == datetime(2022, 12, 15, 8, 30, 5, 250000)


def test_year_step_moves_leap_day_to_march_first():
    assert add_units(datetime(2024, 2, 29), 1, RepeatUnit.YEAR) == datetime(2025, 3, 1)
    assert add_units(datetime(2024, 2, 29), 4, RepeatUnit.YEAR) == datetime(2028, 2, 29)


def test_day_and_week_steps_are_plain_day_offsets():
    assert add_units(datetime(2024, 2, 27), 3, RepeatUnit.DAY) == datetime(2024, 3, 1)
    assert add_units(datetime(2024, 12, 30), 2, RepeatUnit.WEEK) == datetime(2025, 1, 13)


def test_add_units_rejects_unknown_unit():
    with pytest.raises(ValueError):
        add_units(datetime(2024, 1, 1), 1, "fortnight")


def test_rule_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        RecurrenceRule(datetime(2024, 1, 1), 0, RepeatUnit.DAY)


def test_count_every_third_day_includes_both_window_edges():
    rule = RecurrenceRule(datetime(2024, 1, 1), 3, RepeatUnit.DAY)

    assert count_occurrences_between(rule, _window("2024-01-01", "2024-01-10")) == 4


def test_count_monthly_rule_over_quarter():
    rule = RecurrenceRule(datetime(2024, 1, 1), 1, RepeatUnit.MONTH)

    assert count_occurrences_between(rule, _window("2024-01-01", "2024-03-31")) == 3


def test_count_is_zero_when_rule_starts_after_window():
    for unit in RepeatUnit:
        rule = RecurrenceRule(datetime(2024, 4, 1), 1, unit)
        assert count_occurrences_between(rule, _window("2024-01-01", "2024-03-31")) == 0


def test_count_is_zero_when_window_falls_between_occurrences():
    weekly = RecurrenceRule(datetime(2024, 1, 1), 2, RepeatUnit.WEEK)
    yearly = RecurrenceRule(datetime(2020, 7, 4), 1, RepeatUnit.YEAR)

    assert count_occurrences_between(weekly, _window("2024-01-02", "2024-01-14")) == 0
    assert count_occurrences_between(yearly, _window("2024-01-01", "2024-06-30")) == 0


def test_month_rule_anchored_at_month_end_follows_overflowed_steps():
    rule = RecurrenceRule(datetime(2023, 1, 31), 1, RepeatUnit.MONTH)

    assert count_occurrences_between(rule, _window("2023-02-01", "2023-02-28")) == 0
    assert count_occurrences_between(rule, _window("2023-03-01", "2023-03-31")) == 1


def test_count_leap_day_yearly_rule():
    rule = RecurrenceRule(datetime(2020, 2, 29), 1, RepeatUnit.YEAR)

    assert count_occurrences_between(rule, _window("2020-01-01", "2024-12-31")) == 5


@pytest.mark.parametrize("unit", [RepeatUnit.DAY, RepeatUnit.WEEK])
@pytest.mark.parametrize("interval", range(1, 61))
def test_fixed_unit_count_matches_brute_force(unit: RepeatUnit, interval: int):
    rule = RecurrenceRule(datetime(2021, 3, 17), interval, unit)
    windows = [
        _window("2021-03-17", "2021-03-17"),
        _window("2020-01-01", "2021-06-30"),
        _window("2021-05-02", "2022-05-01"),
        _window("2022-02-28", "2026-12-31"),
        _window("2024-02-29", "2024-03-01"),
    ]

    for window in windows:
        assert count_occurrences_between(rule, window) == _brute_force_count(rule, window)


def test_fixed_unit_count_respects_time_of_day():
    rule = RecurrenceRule(datetime(2024, 1, 1, 12, 0), 1, RepeatUnit.WEEK)
    window = Window(start=datetime(2024, 1, 8, 13, 0), end=datetime(2024, 1, 15, 11, 0))

    assert count_occurrences_between(rule, window) == 0
    assert _brute_force_count(rule, window) == 0


@pytest.mark.parametrize(
    "rule",
    [
        RecurrenceRule(datetime(2022, 1, 31), 1, RepeatUnit.MONTH),
        RecurrenceRule(datetime(2021, 6, 15), 2, RepeatUnit.MONTH),
        RecurrenceRule(datetime(2019, 2, 28), 1, RepeatUnit.YEAR),
        RecurrenceRule(datetime(2022, 1, 3), 10, RepeatUnit.DAY),
    ],
)
def test_count_is_monotonic_in_window_end(rule: RecurrenceRule):
    start = datetime(2022, 3, 1)
    previous = 0
    for offset in range(0, 1500, 7):
        window = Window(start=start, end=start + timedelta(days=offset))
        current = count_occurrences_between(rule, window)
        assert current >= previous
        previous = current


def test_month_count_truncates_at_step_bound():
    rule = RecurrenceRule(datetime(2000, 1, 1), 1, RepeatUnit.MONTH)
    window = _window("2000-01-01", "2010-12-31")

    assert count_occurrences_between(rule, window) == 132
    assert count_occurrences_between(rule, window, max_steps=5) == 5


@pytest.mark.parametrize(
    "rule",
    [
        RecurrenceRule(datetime(2021, 1, 10), 1, RepeatUnit.DAY),
        RecurrenceRule(datetime(2021, 1, 10), 9, RepeatUnit.DAY),
        RecurrenceRule(datetime(2021, 1, 10, 18, 45), 3, RepeatUnit.WEEK),
        RecurrenceRule(datetime(2021, 1, 15), 1, RepeatUnit.MONTH),
        RecurrenceRule(datetime(2020, 11, 28), 5, RepeatUnit.MONTH),
        RecurrenceRule(datetime(2018, 8, 20), 2, RepeatUnit.YEAR),
    ],
)
def test_next_occurrence_is_strictly_after_and_one_step_back_is_not(rule: RecurrenceRule):
    for offset in range(0, 2000, 37):
        reference = datetime(2021, 1, 1) + timedelta(days=offset, hours=offset % 24)
        upcoming = next_occurrence_after(rule, reference)

        assert upcoming is not None
        assert upcoming > reference
        if upcoming != rule.first_date:
            assert add_units(upcoming, -rule.interval, rule.unit) <= reference


def test_next_occurrence_before_first_date_is_first_date():
    rule = RecurrenceRule(datetime(2024, 5, 20), 1, RepeatUnit.MONTH)

    assert next_occurrence_after(rule, datetime(2024, 1, 1)) == datetime(2024, 5, 20)


def test_next_occurrence_on_an_occurrence_moves_to_the_following_one():
    rule = RecurrenceRule(datetime(2024, 1, 1), 3, RepeatUnit.DAY)

    assert next_occurrence_after(rule, datetime(2024, 1, 10)) == datetime(2024, 1, 13)


def test_next_occurrence_is_absent_when_step_bound_is_exhausted():
    rule = RecurrenceRule(datetime(2000, 1, 1), 1, RepeatUnit.MONTH)
    after = datetime(2010, 6, 15)

    assert next_occurrence_after(rule, after, max_steps=1) is None
    assert next_occurrence_after(rule, after, max_steps=2) == datetime(2010, 7, 1)


@pytest.mark.parametrize(
    "rule",
    [
        RecurrenceRule(datetime(2020, 1, 1), 4_000_000, RepeatUnit.DAY),
        RecurrenceRule(datetime(2020, 1, 1), 600_000, RepeatUnit.WEEK),
        RecurrenceRule(datetime(2020, 1, 1), 100_000, RepeatUnit.MONTH),
        RecurrenceRule(datetime(2020, 1, 1), 10_000, RepeatUnit.YEAR),
    ],
)
def test_interval_reaching_past_calendar_end_counts_nothing(rule: RecurrenceRule):
    window = _window("2024-01-01", "2024-12-31")

    assert count_occurrences_between(rule, window) == 0
    assert count_occurrences_between(rule, _window("2020-01-01", "2020-12-31")) == 1
    assert next_occurrence_after(rule, datetime(2024, 6, 1)) is None
