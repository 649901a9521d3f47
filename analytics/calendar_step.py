"""Calendar-aware stepping of dates by whole recurrence units."""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta

from core.models import RepeatUnit

__all__ = ["add_units"]


def add_units(moment: datetime, n: int, unit: RepeatUnit | str) -> datetime:
    """Return ``moment`` advanced by ``n`` units of ``unit``.

    Month and year steps keep the day of month and time of day. When the
    target month is too short for that day the surplus days roll forward into
    the following month, so 31 January plus one month lands on 3 March in a
    non-leap year and 29 February plus one year lands on 1 March.
    """

    unit = RepeatUnit.parse(unit)
    if unit is RepeatUnit.DAY:
        return moment + timedelta(days=n)
    if unit is RepeatUnit.WEEK:
        return moment + timedelta(weeks=n)
    if unit is RepeatUnit.MONTH:
        return _shift_months(moment, n)
    if unit is RepeatUnit.YEAR:
        return _shift_months(moment, 12 * n)
    raise ValueError(f"Unsupported repeat unit: {unit!r}")


def _shift_months(moment: datetime, months: int) -> datetime:
    month_index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    if not 1 <= year <= 9999:
        raise OverflowError(f"date out of range after shifting {months} months")

    days_in_month = calendar.monthrange(year, month)[1]
    overflow = moment.day - days_in_month
    if overflow <= 0:
        return moment.replace(year=year, month=month)
    return moment.replace(year=year, month=month, day=days_in_month) + timedelta(days=overflow)
