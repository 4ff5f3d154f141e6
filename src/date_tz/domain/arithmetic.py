from __future__ import annotations

import calendar
from datetime import datetime, timedelta, timezone


def floor_div(a: int, b: int) -> int:
    """Integer division rounding toward negative infinity."""
    return a // b


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(moment: datetime, months: int) -> datetime:
    """Steps ``moment`` by whole months, clamping the day to the target month.

    Jan 31 plus one month lands on the last day of February rather than
    spilling into March. Hour and minute are kept, seconds are dropped.
    """
    total_months = moment.month - 1 + months
    year = moment.year + floor_div(total_months, 12)
    month = total_months % 12 + 1
    day = min(moment.day, days_in_month(year, month))
    return datetime(year, month, day, moment.hour, moment.minute, tzinfo=timezone.utc)


def add_years(moment: datetime, years: int) -> datetime:
    year = moment.year + years
    day = min(moment.day, days_in_month(year, moment.month))
    return datetime(year, moment.month, day, moment.hour, moment.minute, tzinfo=timezone.utc)


def normalized_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Builds a UTC datetime, rolling overflowing fields into the next unit.

    Month 13 becomes January of the following year, April 31 becomes May 1,
    hour 24 becomes midnight of the next day. Raises ``ValueError`` or
    ``OverflowError`` when the result leaves the supported year range.
    """
    year_carry, month_index = divmod(month - 1, 12)
    first_of_month = datetime(year + year_carry, month_index + 1, 1, tzinfo=timezone.utc)
    return first_of_month + timedelta(days=day - 1, hours=hour, minutes=minute, seconds=second)
