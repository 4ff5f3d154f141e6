from datetime import datetime, timezone

import pytest

from date_tz.domain.arithmetic import add_months, add_years, days_in_month, floor_div, normalized_datetime


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "a, b, expected",
    [(7, 12, 0), (12, 12, 1), (-1, 12, -1), (-12, 12, -1), (-13, 12, -2)],
)
def test_floor_div_rounds_toward_negative_infinity(a, b, expected):
    assert floor_div(a, b) == expected


def test_days_in_month_handles_leap_years():
    assert days_in_month(2021, 2) == 28
    assert days_in_month(2024, 2) == 29
    assert days_in_month(1900, 2) == 28
    assert days_in_month(2000, 2) == 29
    assert days_in_month(2021, 12) == 31


def test_add_months_clamps_day_to_end_of_month():
    assert add_months(_utc(2021, 1, 31, 10, 15), 1) == _utc(2021, 2, 28, 10, 15)
    assert add_months(_utc(2024, 1, 31, 10, 15), 1) == _utc(2024, 2, 29, 10, 15)


def test_add_months_negative_steps_into_previous_year():
    assert add_months(_utc(2021, 1, 15), -1) == _utc(2020, 12, 15)
    assert add_months(_utc(2021, 3, 31), -13) == _utc(2020, 2, 29)


def test_add_months_across_year_boundary():
    assert add_months(_utc(2021, 11, 30), 3) == _utc(2022, 2, 28)


def test_add_years_clamps_leap_day():
    assert add_years(_utc(2024, 2, 29, 8, 0), 1) == _utc(2025, 2, 28, 8, 0)
    assert add_years(_utc(2024, 2, 29), 4) == _utc(2028, 2, 29)


def test_normalized_datetime_rolls_overflowing_fields():
    assert normalized_datetime(2021, 4, 31) == _utc(2021, 5, 1)
    assert normalized_datetime(2021, 13, 1) == _utc(2022, 1, 1)
    assert normalized_datetime(2021, 0, 1) == _utc(2020, 12, 1)
    assert normalized_datetime(2021, 1, 1, 24, 0) == _utc(2021, 1, 2)
    assert normalized_datetime(2021, 1, 1, 0, 0, 30) == _utc(2021, 1, 1, 0, 0, 30)
