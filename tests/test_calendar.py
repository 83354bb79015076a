import os
import sys
from datetime import date, datetime, timedelta

import pytest

# Add the parent directory to the Python path so we can import the aiosim package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from aiosim.calendar_days import (
    add_months,
    generate_calendar,
    get_days_in_month,
    is_leap_year,
    months_elapsed,
    years_elapsed,
)


def test_default_horizon_length():
    """The default calendar covers 11,020 consecutive days"""
    days = generate_calendar(date(2025, 1, 1))
    assert len(days) == 11020
    assert days[0].index == 0
    assert days[0].date == date(2025, 1, 1)
    assert days[-1].date == date(2025, 1, 1) + timedelta(days=11019)


def test_days_are_consecutive():
    days = generate_calendar(date(2023, 11, 20), 500)
    for previous, current in zip(days, days[1:]):
        assert current.index == previous.index + 1
        assert current.date - previous.date == timedelta(days=1)


def test_leap_year_february():
    """February 29th exists in 2024 and closes the month"""
    days = generate_calendar(date(2024, 2, 1), 60)
    feb_29 = days[28]
    assert feb_29.date == date(2024, 2, 29)
    assert feb_29.is_last_day_of_month
    assert feb_29.days_in_month == 29
    assert feb_29.is_leap_year
    assert not days[27].is_last_day_of_month


def test_non_leap_february():
    days = generate_calendar(date(2025, 2, 1), 30)
    assert days[27].date == date(2025, 2, 28)
    assert days[27].is_last_day_of_month
    assert days[27].days_in_month == 28
    assert days[28].date == date(2025, 3, 1)


def test_year_rollover():
    days = generate_calendar(date(2024, 12, 30), 4)
    assert [d.date for d in days] == [
        date(2024, 12, 30), date(2024, 12, 31), date(2025, 1, 1), date(2025, 1, 2)
    ]
    assert days[1].is_last_day_of_month
    assert days[1].day_of_year == 366
    assert days[2].day_of_year == 1
    assert days[2].year == 2025
    assert days[2].month == 1
    assert days[2].day_of_month == 1


def test_index_is_offset_from_start():
    """A date's position in the calendar is its day offset from the start"""
    start = date(2024, 1, 1)
    days = generate_calendar(start, 400)
    assert all(day.index == (day.date - start).days for day in days)
    assert days[(date(2024, 2, 1) - start).days].date == date(2024, 2, 1)


def test_last_day_flags_once_per_month():
    days = generate_calendar(date(2024, 1, 1), 366)
    last_days = [d for d in days if d.is_last_day_of_month]
    assert len(last_days) == 12
    assert all(d.day_of_month == d.days_in_month for d in last_days)


def test_calendar_is_deterministic():
    """Same start date gives an identical sequence"""
    assert generate_calendar(date(2025, 3, 14), 1000) == generate_calendar(date(2025, 3, 14), 1000)


def test_datetime_start_is_truncated_to_date():
    days = generate_calendar(datetime(2025, 1, 1, 23, 59), 2)
    assert type(days[0].date) is date
    assert days[0].date == date(2025, 1, 1)


def test_invalid_horizon():
    with pytest.raises(ValueError):
        generate_calendar(date(2025, 1, 1), 0)


def test_days_in_month_helpers():
    assert get_days_in_month(2, 2024) == 29
    assert get_days_in_month(2, 2100) == 28
    assert get_days_in_month(2, 2000) == 29
    assert get_days_in_month(4, 2025) == 30
    assert is_leap_year(2024)
    assert not is_leap_year(2025)


def test_months_elapsed():
    assert months_elapsed(date(2024, 1, 15), date(2024, 1, 15)) == 0
    assert months_elapsed(date(2024, 1, 15), date(2024, 2, 14)) == 0
    assert months_elapsed(date(2024, 1, 15), date(2024, 2, 15)) == 1
    assert months_elapsed(date(2024, 1, 31), date(2024, 2, 28)) == 0
    assert months_elapsed(date(2024, 1, 31), date(2024, 2, 29)) == 1
    assert months_elapsed(date(2024, 1, 1), date(2044, 1, 1)) == 240


def test_years_elapsed_counts_anniversaries():
    assert years_elapsed(date(2024, 3, 15), date(2049, 3, 14)) == 24
    assert years_elapsed(date(2024, 3, 15), date(2049, 3, 15)) == 25
    assert years_elapsed(date(2024, 2, 29), date(2025, 2, 28)) == 1


def test_add_months_clamps_short_months():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months(date(2025, 11, 15), 3) == date(2026, 2, 15)
    assert add_months(date(2025, 1, 1), 345) == date(2053, 10, 1)
