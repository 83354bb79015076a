"""
Simulation Calendar

Copyright (c) 2024 Romain Bossut. All Rights Reserved.
This software is proprietary and confidential. Unauthorized copying, distribution,
or use of this software is strictly prohibited.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

from .config import DEFAULT_CONFIG


@dataclass(frozen=True)
class CalendarDay:
    """One day of the simulation horizon."""

    index: int
    date: date
    day_of_month: int
    month: int
    year: int
    day_of_year: int
    is_last_day_of_month: bool
    is_leap_year: bool
    days_in_month: int


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def get_days_in_month(month: int, year: int) -> int:
    """Number of days in a 1-based month of the given year (28-31)."""
    return calendar.monthrange(year, month)[1]


def generate_calendar(
    start_date: date, horizon_days: int = DEFAULT_CONFIG.horizon_days
) -> tuple[CalendarDay, ...]:
    """Generate the day-by-day calendar for a run.

    The sequence starts at start_date (index 0) and contains exactly
    horizon_days consecutive calendar dates. The result depends only on its
    arguments, so calling it twice with the same start date yields equal
    sequences.

    Parameters:
    - start_date: first simulated day (a date, not a datetime)
    - horizon_days: number of days to generate

    Returns:
    - Tuple of CalendarDay, ordered by index
    """
    if horizon_days <= 0:
        raise ValueError(f"Horizon must be positive, got {horizon_days} days")
    # datetime is a subclass of date; strip the time so no timezone leaks in
    start = date(start_date.year, start_date.month, start_date.day)

    days = []
    current = start
    for index in range(horizon_days):
        days_in_month = get_days_in_month(current.month, current.year)
        days.append(CalendarDay(
            index=index,
            date=current,
            day_of_month=current.day,
            month=current.month,
            year=current.year,
            day_of_year=current.timetuple().tm_yday,
            is_last_day_of_month=current.day == days_in_month,
            is_leap_year=is_leap_year(current.year),
            days_in_month=days_in_month,
        ))
        current += timedelta(days=1)

    return tuple(days)


def months_elapsed(start: date, current: date) -> int:
    """Whole calendar months between start and current.

    A month counts once its anniversary day is reached, e.g. Jan 15 to
    Feb 14 is 0 months and Jan 15 to Feb 15 is 1 month. When the anniversary
    day does not exist (Jan 31 to Feb 28) the last day of the month counts.
    """
    months = (current.year - start.year) * 12 + (current.month - start.month)
    anniversary_day = min(start.day, get_days_in_month(current.month, current.year))
    if current.day < anniversary_day:
        months -= 1
    return max(months, 0)


def years_elapsed(start: date, current: date) -> int:
    """Whole years between start and current, counted on anniversaries."""
    return months_elapsed(start, current) // 12


def add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping to the end of shorter months."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, get_days_in_month(month, year))
    return date(year, month, day)
