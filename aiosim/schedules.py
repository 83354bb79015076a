"""
Deposit and Withdrawal Schedules

Copyright (c) 2024 Romain Bossut. All Rights Reserved.
This software is proprietary and confidential. Unauthorized copying, distribution,
or use of this software is strictly prohibited.
"""

from collections.abc import Callable

from .calendar_days import CalendarDay
from .config import DEFAULT_CONFIG, SimulationConfig
from .errors import ValidationError
from .models import DepositFrequency, ExpenseFrequency

QUARTER_MONTHS = (1, 4, 7, 10)
HALF_YEAR_MONTHS = (1, 7)


def _every_n_days(days, amount: float, step: int) -> list[float]:
    schedule = [0.0] * len(days)
    for i in range(0, len(days), step):
        schedule[i] = amount
    return schedule


def _on_days_of_month(days, amount: float, days_of_month, months=None) -> list[float]:
    schedule = [0.0] * len(days)
    for day in days:
        if day.day_of_month in days_of_month and (months is None or day.month in months):
            schedule[day.index] = amount
    return schedule


def weekly_deposits(days, monthly_amount: float, config: SimulationConfig = DEFAULT_CONFIG) -> list[float]:
    """monthly / 4.33 every 7th day, starting on day 0"""
    return _every_n_days(days, monthly_amount / config.weekly_periods_per_month, 7)


def biweekly_deposits(days, monthly_amount: float, config: SimulationConfig = DEFAULT_CONFIG) -> list[float]:
    """monthly / 2.17 every 14th day, starting on day 0"""
    return _every_n_days(days, monthly_amount / config.biweekly_periods_per_month, 14)


def semi_monthly_deposits(days, monthly_amount: float, config: SimulationConfig = DEFAULT_CONFIG) -> list[float]:
    """Half the monthly amount on the 1st and the 15th"""
    return _on_days_of_month(days, monthly_amount / 2, (1, 15))


def monthly_deposits(days, monthly_amount: float, config: SimulationConfig = DEFAULT_CONFIG) -> list[float]:
    """Full monthly amount on the 1st"""
    return _on_days_of_month(days, monthly_amount, (1,))


def quarterly_deposits(days, monthly_amount: float, config: SimulationConfig = DEFAULT_CONFIG) -> list[float]:
    """Three months' income on the 1st of Jan, Apr, Jul and Oct"""
    return _on_days_of_month(days, monthly_amount * 3, (1,), QUARTER_MONTHS)


def semi_annual_deposits(days, monthly_amount: float, config: SimulationConfig = DEFAULT_CONFIG) -> list[float]:
    """Six months' income on the 1st of Jan and Jul"""
    return _on_days_of_month(days, monthly_amount * 6, (1,), HALF_YEAR_MONTHS)


def annual_deposits(days, monthly_amount: float, config: SimulationConfig = DEFAULT_CONFIG) -> list[float]:
    """A year's income on January 1st"""
    return _on_days_of_month(days, monthly_amount * 12, (1,), (1,))


DEPOSIT_POLICIES: dict[DepositFrequency, Callable[..., list[float]]] = {
    DepositFrequency.WEEKLY: weekly_deposits,
    DepositFrequency.BIWEEKLY: biweekly_deposits,
    DepositFrequency.SEMI_MONTHLY: semi_monthly_deposits,
    DepositFrequency.MONTHLY: monthly_deposits,
    DepositFrequency.QUARTERLY: quarterly_deposits,
    DepositFrequency.SEMI_ANNUAL: semi_annual_deposits,
    DepositFrequency.ANNUAL: annual_deposits,
}


def daily_expenses(days, monthly_amount: float, config: SimulationConfig = DEFAULT_CONFIG) -> list[float]:
    """Spread each month's expenses evenly over the days of that month"""
    return [monthly_amount / day.days_in_month for day in days]


def weekly_expenses(days, monthly_amount: float, config: SimulationConfig = DEFAULT_CONFIG) -> list[float]:
    """A week's expenses (monthly / 4.33) spread over its 7 days, every day"""
    daily_amount = monthly_amount / config.weekly_periods_per_month / 7
    return [daily_amount] * len(days)


def biweekly_expenses(days, monthly_amount: float, config: SimulationConfig = DEFAULT_CONFIG) -> list[float]:
    return _every_n_days(days, monthly_amount / config.biweekly_periods_per_month, 14)


def monthly_expenses(days, monthly_amount: float, config: SimulationConfig = DEFAULT_CONFIG) -> list[float]:
    return _on_days_of_month(days, monthly_amount, (1,))


EXPENSE_POLICIES: dict[ExpenseFrequency, Callable[..., list[float]]] = {
    ExpenseFrequency.DAILY: daily_expenses,
    ExpenseFrequency.WEEKLY: weekly_expenses,
    ExpenseFrequency.BIWEEKLY: biweekly_expenses,
    ExpenseFrequency.MONTHLY: monthly_expenses,
}


def _coerce(enum_cls, value, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"Unrecognised {label} '{value}'. Expected one of: {allowed}",
            field=label.replace(" ", "_"),
        ) from None


def create_deposit_schedule(
    days: tuple[CalendarDay, ...],
    monthly_income: float,
    frequency: DepositFrequency | str,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> list[float]:
    """Create the per-day deposit amounts for the calendar.

    Parameters:
    - days: generated calendar
    - monthly_income: average monthly deposits
    - frequency: one of the DepositFrequency values

    Returns:
    - List of deposit amounts, same length as days
    """
    frequency = _coerce(DepositFrequency, frequency, "deposit frequency")
    return DEPOSIT_POLICIES[frequency](days, monthly_income, config)


def create_withdrawal_schedule(
    days: tuple[CalendarDay, ...],
    monthly_expenses_amount: float,
    frequency: ExpenseFrequency | str = ExpenseFrequency.DAILY,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> list[float]:
    """Create the per-day expense amounts for the calendar.

    Expenses are spread across every day of the month by default, unlike
    deposits which land as lump sums.
    """
    frequency = _coerce(ExpenseFrequency, frequency, "expense frequency")
    return EXPENSE_POLICIES[frequency](days, monthly_expenses_amount, config)


def create_additional_principal_schedule(
    days: tuple[CalendarDay, ...], additional_principal: float
) -> list[float]:
    """Extra principal lump on the 1st of every month"""
    if additional_principal <= 0:
        return [0.0] * len(days)
    return _on_days_of_month(days, additional_principal, (1,))
