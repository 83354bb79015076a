"""
Traditional Mortgage Amortization

Copyright (c) 2024 Romain Bossut. All Rights Reserved.
This software is proprietary and confidential. Unauthorized copying, distribution,
or use of this software is strictly prohibited.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .calendar_days import add_months
from .config import DEFAULT_CONFIG, SimulationConfig
from .errors import ConvergenceError, ValidationError
from .rates import monthly_rate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraditionalSchedule:
    monthly_payment: float
    total_interest_paid: float
    payoff_months: int
    payoff_date: date
    month_data: list[dict[str, Any]] = field(default_factory=list)


def calculate_monthly_payment(
    principal: float, annual_interest_rate: float, months: int
) -> float:
    """Calculate the monthly mortgage payment for a given principal, annual interest rate, and term in months.

    Uses the standard amortization formula:
      P = (r * PV) / (1 - (1+r)^(-n))

    Where:
      P = monthly payment
      r = monthly interest rate (annual_interest_rate/12)
      PV = present value (principal)
      n = number of months

    Note: annual_interest_rate should be in percentage (e.g., 6.5 for 6.5%)
    """
    if months <= 0:
        return principal  # If no term left, just return what's due.

    rate = monthly_rate(annual_interest_rate)

    if rate == 0:
        # No interest scenario
        return principal / months

    return rate * principal / (1 - (1 + rate) ** (-months))


def check_amortization_feasible(
    principal: float, annual_rate: float, payment: float
) -> tuple[bool, float]:
    """Check whether a payment covers the first month's interest.

    Returns:
    - (bool, float): (Does the payment amortize, first-month interest)
    """
    first_interest = principal * monthly_rate(annual_rate)
    return payment > first_interest, first_interest


def amortize_traditional(
    balance: float,
    annual_rate: float,
    monthly_payment: float,
    start_date: date,
    max_months: int | None = None,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> TraditionalSchedule:
    """Amortize a fixed-rate loan month by month.

    Each month: interest = balance * rate / 12, principal = payment - interest,
    until the balance drops to the payoff tolerance.

    Parameters:
    - balance: outstanding principal
    - annual_rate: annual rate in percentage
    - monthly_payment: fixed P&I payment
    - start_date: date the schedule starts from
    - max_months: term cap, defaults to config.max_traditional_months (360)

    Raises:
    - ValidationError if inputs are out of range or the payment does not
      exceed the first month's interest
    - ConvergenceError if a balance remains after max_months
    """
    if max_months is None:
        max_months = config.max_traditional_months

    if balance <= 0:
        raise ValidationError(f"Loan balance must be positive, got {balance:,.2f}", field="current_balance")
    if not 0 < annual_rate <= config.max_annual_rate:
        raise ValidationError(
            f"Interest rate must be between 0 and {config.max_annual_rate}%, got {annual_rate}%",
            field="interest_rate",
        )
    if monthly_payment <= 0:
        raise ValidationError(
            f"Monthly payment must be greater than zero, got {monthly_payment:,.2f}",
            field="monthly_payment",
        )

    feasible, first_interest = check_amortization_feasible(balance, annual_rate, monthly_payment)
    if not feasible:
        raise ValidationError(
            f"Monthly payment of ${monthly_payment:,.2f} does not cover the first month's "
            f"interest of ${first_interest:,.2f} at {annual_rate:.3f}%; the loan would never pay off",
            field="monthly_payment",
        )

    rate = monthly_rate(annual_rate)
    total_interest = 0.0
    months = 0
    month_data = []

    while balance > config.payoff_tolerance and months < max_months:
        interest = balance * rate
        principal_repaid = monthly_payment - interest
        new_balance = max(balance - principal_repaid, 0.0)
        total_interest += interest
        months += 1

        month_data.append({
            "month": months,
            "principal_start": balance,
            "monthly_payment": monthly_payment,
            "interest_paid": interest,
            "principal_repaid": principal_repaid,
            "principal_end": new_balance,
        })
        balance = new_balance

    if balance > config.payoff_tolerance:
        raise ConvergenceError(
            f"Loan not amortized within {max_months} months: ${balance:,.2f} remains "
            f"with a ${monthly_payment:,.2f} payment at {annual_rate:.3f}%",
            remaining_balance=balance,
            months=months,
        )

    logger.debug(
        "Traditional loan pays off in %d months with %.2f interest", months, total_interest
    )
    return TraditionalSchedule(
        monthly_payment=monthly_payment,
        total_interest_paid=total_interest,
        payoff_months=months,
        payoff_date=add_months(start_date, months),
        month_data=month_data,
    )
