"""
All-In-One Daily Simulation Engine

Copyright (c) 2024 Romain Bossut. All Rights Reserved.
This software is proprietary and confidential. Unauthorized copying, distribution,
or use of this software is strictly prohibited.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import date
from itertools import groupby
from typing import Any

from .calendar_days import generate_calendar, months_elapsed
from .config import DEFAULT_CONFIG, SimulationConfig
from .credit_limit import calculate_credit_limit
from .errors import ValidationError
from .models import SimulationInput
from .rates import RateAdjustmentPolicy, daily_rate
from .schedules import (
    create_additional_principal_schedule,
    create_deposit_schedule,
    create_withdrawal_schedule,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostedInterestEntry:
    """Interest folded into the balance at a month end, awaiting payment."""
    posted_day_index: int
    amount: float
    due_day_index: int


@dataclass(frozen=True)
class DailyResult:
    """Ledger row for one simulated day. Never mutated after creation."""
    day_index: int
    date: date

    # balances
    starting_balance: float
    net_cash_flow: float
    interim_balance: float
    ending_balance: float

    # interest
    annual_rate: float
    daily_interest_rate: float
    daily_interest_accrued: float
    accumulated_interest: float
    interest_posted: float
    interest_paid: float

    # credit facility
    credit_limit: float
    available_credit: float

    # transactions
    deposits: float
    withdrawals: float
    additional_principal: float

    # events
    rate_adjusted: bool = False
    homestead_switch: bool = False


@dataclass(frozen=True)
class SimulationSummary:
    total_interest_paid: float
    total_interest_accrued: float
    unpaid_interest: float
    final_balance: float
    payoff_day_index: int | None
    payoff_date: date | None
    months_to_payoff: int | None
    homestead_switch_day_index: int | None
    days_simulated: int

    @property
    def paid_off(self) -> bool:
        return self.payoff_day_index is not None


@dataclass(frozen=True)
class AIOSimulation:
    """Output of one engine run: the full ledger plus its summary."""
    daily_results: tuple[DailyResult, ...]
    summary: SimulationSummary
    warnings: tuple[str, ...] = field(default_factory=tuple)


def validate_input(
    sim_input: SimulationInput | dict[str, Any],
    config: SimulationConfig = DEFAULT_CONFIG,
) -> SimulationInput:
    """Check an input against the configured bounds before a run.

    Accepts a SimulationInput or a plain dict of its fields. Raises
    ValidationError naming the offending field; nothing is simulated when
    this fails.
    """
    if isinstance(sim_input, dict):
        sim_input = SimulationInput.build(**sim_input)

    if sim_input.starting_balance <= 0:
        raise ValidationError(
            f"Starting balance must be positive, got {sim_input.starting_balance:,.2f}",
            field="starting_balance",
        )

    max_rate = config.max_annual_rate
    if not 0 < sim_input.interest_rate <= max_rate:
        raise ValidationError(
            f"Interest rate must be between 0 and {max_rate}%, got {sim_input.interest_rate}%",
            field="interest_rate",
        )

    if sim_input.is_arm:
        policy = RateAdjustmentPolicy.from_input(sim_input, config)
        curve_length = len(sim_input.arm_index_curve or ())
        # every curve entry plus the fallback index
        for k, rate in enumerate(policy.reset_rates(curve_length + 1)):
            if not 0 < rate <= max_rate:
                raise ValidationError(
                    f"ARM reset {k + 1} would set the rate to {rate:.3f}%, "
                    f"outside 0-{max_rate}%",
                    field="arm_index_curve" if k < curve_length else "arm_index",
                )

    if config.horizon_days <= 0:
        raise ValidationError(
            f"Horizon must be positive, got {config.horizon_days} days", field="horizon_days"
        )
    if config.payment_delay_days <= 0:
        raise ValidationError(
            f"Payment delay must be positive, got {config.payment_delay_days} days",
            field="payment_delay_days",
        )

    return sim_input


def is_paid_off(balance: float) -> bool:
    return balance <= 0


def simulate_aio(
    sim_input: SimulationInput | dict[str, Any],
    config: SimulationConfig = DEFAULT_CONFIG,
) -> AIOSimulation:
    """Simulate an All-In-One loan day by day.

    Each day, in order: ARM rate check, Homestead check, cash flow netting,
    credit limit refresh, interim balance, daily interest accrual, month-end
    posting, payment of interest posted 21 days earlier, cash flow applied to
    the balance, payoff check.

    Deposits reduce the interest-bearing balance on the day they land
    because cash flow is netted before interest accrues.

    Parameters:
    - sim_input: SimulationInput (or dict of its fields)
    - config: SimulationConfig with horizon, delays and bounds

    Returns:
    - AIOSimulation with one DailyResult per simulated day, the summary and
      any warnings. The run stops on the payoff day or when the calendar is
      exhausted.
    """
    sim_input = validate_input(sim_input, config)
    warnings: list[str] = []

    net_monthly = sim_input.monthly_net_cash_flow + sim_input.additional_principal
    if net_monthly <= 0:
        warnings.append(
            f"Net monthly cash flow of ${net_monthly:,.2f} is not positive: "
            f"income (${sim_input.monthly_income:,.2f}) must exceed expenses "
            f"(${sim_input.monthly_expenses:,.2f}) for the loan to pay off."
        )

    days = generate_calendar(sim_input.start_date, config.horizon_days)
    deposit_schedule = create_deposit_schedule(
        days, sim_input.monthly_income, sim_input.deposit_frequency, config
    )
    withdrawal_schedule = create_withdrawal_schedule(
        days, sim_input.monthly_expenses, sim_input.expense_frequency, config
    )
    extra_schedule = create_additional_principal_schedule(days, sim_input.additional_principal)
    policy = RateAdjustmentPolicy.from_input(sim_input, config)

    logger.debug(
        "Starting AIO run: balance=%.2f rate=%.3f%% income=%.2f expenses=%.2f frequency=%s",
        sim_input.starting_balance,
        sim_input.interest_rate,
        sim_input.monthly_income,
        sim_input.monthly_expenses,
        sim_input.deposit_frequency.value,
    )

    # Loan state
    balance = sim_input.starting_balance
    accumulated_interest = 0.0
    pending: deque[PostedInterestEntry] = deque()

    total_interest_paid = 0.0
    total_interest_accrued = 0.0
    payoff_day_index = None
    homestead_day_index = None
    daily_results: list[DailyResult] = []

    for day in days:
        i = day.index
        starting_balance = balance

        annual_rate, rate_adjusted = policy.rate_for_day(day)
        homestead_switch = policy.check_homestead(day)
        if homestead_switch:
            homestead_day_index = i

        deposits = deposit_schedule[i]
        withdrawals = withdrawal_schedule[i]
        additional_principal = extra_schedule[i]
        net_cash_flow = deposits - withdrawals + additional_principal

        credit_limit = calculate_credit_limit(
            sim_input.property_value,
            sim_input.loan_to_value,
            months_elapsed(sim_input.start_date, day.date),
            config.credit_decline_months,
        )

        interim_balance = balance - net_cash_flow

        # No negative interest when same-day cash exceeds the balance
        day_rate = daily_rate(annual_rate, config.days_per_year)
        daily_interest = max(interim_balance, 0.0) * day_rate
        accumulated_interest += daily_interest
        total_interest_accrued += daily_interest

        interest_posted = 0.0
        if day.is_last_day_of_month:
            interest_posted = accumulated_interest
            balance += interest_posted
            accumulated_interest = 0.0
            pending.append(PostedInterestEntry(
                posted_day_index=i,
                amount=interest_posted,
                due_day_index=i + config.payment_delay_days,
            ))

        interest_paid = 0.0
        if pending and pending[0].due_day_index == i:
            entry = pending.popleft()
            interest_paid = entry.amount
            balance -= interest_paid
            total_interest_paid += interest_paid

        balance -= net_cash_flow

        paid_off = is_paid_off(balance)
        if paid_off:
            balance = 0.0
            payoff_day_index = i

        daily_results.append(DailyResult(
            day_index=i,
            date=day.date,
            starting_balance=starting_balance,
            net_cash_flow=net_cash_flow,
            interim_balance=interim_balance,
            ending_balance=balance,
            annual_rate=annual_rate,
            daily_interest_rate=day_rate,
            daily_interest_accrued=daily_interest,
            accumulated_interest=accumulated_interest,
            interest_posted=interest_posted,
            interest_paid=interest_paid,
            credit_limit=credit_limit,
            available_credit=credit_limit - balance,
            deposits=deposits,
            withdrawals=withdrawals,
            additional_principal=additional_principal,
            rate_adjusted=rate_adjusted,
            homestead_switch=homestead_switch,
        ))

        if paid_off:
            logger.debug("Loan paid off on day %d (%s)", i, day.date)
            break

    payoff_date = days[payoff_day_index].date if payoff_day_index is not None else None
    months_to_payoff = (
        months_elapsed(sim_input.start_date, payoff_date) + 1 if payoff_date is not None else None
    )
    unpaid_interest = accumulated_interest + sum(entry.amount for entry in pending)

    summary = SimulationSummary(
        total_interest_paid=total_interest_paid,
        total_interest_accrued=total_interest_accrued,
        unpaid_interest=unpaid_interest,
        final_balance=balance,
        payoff_day_index=payoff_day_index,
        payoff_date=payoff_date,
        months_to_payoff=months_to_payoff,
        homestead_switch_day_index=homestead_day_index,
        days_simulated=len(daily_results),
    )

    if summary.paid_off:
        warnings.append(
            f"Note: Loan fully paid off on {payoff_date.isoformat()} "
            f"(month {months_to_payoff}, Year {months_to_payoff / 12:.1f})"
        )
    else:
        warnings.append(
            f"Warning: Loan will not pay off within {config.horizon_days:,} days. "
            f"Remaining balance: ${balance:,.2f}"
        )

    logger.debug(
        "AIO run finished after %d days: interest paid=%.2f final balance=%.2f",
        summary.days_simulated,
        total_interest_paid,
        balance,
    )
    return AIOSimulation(
        daily_results=tuple(daily_results),
        summary=summary,
        warnings=tuple(warnings),
    )


def summarize_by_month(simulation: AIOSimulation) -> list[dict[str, Any]]:
    """Roll the daily ledger up into one row per calendar month.

    Returns:
    - list of dicts with:
        - month: 1-based loan month
        - label: calendar month as YYYY-MM
        - balance_start / balance_end: balance entering the first day and
          leaving the last simulated day of the month
        - deposits, withdrawals, additional_principal: month totals
        - interest_accrued, interest_posted, interest_paid: month totals
        - credit_limit: credit limit on the last simulated day
        - annual_rate: rate on the last simulated day
    """
    month_data = []
    rows = simulation.daily_results
    for n, ((year, month), group) in enumerate(
        groupby(rows, key=lambda r: (r.date.year, r.date.month)), start=1
    ):
        group = list(group)
        first, last = group[0], group[-1]
        month_data.append({
            "month": n,
            "label": f"{year:04d}-{month:02d}",
            "balance_start": first.starting_balance,
            "balance_end": last.ending_balance,
            "deposits": sum(r.deposits for r in group),
            "withdrawals": sum(r.withdrawals for r in group),
            "additional_principal": sum(r.additional_principal for r in group),
            "interest_accrued": sum(r.daily_interest_accrued for r in group),
            "interest_posted": sum(r.interest_posted for r in group),
            "interest_paid": sum(r.interest_paid for r in group),
            "credit_limit": last.credit_limit,
            "annual_rate": last.annual_rate,
        })
    return month_data
