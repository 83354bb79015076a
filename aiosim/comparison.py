"""
Traditional vs All-In-One Comparison

Copyright (c) 2024 Romain Bossut. All Rights Reserved.
This software is proprietary and confidential. Unauthorized copying, distribution,
or use of this software is strictly prohibited.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date

from .config import DEFAULT_CONFIG, SimulationConfig
from .engine import AIOSimulation, SimulationSummary, simulate_aio, validate_input
from .models import (
    CashFlowAnalysis,
    Comparison,
    LoanProjection,
    MinimumCashFlow,
    MortgageDetails,
    SimulationInput,
    SimulationResult,
)
from .traditional import TraditionalSchedule, amortize_traditional, calculate_monthly_payment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonRun:
    """A SimulationResult together with the detail it was reduced from."""
    result: SimulationResult
    sim_input: SimulationInput
    aio: AIOSimulation
    traditional: TraditionalSchedule


def traditional_projection(schedule: TraditionalSchedule) -> LoanProjection:
    return LoanProjection(
        loan_type="traditional",
        monthly_payment=schedule.monthly_payment,
        total_interest_paid=schedule.total_interest_paid,
        payoff_date=schedule.payoff_date,
        payoff_months=schedule.payoff_months,
    )


def aio_projection(summary: SimulationSummary, monthly_net_cash_flow: float) -> LoanProjection:
    # The AIO "payment" is whatever net cash flow reduces the balance each month
    return LoanProjection(
        loan_type="all-in-one",
        monthly_payment=monthly_net_cash_flow,
        total_interest_paid=summary.total_interest_paid,
        payoff_date=summary.payoff_date,
        payoff_months=summary.months_to_payoff,
    )


def compare_loans(traditional: LoanProjection, aio: LoanProjection) -> Comparison:
    """Reduce two projections to savings figures.

    interest_savings keeps its sign: a negative value means the AIO loan
    costs more. time_saved_months is None when the AIO loan does not pay off
    within the horizon, so a non-viable AIO loan is never reported as saving
    time.
    """
    interest_savings = traditional.total_interest_paid - aio.total_interest_paid
    aio_pays_off = aio.payoff_months is not None

    time_saved_months = None
    if aio_pays_off and traditional.payoff_months is not None:
        time_saved_months = traditional.payoff_months - aio.payoff_months

    if traditional.total_interest_paid == 0:
        percentage_savings = 0.0
    else:
        percentage_savings = interest_savings / traditional.total_interest_paid * 100

    return Comparison(
        interest_savings=interest_savings,
        time_saved_months=time_saved_months,
        percentage_savings=percentage_savings,
        aio_is_better=aio_pays_off and interest_savings > 0,
        aio_pays_off=aio_pays_off,
    )


def calculate_minimum_cash_flow_needed(
    sim_input: SimulationInput,
    traditional_payoff_months: int,
    config: SimulationConfig = DEFAULT_CONFIG,
    high: float = 50000.0,
    max_iterations: int = 20,
    tolerance: float = 10.0,
) -> MinimumCashFlow:
    """Find the smallest monthly net cash flow worth switching for.

    Worth switching means the AIO loan pays off at least
    config.min_months_saved months before the traditional loan. Expenses are
    held fixed and income is varied; each candidate is run through the same
    daily engine, and the search bisects [0, high] until the bracket is
    narrower than tolerance.
    """
    target_months = max(config.min_months_saved, traditional_payoff_months - config.min_months_saved)

    def meets_target(net_cash_flow: float) -> bool:
        candidate = sim_input.model_copy(
            update={"monthly_income": sim_input.monthly_expenses + net_cash_flow}
        )
        summary = simulate_aio(candidate, config).summary
        return summary.paid_off and summary.months_to_payoff <= target_months

    low = 0.0
    achievable = meets_target(high)
    result = high

    if achievable:
        for _ in range(max_iterations):
            mid = (low + high) / 2
            if meets_target(mid):
                result = mid
                high = mid
            else:
                low = mid
            # Converged within tolerance
            if high - low < tolerance:
                break

    minimum = float(math.ceil(result))
    current = sim_input.monthly_net_cash_flow
    logger.debug(
        "Minimum monthly cash flow for a %d-month payoff: %.2f (current %.2f)",
        target_months,
        minimum,
        current,
    )
    return MinimumCashFlow(
        minimum_monthly_cash_flow=minimum,
        current_monthly_cash_flow=current,
        additional_needed=max(0.0, minimum - current),
        target_payoff_months=target_months,
        achievable=achievable,
    )


def build_simulation_input(
    mortgage: MortgageDetails, cash_flow: CashFlowAnalysis, start_date: date
) -> SimulationInput:
    """Map the collaborator inputs onto one engine input"""
    return SimulationInput.build(
        starting_balance=mortgage.current_balance,
        interest_rate=mortgage.aio_interest_rate,
        property_value=mortgage.property_value,
        loan_to_value=mortgage.loan_to_value,
        monthly_income=cash_flow.average_monthly_income,
        monthly_expenses=cash_flow.average_monthly_expenses,
        deposit_frequency=cash_flow.deposit_frequency,
        expense_frequency=cash_flow.expense_frequency,
        additional_principal=mortgage.additional_principal,
        is_homestead_loan=mortgage.is_homestead_loan,
        is_arm=mortgage.is_arm,
        arm_index=mortgage.arm_index,
        arm_margin=mortgage.arm_margin,
        arm_index_curve=mortgage.arm_index_curve,
        start_date=start_date,
    )


def run_comparison(
    mortgage: MortgageDetails,
    cash_flow: CashFlowAnalysis,
    start_date: date,
    config: SimulationConfig = DEFAULT_CONFIG,
    include_minimum_cash_flow: bool = True,
) -> ComparisonRun:
    """Run both loan structures on the same inputs and compare them.

    Every input check happens before either loan is simulated. When the AIO
    loan saves fewer than config.min_months_saved months, or never pays off,
    the result also carries the minimum cash flow that would make it
    worthwhile.
    """
    sim_input = validate_input(build_simulation_input(mortgage, cash_flow, start_date), config)

    payment = mortgage.monthly_payment
    if payment is None:
        payment = calculate_monthly_payment(
            mortgage.current_balance, mortgage.interest_rate, mortgage.remaining_term_months
        )
    traditional = amortize_traditional(
        mortgage.current_balance,
        mortgage.interest_rate,
        payment,
        start_date,
        max_months=max(config.max_traditional_months, mortgage.remaining_term_months),
        config=config,
    )

    aio = simulate_aio(sim_input, config)

    traditional_loan = traditional_projection(traditional)
    aio_loan = aio_projection(aio.summary, sim_input.monthly_net_cash_flow + sim_input.additional_principal)
    comparison = compare_loans(traditional_loan, aio_loan)
    aio_loan = aio_loan.model_copy(update={
        "interest_savings": comparison.interest_savings,
        "months_saved": comparison.time_saved_months,
    })

    warnings = list(aio.warnings)
    if comparison.interest_savings < 0:
        warnings.append(
            f"Warning: All-In-One loan costs ${-comparison.interest_savings:,.2f} more interest "
            f"than the traditional loan."
        )

    minimum_cash_flow = None
    saves_enough = (
        comparison.time_saved_months is not None
        and comparison.time_saved_months >= config.min_months_saved
    )
    if include_minimum_cash_flow and not saves_enough:
        minimum_cash_flow = calculate_minimum_cash_flow_needed(
            sim_input, traditional.payoff_months, config
        )
        if minimum_cash_flow.achievable:
            warnings.append(
                f"Info: A net monthly cash flow of ${minimum_cash_flow.minimum_monthly_cash_flow:,.2f} "
                f"is needed to pay off within {minimum_cash_flow.target_payoff_months} months "
                f"(${minimum_cash_flow.additional_needed:,.2f} more than today)."
            )
        else:
            warnings.append(
                f"Warning: No net monthly cash flow up to "
                f"${minimum_cash_flow.minimum_monthly_cash_flow:,.2f} pays off within "
                f"{minimum_cash_flow.target_payoff_months} months."
            )

    result = SimulationResult(
        traditional_loan=traditional_loan,
        all_in_one_loan=aio_loan,
        comparison=comparison,
        minimum_cash_flow=minimum_cash_flow,
        warnings=warnings,
    )
    return ComparisonRun(result=result, sim_input=sim_input, aio=aio, traditional=traditional)


def simulate_loan(
    mortgage: MortgageDetails,
    cash_flow: CashFlowAnalysis,
    start_date: date,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> SimulationResult:
    """Compare a traditional mortgage with an All-In-One loan.

    Returns:
    - SimulationResult with both projections, the comparison, an optional
      minimum cash flow hint and warnings
    """
    return run_comparison(mortgage, cash_flow, start_date, config).result
