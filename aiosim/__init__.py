"""
All-In-One Loan Simulator

Copyright (c) 2024 Romain Bossut. All Rights Reserved.
This software is proprietary and confidential. Unauthorized copying, distribution,
or use of this software is strictly prohibited.
"""

from .calendar_days import CalendarDay, generate_calendar
from .comparison import (
    ComparisonRun,
    calculate_minimum_cash_flow_needed,
    compare_loans,
    run_comparison,
    simulate_loan,
)
from .config import DEFAULT_CONFIG, SimulationConfig
from .credit_limit import calculate_credit_limit
from .eligibility import check_eligibility
from .engine import (
    AIOSimulation,
    DailyResult,
    PostedInterestEntry,
    SimulationSummary,
    simulate_aio,
    summarize_by_month,
    validate_input,
)
from .errors import ConvergenceError, SimulationError, ValidationError
from .models import (
    CashFlowAnalysis,
    Comparison,
    DepositFrequency,
    EligibilityResult,
    ExpenseFrequency,
    LoanProjection,
    MinimumCashFlow,
    MonthlyBreakdown,
    MortgageDetails,
    SimulationInput,
    SimulationResult,
)
from .schedules import create_deposit_schedule, create_withdrawal_schedule
from .traditional import TraditionalSchedule, amortize_traditional, calculate_monthly_payment

__version__ = "1.0.0"

__all__ = [
    "AIOSimulation",
    "CalendarDay",
    "CashFlowAnalysis",
    "Comparison",
    "ComparisonRun",
    "ConvergenceError",
    "DEFAULT_CONFIG",
    "DailyResult",
    "DepositFrequency",
    "EligibilityResult",
    "ExpenseFrequency",
    "LoanProjection",
    "MinimumCashFlow",
    "MonthlyBreakdown",
    "MortgageDetails",
    "PostedInterestEntry",
    "SimulationConfig",
    "SimulationError",
    "SimulationInput",
    "SimulationResult",
    "SimulationSummary",
    "TraditionalSchedule",
    "ValidationError",
    "amortize_traditional",
    "calculate_credit_limit",
    "calculate_minimum_cash_flow_needed",
    "calculate_monthly_payment",
    "check_eligibility",
    "compare_loans",
    "create_deposit_schedule",
    "create_withdrawal_schedule",
    "generate_calendar",
    "run_comparison",
    "simulate_aio",
    "simulate_loan",
    "summarize_by_month",
    "validate_input",
]
