"""
All-In-One Eligibility Checks

Copyright (c) 2024 Romain Bossut. All Rights Reserved.
This software is proprietary and confidential. Unauthorized copying, distribution,
or use of this software is strictly prohibited.
"""

from .config import DEFAULT_CONFIG, SimulationConfig
from .models import CashFlowAnalysis, EligibilityResult, MortgageDetails


def check_eligibility(
    mortgage: MortgageDetails,
    cash_flow: CashFlowAnalysis,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> EligibilityResult:
    """Basic product checks: loan-to-value and positive monthly cash flow.

    Every check contributes a reason, passed or failed, so the caller can
    show the full picture.
    """
    reasons = []

    ltv = mortgage.current_balance / mortgage.property_value * 100
    max_ltv = config.max_ltv * 100
    ltv_passed = ltv <= max_ltv
    if ltv_passed:
        reasons.append(f"LTV of {ltv:.1f}% is within acceptable range")
    else:
        reasons.append(f"LTV of {ltv:.1f}% exceeds maximum of {max_ltv:.0f}%")

    net_cash_flow = cash_flow.net_cash_flow
    cash_flow_passed = net_cash_flow >= config.min_net_cash_flow
    if cash_flow_passed:
        reasons.append(f"Net cash flow of ${net_cash_flow:,.2f} meets minimum requirements")
    else:
        reasons.append(
            f"Net cash flow of ${net_cash_flow:,.2f} is below minimum of "
            f"${config.min_net_cash_flow:,.0f}"
        )

    return EligibilityResult(
        eligible=ltv_passed and cash_flow_passed,
        ltv=ltv,
        ltv_passed=ltv_passed,
        cash_flow_passed=cash_flow_passed,
        reasons=reasons,
    )
