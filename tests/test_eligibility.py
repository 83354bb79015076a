import os
import sys
from math import isclose

# Add the parent directory to the Python path so we can import the aiosim package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from aiosim.config import SimulationConfig
from aiosim.eligibility import check_eligibility
from aiosim.models import CashFlowAnalysis, EligibilityResult, MortgageDetails


def mortgage(balance=650000.0, property_value=1000000.0):
    return MortgageDetails(
        current_balance=balance,
        interest_rate=6.5,
        aio_interest_rate=8.201,
        property_value=property_value,
    )


def cash_flow(income=12000.0, expenses=7192.14):
    return CashFlowAnalysis(monthly_income=income, monthly_expenses=expenses)


def test_eligible_scenario():
    result = check_eligibility(mortgage(), cash_flow())
    assert result.eligible
    assert isclose(result.ltv, 65.0)
    assert result.ltv_passed
    assert result.cash_flow_passed
    assert len(result.reasons) == 2
    assert "within acceptable range" in result.reasons[0]
    assert set(EligibilityResult.model_fields) == {"eligible", "ltv", "ltv_passed", "cash_flow_passed", "reasons"}


def test_ltv_too_high():
    result = check_eligibility(mortgage(balance=900000.0), cash_flow())
    assert not result.eligible
    assert not result.ltv_passed
    assert "exceeds maximum of 80%" in result.reasons[0]


def test_cash_flow_too_low():
    result = check_eligibility(mortgage(), cash_flow(income=7500.0, expenses=7192.14))
    assert not result.eligible
    assert not result.cash_flow_passed
    assert "below minimum" in result.reasons[1]


def test_eligibility_thresholds_from_config():
    config = SimulationConfig(max_ltv=0.60, min_net_cash_flow=100.0)
    result = check_eligibility(mortgage(), cash_flow(income=7500.0), config)
    assert not result.ltv_passed
    assert result.cash_flow_passed
