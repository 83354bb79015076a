"""
Simulation Input and Output Models

Copyright (c) 2024 Romain Bossut. All Rights Reserved.
This software is proprietary and confidential. Unauthorized copying, distribution,
or use of this software is strictly prohibited.
"""

from datetime import date
from enum import Enum
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError


class DepositFrequency(str, Enum):
    """How often income lands in the account."""
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMI_MONTHLY = "semi-monthly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi-annual"
    ANNUAL = "annual"


class ExpenseFrequency(str, Enum):
    """How expenses leave the account."""
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


def format_validation_error(error: PydanticValidationError) -> str:
    """Flatten a pydantic error into a single readable line"""
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "input"
        parts.append(f"{location}: {err['msg']} (got {err.get('input')!r})")
    return "; ".join(parts)


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def build(cls, **values):
        """Construct the model, raising aiosim ValidationError on bad input"""
        try:
            return cls(**values)
        except PydanticValidationError as e:
            first = e.errors()[0]["loc"] if e.errors() else ()
            field = ".".join(str(part) for part in first) or None
            raise ValidationError(
                f"Invalid {cls.__name__}: {format_validation_error(e)}", field=field
            ) from e


# Request Models
class SimulationInput(_FrozenModel):
    """Everything one All-In-One run needs. Immutable for the life of the run."""
    starting_balance: float = Field(..., gt=0, description="Loan balance on the start date")
    interest_rate: float = Field(..., gt=0, le=100, description="Annual AIO rate as percentage (e.g., 8.201)")
    property_value: float = Field(..., gt=0, description="Appraised property value")
    loan_to_value: float = Field(0.80, gt=0, le=1, description="Maximum LTV as a fraction (e.g., 0.80)")
    monthly_income: float = Field(..., ge=0, description="Average monthly deposits")
    monthly_expenses: float = Field(..., ge=0, description="Average monthly expenses")
    deposit_frequency: DepositFrequency = Field(DepositFrequency.MONTHLY, description="Deposit cadence")
    expense_frequency: ExpenseFrequency = Field(ExpenseFrequency.DAILY, description="Expense cadence")
    additional_principal: float = Field(0.0, ge=0, description="Extra principal applied on the 1st of each month")
    is_homestead_loan: bool = Field(False, description="Flag the year-25 amortization switch")
    is_arm: bool = Field(False, description="Reset the rate every January 1st")
    arm_index: float = Field(5.0, ge=0, le=100, description="ARM index as percentage")
    arm_margin: float = Field(2.5, ge=0, le=100, description="ARM margin over index as percentage")
    arm_index_curve: Optional[Tuple[float, ...]] = Field(
        None, description="Index for each successive January reset; arm_index once exhausted"
    )
    start_date: date = Field(..., description="First simulated day")

    @field_validator("arm_index_curve")
    @classmethod
    def check_curve(cls, v):
        if v is not None and any(rate < 0 for rate in v):
            raise ValueError("ARM index curve contains negative rates")
        return v

    @property
    def monthly_net_cash_flow(self) -> float:
        return self.monthly_income - self.monthly_expenses


class MortgageDetails(_FrozenModel):
    """Loan facts supplied by the user or operator"""
    current_balance: float = Field(..., gt=0, description="Outstanding principal")
    interest_rate: float = Field(..., gt=0, le=100, description="Traditional mortgage rate as percentage")
    aio_interest_rate: float = Field(..., gt=0, le=100, description="All-In-One rate as percentage")
    monthly_payment: Optional[float] = Field(None, gt=0, description="Traditional P&I payment; derived from the term if omitted")
    remaining_term_months: int = Field(360, gt=0, le=480, description="Remaining traditional term in months")
    property_value: float = Field(..., gt=0, description="Appraised property value")
    loan_to_value: float = Field(0.80, gt=0, le=1, description="AIO maximum LTV as a fraction")
    current_housing_payment: float = Field(0.0, ge=0, description="Current total housing payment")
    additional_principal: float = Field(0.0, ge=0, description="Extra monthly principal for the AIO loan")
    is_homestead_loan: bool = False
    is_arm: bool = False
    arm_index: float = Field(5.0, ge=0, le=100)
    arm_margin: float = Field(2.5, ge=0, le=100)
    arm_index_curve: Optional[Tuple[float, ...]] = None


class MonthlyBreakdown(_FrozenModel):
    """Income and expenses observed for one statement month"""
    month: str = Field(..., pattern=r"^\d{4}-\d{2}$", description="Month as YYYY-MM")
    income: float = Field(..., ge=0)
    expenses: float = Field(..., ge=0)
    transaction_count: int = Field(0, ge=0)

    @property
    def net_cash_flow(self) -> float:
        return self.income - self.expenses


class CashFlowAnalysis(_FrozenModel):
    """Aggregated cash flow from the statement categorisation step"""
    monthly_income: Optional[float] = Field(None, ge=0, description="Pre-computed average monthly income")
    monthly_expenses: Optional[float] = Field(None, ge=0, description="Pre-computed average monthly expenses")
    total_income: Optional[float] = Field(None, ge=0, description="Income over the whole statement period")
    total_expenses: Optional[float] = Field(None, ge=0, description="Expenses over the whole statement period")
    monthly_breakdown: List[MonthlyBreakdown] = Field(default_factory=list)
    deposit_frequency: DepositFrequency = DepositFrequency.MONTHLY
    expense_frequency: ExpenseFrequency = ExpenseFrequency.DAILY
    confidence: float = Field(1.0, ge=0, le=1)

    @model_validator(mode="after")
    def check_has_figures(self):
        has_income = self.monthly_income is not None or self.total_income is not None or self.monthly_breakdown
        has_expenses = self.monthly_expenses is not None or self.total_expenses is not None or self.monthly_breakdown
        if not (has_income and has_expenses):
            raise ValueError(
                "Cash flow needs monthly figures, totals, or a monthly breakdown"
            )
        return self

    @property
    def months_of_data(self) -> int:
        return len(self.monthly_breakdown) or 1

    @property
    def average_monthly_income(self) -> float:
        # Pre-computed monthly figures win over totals
        if self.monthly_income is not None:
            return self.monthly_income
        if self.total_income is not None:
            return self.total_income / self.months_of_data
        return sum(m.income for m in self.monthly_breakdown) / self.months_of_data

    @property
    def average_monthly_expenses(self) -> float:
        if self.monthly_expenses is not None:
            return self.monthly_expenses
        if self.total_expenses is not None:
            return self.total_expenses / self.months_of_data
        return sum(m.expenses for m in self.monthly_breakdown) / self.months_of_data

    @property
    def net_cash_flow(self) -> float:
        return self.average_monthly_income - self.average_monthly_expenses


# Response Models
class LoanProjection(_FrozenModel):
    """Headline figures for one loan structure"""
    loan_type: Literal["traditional", "all-in-one"]
    monthly_payment: float = Field(..., description="P&I payment, or net monthly cash flow for the AIO loan")
    total_interest_paid: float
    payoff_date: Optional[date] = Field(None, description="None when the loan does not pay off within the horizon")
    payoff_months: Optional[int] = None
    interest_savings: Optional[float] = None
    months_saved: Optional[int] = None


class Comparison(_FrozenModel):
    """Traditional minus All-In-One. Negative savings mean the AIO loan is worse."""
    interest_savings: float
    time_saved_months: Optional[int] = Field(None, description="None when the AIO loan never pays off")
    percentage_savings: float
    aio_is_better: bool
    aio_pays_off: bool


class MinimumCashFlow(_FrozenModel):
    """Smallest monthly net cash flow that makes the AIO loan worthwhile"""
    minimum_monthly_cash_flow: float
    current_monthly_cash_flow: float
    additional_needed: float
    target_payoff_months: int
    achievable: bool = True


class EligibilityResult(_FrozenModel):
    eligible: bool
    ltv: float = Field(..., description="Loan to value as percentage")
    ltv_passed: bool
    cash_flow_passed: bool
    reasons: List[str] = Field(default_factory=list)


class SimulationResult(_FrozenModel):
    """Complete comparison handed to the presentation layer"""
    traditional_loan: LoanProjection
    all_in_one_loan: LoanProjection
    comparison: Comparison
    minimum_cash_flow: Optional[MinimumCashFlow] = None
    warnings: List[str] = Field(default_factory=list)
