"""
Rate Adjustment Policy

Copyright (c) 2024 Romain Bossut. All Rights Reserved.
This software is proprietary and confidential. Unauthorized copying, distribution,
or use of this software is strictly prohibited.
"""

import logging
from collections.abc import Sequence

from .calendar_days import CalendarDay, years_elapsed
from .config import DEFAULT_CONFIG, SimulationConfig

logger = logging.getLogger(__name__)


def daily_rate(annual_rate: float, days_per_year: int = DEFAULT_CONFIG.days_per_year) -> float:
    """Convert annual rate in percentage to daily rate in decimal."""
    return annual_rate / 100.0 / days_per_year


def monthly_rate(annual_rate: float) -> float:
    """Convert annual rate in percentage to monthly rate in decimal."""
    return annual_rate / 100.0 / 12.0


def get_rate_for_adjustment(
    index_curve: Sequence[float] | None,
    adjustment: int,
    default_index: float,
) -> float:
    """Index for the n-th (0-based) ARM reset, or default_index past the curve."""
    if index_curve is None or adjustment >= len(index_curve):
        return default_index
    return index_curve[adjustment]


class RateAdjustmentPolicy:
    """Tracks the current annual rate and the Homestead switch for one run.

    ARM loans reset every January 1st (never on day 0) to index + margin.
    Homestead loans raise a one-time flag once 25 whole years have elapsed;
    what the loan does after the switch is not modelled.
    """

    def __init__(
        self,
        initial_rate: float,
        start_date,
        is_arm: bool = False,
        arm_index: float = 5.0,
        arm_margin: float = 2.5,
        arm_index_curve: Sequence[float] | None = None,
        is_homestead_loan: bool = False,
        config: SimulationConfig = DEFAULT_CONFIG,
    ):
        self.current_rate = initial_rate
        self.start_date = start_date
        self.is_arm = is_arm
        self.arm_index = arm_index
        self.arm_margin = arm_margin
        self.arm_index_curve = arm_index_curve
        self.is_homestead_loan = is_homestead_loan
        self.config = config
        self.adjustments = 0
        self.homestead_switched = False

    @classmethod
    def from_input(cls, sim_input, config: SimulationConfig = DEFAULT_CONFIG):
        return cls(
            initial_rate=sim_input.interest_rate,
            start_date=sim_input.start_date,
            is_arm=sim_input.is_arm,
            arm_index=sim_input.arm_index,
            arm_margin=sim_input.arm_margin,
            arm_index_curve=sim_input.arm_index_curve,
            is_homestead_loan=sim_input.is_homestead_loan,
            config=config,
        )

    def reset_rates(self, resets: int) -> list[float]:
        """Rates the first `resets` January resets would apply"""
        return [
            get_rate_for_adjustment(self.arm_index_curve, k, self.arm_index) + self.arm_margin
            for k in range(resets)
        ]

    def rate_for_day(self, day: CalendarDay) -> tuple[float, bool]:
        """Return (annual rate in effect, whether it was reset today)."""
        if self.is_arm and day.index > 0 and day.month == 1 and day.day_of_month == 1:
            index = get_rate_for_adjustment(self.arm_index_curve, self.adjustments, self.arm_index)
            self.current_rate = index + self.arm_margin
            self.adjustments += 1
            logger.debug("ARM reset on %s: %.3f%%", day.date, self.current_rate)
            return self.current_rate, True
        return self.current_rate, False

    def check_homestead(self, day: CalendarDay) -> bool:
        """True exactly once: the first day 25 whole years have elapsed."""
        if not self.is_homestead_loan or self.homestead_switched:
            return False
        if years_elapsed(self.start_date, day.date) >= self.config.homestead_switch_years:
            self.homestead_switched = True
            logger.debug("Homestead amortization switch flagged on %s", day.date)
            return True
        return False
