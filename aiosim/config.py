"""
Simulation Configuration

Copyright (c) 2024 Romain Bossut. All Rights Reserved.
This software is proprietary and confidential. Unauthorized copying, distribution,
or use of this software is strictly prohibited.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationConfig:
    """Constants that shape a run. Passed explicitly, never read from the environment."""

    # calendar
    horizon_days: int = 11020  # 30+ years, covers any 30-year term across leap years
    days_per_year: int = 365

    # AIO mechanics
    payment_delay_days: int = 21
    credit_decline_months: int = 240
    homestead_switch_years: int = 25

    # deposit scaling
    weekly_periods_per_month: float = 4.33
    biweekly_periods_per_month: float = 2.17

    # traditional amortization
    max_traditional_months: int = 360
    payoff_tolerance: float = 0.01

    # validation bounds
    max_annual_rate: float = 20.0  # percent

    # viability / eligibility
    min_months_saved: int = 12
    max_ltv: float = 0.80
    min_net_cash_flow: float = 500.0


DEFAULT_CONFIG = SimulationConfig()
