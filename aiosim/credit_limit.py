"""
Credit Limit Model

Copyright (c) 2024 Romain Bossut. All Rights Reserved.
This software is proprietary and confidential. Unauthorized copying, distribution,
or use of this software is strictly prohibited.
"""

from .config import DEFAULT_CONFIG


def calculate_credit_limit(
    property_value: float,
    loan_to_value: float,
    months_elapsed: int,
    decline_months: int = DEFAULT_CONFIG.credit_decline_months,
) -> float:
    """Available credit ceiling after a number of elapsed months.

    The line starts at property_value * loan_to_value and declines linearly
    to zero over decline_months (240 = 20 years), staying at zero afterwards.
    Depends on elapsed months only, never on the loan balance.
    """
    max_credit = property_value * loan_to_value
    remaining = max(0, decline_months - max(months_elapsed, 0))
    return max_credit * remaining / decline_months


def credit_limit_curve(
    property_value: float,
    loan_to_value: float,
    months: int,
    decline_months: int = DEFAULT_CONFIG.credit_decline_months,
) -> list[float]:
    """Credit limit for months 0..months-1, for charting"""
    return [
        calculate_credit_limit(property_value, loan_to_value, m, decline_months)
        for m in range(months)
    ]
