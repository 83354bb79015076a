"""
Simulation Errors

Copyright (c) 2024 Romain Bossut. All Rights Reserved.
This software is proprietary and confidential. Unauthorized copying, distribution,
or use of this software is strictly prohibited.
"""


class SimulationError(Exception):
    """Base class for every error raised by the simulation core."""


class ValidationError(SimulationError, ValueError):
    """Raised before a run starts when inputs cannot be simulated.

    Covers non-positive balances, rates outside the accepted range,
    unrecognised frequencies and payments that do not cover interest.
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ConvergenceError(SimulationError):
    """Raised when a traditional loan is not amortized within the maximum term.

    This signals a configuration problem (payment too small for the term),
    not a slow but valid payoff.
    """

    def __init__(self, message: str, remaining_balance: float, months: int):
        super().__init__(message)
        self.remaining_balance = remaining_balance
        self.months = months
