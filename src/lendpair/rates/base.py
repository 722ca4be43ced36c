"""Capability interface shared by the interest rate modules."""

from typing import Protocol


class RateCalculator[C](Protocol):
    """
    An interest rate module.

    Modules are stateless: all parameters come from a validated constants model, and the current
    rate is passed in and returned rather than stored.
    """

    name: str

    def update_rate(
        self,
        constants: C,
        utilization: int,
        current_rate: int,
        elapsed_time: int,
    ) -> int:
        """
        Calculate the next per-second rate.

        Args:
            constants: The validated constants for this module
            utilization: Borrowed fraction of deposited assets, at the constants' utilization
                precision
            current_rate: The stored per-second rate, at RATE_PRECISION
            elapsed_time: Seconds since the stored rate was set

        Returns:
            The new per-second rate, within `rate_bounds(constants)`
        """
        ...

    def initial_rate(self, constants: C) -> int:
        """The rate recorded when a pair is created."""
        ...

    def rate_bounds(self, constants: C) -> tuple[int, int]:
        """The inclusive (minimum, maximum) per-second rate this module can return."""
        ...
