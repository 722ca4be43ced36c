from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, model_validator

from lendpair.constants import UTIL_PRECISION
from lendpair.validation.evm_values import ValidatedUint64, ValidatedUint64NonZero

# Fixed-point scale for the utilization shortfall/excess, squared inside the half-life term
SCALE = 10**18


class VariableRateConstants(BaseModel):
    """
    Constants for the utilization-seeking interest rate.

    Rates are per-second values at RATE_PRECISION. The defaults target 75-85% utilization with
    bounds of 0.25% and 10,000% APR, and a 12 hour half-life.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["variable"] = "variable"
    min_utilization: ValidatedUint64 = 75_000
    max_utilization: ValidatedUint64 = 85_000
    utilization_precision: ValidatedUint64NonZero = UTIL_PRECISION
    min_interest: ValidatedUint64 = 79_123_523
    max_interest: ValidatedUint64 = 146_248_508_681
    interest_half_life: ValidatedUint64NonZero = 43_200
    initial_interest: ValidatedUint64 = 158_049_988

    @model_validator(mode="after")
    def check_ranges(self) -> Self:
        if not (0 < self.min_utilization < self.max_utilization < self.utilization_precision):
            msg = (
                "required: 0 < min_utilization < max_utilization < utilization_precision, got "
                f"{self.min_utilization}, {self.max_utilization}, {self.utilization_precision}"
            )
            raise ValueError(msg)
        if not (0 < self.min_interest <= self.max_interest):
            msg = (
                "required: 0 < min_interest <= max_interest, got "
                f"{self.min_interest}, {self.max_interest}"
            )
            raise ValueError(msg)
        return self

    @property
    def scaled_half_life(self) -> int:
        """The half-life in seconds lifted to the units of the squared utilization delta."""
        return self.interest_half_life * SCALE * SCALE


class VariableInterestRate:
    """
    A rate that decays toward its minimum while utilization is below the target band and grows
    toward its maximum while utilization is above it.

    The adjustment is multiplicative, scales with the square of the distance from the band and
    linearly with elapsed time, and is damped by the half-life.
    """

    name = "Variable Time-Weighted Interest Rate"

    def update_rate(
        self,
        constants: VariableRateConstants,
        utilization: int,
        current_rate: int,
        elapsed_time: int,
    ) -> int:
        half_life = constants.scaled_half_life

        if utilization < constants.min_utilization:
            delta_utilization = (
                (constants.min_utilization - utilization) * SCALE
            ) // constants.min_utilization
            decay = half_life + delta_utilization * delta_utilization * elapsed_time
            new_rate = (current_rate * half_life) // decay
        elif utilization > constants.max_utilization:
            delta_utilization = ((utilization - constants.max_utilization) * SCALE) // (
                constants.utilization_precision - constants.max_utilization
            )
            growth = half_life + delta_utilization * delta_utilization * elapsed_time
            new_rate = (current_rate * growth) // half_life
        else:
            new_rate = current_rate

        return min(max(new_rate, constants.min_interest), constants.max_interest)

    def initial_rate(self, constants: VariableRateConstants) -> int:
        return min(max(constants.initial_interest, constants.min_interest), constants.max_interest)

    def rate_bounds(self, constants: VariableRateConstants) -> tuple[int, int]:
        return constants.min_interest, constants.max_interest
