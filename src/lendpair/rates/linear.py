from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, model_validator

from lendpair.constants import UTIL_PRECISION
from lendpair.validation.evm_values import ValidatedUint64, ValidatedUint64NonZero


class LinearRateConstants(BaseModel):
    """
    Constants for a two-segment linear rate with a kink at `vertex_utilization`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["linear"] = "linear"
    min_interest: ValidatedUint64
    vertex_interest: ValidatedUint64
    max_interest: ValidatedUint64
    vertex_utilization: ValidatedUint64
    utilization_precision: ValidatedUint64NonZero = UTIL_PRECISION

    @model_validator(mode="after")
    def check_ranges(self) -> Self:
        if not (self.min_interest <= self.vertex_interest <= self.max_interest):
            msg = (
                "required: min_interest <= vertex_interest <= max_interest, got "
                f"{self.min_interest}, {self.vertex_interest}, {self.max_interest}"
            )
            raise ValueError(msg)
        if self.max_interest == 0:
            msg = "required: max_interest > 0"
            raise ValueError(msg)
        if not (0 < self.vertex_utilization < self.utilization_precision):
            msg = (
                "required: 0 < vertex_utilization < utilization_precision, got "
                f"{self.vertex_utilization}, {self.utilization_precision}"
            )
            raise ValueError(msg)
        return self


class LinearInterestRate:
    """
    A stateless rate read directly from the utilization curve. The previous rate and elapsed time
    have no influence on the result.
    """

    name = "Linear Interest Rate"

    def update_rate(
        self,
        constants: LinearRateConstants,
        utilization: int,
        current_rate: int,  # noqa: ARG002
        elapsed_time: int,  # noqa: ARG002
    ) -> int:
        precision = constants.utilization_precision

        if utilization < constants.vertex_utilization:
            slope = (
                (constants.vertex_interest - constants.min_interest) * precision
            ) // constants.vertex_utilization
            new_rate = constants.min_interest + (utilization * slope) // precision
        elif utilization > constants.vertex_utilization:
            slope = ((constants.max_interest - constants.vertex_interest) * precision) // (
                precision - constants.vertex_utilization
            )
            new_rate = (
                constants.vertex_interest
                + ((utilization - constants.vertex_utilization) * slope) // precision
            )
        else:
            new_rate = constants.vertex_interest

        return min(max(new_rate, constants.min_interest), constants.max_interest)

    def initial_rate(self, constants: LinearRateConstants) -> int:
        return constants.min_interest

    def rate_bounds(self, constants: LinearRateConstants) -> tuple[int, int]:
        return constants.min_interest, constants.max_interest
