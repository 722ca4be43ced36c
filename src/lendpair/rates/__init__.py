from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import Field, TypeAdapter, ValidationError

from lendpair.exceptions import InvalidRateConstants
from lendpair.rates.base import RateCalculator
from lendpair.rates.linear import LinearInterestRate, LinearRateConstants
from lendpair.rates.variable import VariableInterestRate, VariableRateConstants

type RateCurveConstants = Annotated[
    VariableRateConstants | LinearRateConstants,
    Field(discriminator="kind"),
]

RATE_CALCULATORS: dict[str, RateCalculator[Any]] = {
    "variable": VariableInterestRate(),
    "linear": LinearInterestRate(),
}

_rate_constants_adapter: TypeAdapter[VariableRateConstants | LinearRateConstants] = TypeAdapter(
    RateCurveConstants
)


def get_rate_calculator(
    constants: VariableRateConstants | LinearRateConstants,
) -> RateCalculator[Any]:
    """
    Get the rate module matching the kind of the provided constants.
    """

    return RATE_CALCULATORS[constants.kind]


def parse_rate_constants(
    data: Mapping[str, Any],
) -> VariableRateConstants | LinearRateConstants:
    """
    Validate a mapping of rate constants, selecting the model by its `kind` key.
    """

    try:
        return _rate_constants_adapter.validate_python(data)
    except ValidationError as exc:
        raise InvalidRateConstants(message=str(exc)) from exc


__all__ = (
    "RATE_CALCULATORS",
    "LinearInterestRate",
    "LinearRateConstants",
    "RateCalculator",
    "RateCurveConstants",
    "VariableInterestRate",
    "VariableRateConstants",
    "get_rate_calculator",
    "parse_rate_constants",
)
