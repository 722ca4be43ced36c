import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from lendpair.exceptions import InvalidRateConstants
from lendpair.rates import (
    VariableInterestRate,
    VariableRateConstants,
    get_rate_calculator,
    parse_rate_constants,
)

DEFAULT_CONSTANTS = VariableRateConstants()
RATE_MODULE = VariableInterestRate()


def test_defaults() -> None:
    assert DEFAULT_CONSTANTS.min_utilization == 75_000
    assert DEFAULT_CONSTANTS.max_utilization == 85_000
    assert DEFAULT_CONSTANTS.utilization_precision == 100_000
    assert DEFAULT_CONSTANTS.min_interest == 79_123_523
    assert DEFAULT_CONSTANTS.max_interest == 146_248_508_681
    assert DEFAULT_CONSTANTS.interest_half_life == 43_200
    assert RATE_MODULE.initial_rate(DEFAULT_CONSTANTS) == 158_049_988
    assert RATE_MODULE.rate_bounds(DEFAULT_CONSTANTS) == (79_123_523, 146_248_508_681)
    assert isinstance(get_rate_calculator(DEFAULT_CONSTANTS), VariableInterestRate)


def test_rate_grows_above_target_band() -> None:
    constants = VariableRateConstants(min_utilization=70_000, max_utilization=80_000)
    old_rate = 1_000_000_000

    new_rate = RATE_MODULE.update_rate(
        constants,
        utilization=90_000,
        current_rate=old_rate,
        elapsed_time=constants.interest_half_life,
    )

    # Halfway between the band and full utilization, one half-life grows the rate by 25%
    assert new_rate == 1_250_000_000
    assert old_rate < new_rate <= constants.max_interest


def test_rate_decays_below_target_band() -> None:
    new_rate = RATE_MODULE.update_rate(
        DEFAULT_CONSTANTS,
        utilization=0,
        current_rate=10_000_000_000,
        elapsed_time=DEFAULT_CONSTANTS.interest_half_life,
    )
    assert new_rate == 5_000_000_000


def test_rate_is_clamped_to_bounds() -> None:
    assert (
        RATE_MODULE.update_rate(
            DEFAULT_CONSTANTS,
            utilization=100_000,
            current_rate=DEFAULT_CONSTANTS.max_interest,
            elapsed_time=365 * 86_400,
        )
        == DEFAULT_CONSTANTS.max_interest
    )
    assert (
        RATE_MODULE.update_rate(
            DEFAULT_CONSTANTS,
            utilization=0,
            current_rate=DEFAULT_CONSTANTS.min_interest,
            elapsed_time=365 * 86_400,
        )
        == DEFAULT_CONSTANTS.min_interest
    )


def test_zero_elapsed_time_keeps_rate() -> None:
    for utilization in (0, 50_000, 80_000, 100_000):
        assert (
            RATE_MODULE.update_rate(
                DEFAULT_CONSTANTS,
                utilization=utilization,
                current_rate=158_049_988,
                elapsed_time=0,
            )
            == 158_049_988
        )


@given(
    utilization=st.integers(min_value=0, max_value=100_000),
    current_rate=st.integers(
        min_value=DEFAULT_CONSTANTS.min_interest,
        max_value=DEFAULT_CONSTANTS.max_interest,
    ),
    elapsed_time=st.integers(min_value=0, max_value=10 * 365 * 86_400),
)
@settings(max_examples=1000)
def test_rate_always_within_bounds(utilization: int, current_rate: int, elapsed_time: int) -> None:
    new_rate = RATE_MODULE.update_rate(
        DEFAULT_CONSTANTS,
        utilization=utilization,
        current_rate=current_rate,
        elapsed_time=elapsed_time,
    )
    assert DEFAULT_CONSTANTS.min_interest <= new_rate <= DEFAULT_CONSTANTS.max_interest


@given(
    utilization=st.integers(
        min_value=DEFAULT_CONSTANTS.min_utilization,
        max_value=DEFAULT_CONSTANTS.max_utilization,
    ),
    current_rate=st.integers(
        min_value=DEFAULT_CONSTANTS.min_interest,
        max_value=DEFAULT_CONSTANTS.max_interest,
    ),
    elapsed_time=st.integers(min_value=0, max_value=10 * 365 * 86_400),
)
def test_rate_unchanged_inside_band(utilization: int, current_rate: int, elapsed_time: int) -> None:
    assert (
        RATE_MODULE.update_rate(
            DEFAULT_CONSTANTS,
            utilization=utilization,
            current_rate=current_rate,
            elapsed_time=elapsed_time,
        )
        == current_rate
    )


def test_invalid_constants() -> None:
    with pytest.raises(ValidationError):
        VariableRateConstants(min_utilization=90_000, max_utilization=80_000)
    with pytest.raises(ValidationError):
        VariableRateConstants(min_interest=10, max_interest=5)
    with pytest.raises(ValidationError):
        VariableRateConstants(interest_half_life=0)
    with pytest.raises(ValidationError):
        VariableRateConstants(min_interest=-1)


def test_parse_rate_constants() -> None:
    constants = parse_rate_constants({"kind": "variable", "interest_half_life": 3_600})
    assert isinstance(constants, VariableRateConstants)
    assert constants.interest_half_life == 3_600

    with pytest.raises(InvalidRateConstants):
        parse_rate_constants({"kind": "variable", "max_utilization": 100_000})
    with pytest.raises(InvalidRateConstants):
        parse_rate_constants({"kind": "exponential"})
