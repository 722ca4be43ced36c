from lendpair.exceptions.arithmetic import ArithmeticOverflowError, DivisionByZeroError, MathError
from lendpair.exceptions.base import InvalidAmount, LendPairError, LendPairValueError
from lendpair.exceptions.config import (
    ConfigurationError,
    InvalidLtv,
    InvalidPairConfig,
    InvalidRateConstants,
    MissingOracleFeed,
    NotApprovedBorrower,
    NotApprovedLender,
)
from lendpair.exceptions.oracle import (
    InvalidOraclePrice,
    OracleError,
    PriceTooLarge,
    StaleOraclePrice,
    ZeroExchangeRate,
)
from lendpair.exceptions.pair import (
    InsolvencyError,
    InsolventPosition,
    InsufficientAssetsInPool,
    InsufficientBalance,
    LateUpdateError,
    LiquidationNotEligible,
    PairError,
    PastMaturity,
)

from . import arithmetic, config, oracle, pair

__all__ = (
    "ArithmeticOverflowError",
    "ConfigurationError",
    "DivisionByZeroError",
    "InsolvencyError",
    "InsolventPosition",
    "InsufficientAssetsInPool",
    "InsufficientBalance",
    "InvalidAmount",
    "InvalidLtv",
    "InvalidOraclePrice",
    "InvalidPairConfig",
    "InvalidRateConstants",
    "LateUpdateError",
    "LendPairError",
    "LendPairValueError",
    "LiquidationNotEligible",
    "MathError",
    "MissingOracleFeed",
    "NotApprovedBorrower",
    "NotApprovedLender",
    "OracleError",
    "PairError",
    "PastMaturity",
    "PriceTooLarge",
    "StaleOraclePrice",
    "ZeroExchangeRate",
    "arithmetic",
    "config",
    "oracle",
    "pair",
)
