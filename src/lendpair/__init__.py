from .cache import get_checksum_address
from .config import PairConfig, Settings, load_pair_config, save_pair_config, settings
from .version import __version__

# isort: split

from .access import AccessControl
from .accrual import accrue_interest, get_utilization
from .logging import logger
from .oracle import DualOracle, ExchangeRateOracle, PriceFeed, PriceFeedReading
from .pair import LendingPair
from .rates import (
    LinearInterestRate,
    LinearRateConstants,
    VariableInterestRate,
    VariableRateConstants,
)
from .solvency import is_solvent, loan_to_value, required_collateral
from .types import (
    AccountingSnapshot,
    BorrowResult,
    CurrentRateInfo,
    ExchangeRateInfo,
    InterestAccrualResult,
    LendingPairState,
    LiquidationResult,
    RepayResult,
    UserPosition,
    VaultAccount,
)

# isort: split

from . import constants, exceptions, libraries, rates, types, validation

__all__ = (
    "AccessControl",
    "AccountingSnapshot",
    "BorrowResult",
    "CurrentRateInfo",
    "DualOracle",
    "ExchangeRateInfo",
    "ExchangeRateOracle",
    "InterestAccrualResult",
    "LendingPair",
    "LendingPairState",
    "LinearInterestRate",
    "LinearRateConstants",
    "LiquidationResult",
    "PairConfig",
    "PriceFeed",
    "PriceFeedReading",
    "RepayResult",
    "Settings",
    "UserPosition",
    "VariableInterestRate",
    "VariableRateConstants",
    "VaultAccount",
    "__version__",
    "accrue_interest",
    "constants",
    "exceptions",
    "get_checksum_address",
    "get_utilization",
    "is_solvent",
    "libraries",
    "load_pair_config",
    "loan_to_value",
    "logger",
    "rates",
    "required_collateral",
    "save_pair_config",
    "settings",
    "types",
    "validation",
)
