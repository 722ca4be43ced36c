__all__ = (
    "EXCHANGE_PRECISION",
    "FEE_PRECISION",
    "LIQ_PRECISION",
    "LTV_PRECISION",
    "MAX_UINT64",
    "MAX_UINT128",
    "MAX_UINT224",
    "MAX_UINT256",
    "MIN_UINT64",
    "MIN_UINT128",
    "MIN_UINT256",
    "ORACLE_PRECISION",
    "RATE_PRECISION",
    "UTIL_PRECISION",
    "ZERO_ADDRESS",
)

import typing

from eth_typing import ChecksumAddress

from lendpair.cache import get_checksum_address


def _min_uint(_: int) -> int:
    return 0


def _max_uint(bits: int) -> int:
    return typing.cast("int", 2**bits - 1)


MIN_UINT64 = _min_uint(64)
MAX_UINT64 = _max_uint(64)

MIN_UINT128 = _min_uint(128)
MAX_UINT128 = _max_uint(128)

MAX_UINT224 = _max_uint(224)

MIN_UINT256 = _min_uint(256)
MAX_UINT256 = _max_uint(256)

# Loan-to-value: fractions with 5 digits of precision (100.000%)
LTV_PRECISION = 10**5

# Liquidation fee: fractions with 5 digits of precision
LIQ_PRECISION = 10**5

# Protocol fee on accrued interest: fractions with 5 digits of precision
FEE_PRECISION = 10**5

# Default utilization precision used by the bundled rate modules
UTIL_PRECISION = 10**5

# Exchange rate: collateral units per asset unit, 18 digits of precision
EXCHANGE_PRECISION = 10**18

# Per-second interest rate: 18 digits of precision
RATE_PRECISION = 10**18

# Price feed readings are normalized to 18 decimal places at the oracle boundary
ORACLE_PRECISION = 10**18

ZERO_ADDRESS: ChecksumAddress = get_checksum_address("0x0000000000000000000000000000000000000000")
