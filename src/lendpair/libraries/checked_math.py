from lendpair.constants import MAX_UINT128, MAX_UINT256
from lendpair.exceptions import ArithmeticOverflowError


def to_uint128(value: int) -> int:
    """
    Check that the value fits in a uint128 and return it unchanged.
    """

    if not (0 <= value <= MAX_UINT128):
        raise ArithmeticOverflowError(message=f"{value} does not fit in uint128")
    return value


def add_uint128(x: int, y: int) -> int:
    return to_uint128(x + y)


def sub_uint128(x: int, y: int) -> int:
    if y > x:
        raise ArithmeticOverflowError(message=f"{x} - {y} underflows")
    return to_uint128(x - y)


def add_uint256(x: int, y: int) -> int:
    z = x + y
    if not (0 <= z <= MAX_UINT256):
        raise ArithmeticOverflowError(message=f"{z} does not fit in uint256")
    return z


def sub_uint256(x: int, y: int) -> int:
    if y > x:
        raise ArithmeticOverflowError(message=f"{x} - {y} underflows")
    return x - y
