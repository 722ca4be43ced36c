from lendpair.constants import MAX_UINT256, MIN_UINT256
from lendpair.exceptions import ArithmeticOverflowError, DivisionByZeroError


def mulmod(x: int, y: int, k: int) -> int:
    if k == 0:
        raise DivisionByZeroError
    return (x * y) % k


def muldiv(
    a: int,
    b: int,
    denominator: int,
) -> int:
    """
    Calculates floor(a*b/denominator) with a full-width intermediate product.

    Python integers do not overflow and have no bit depth limitation, so this function checks that
    the inputs and the result are valid uint256 values instead of emulating a 512-bit product.
    """

    if not (MIN_UINT256 <= a <= MAX_UINT256):
        raise ArithmeticOverflowError(message="Invalid value for a.")
    if not (MIN_UINT256 <= b <= MAX_UINT256):
        raise ArithmeticOverflowError(message="Invalid value for b.")
    if not (MIN_UINT256 <= denominator <= MAX_UINT256):
        raise ArithmeticOverflowError(message="Invalid value for denominator.")

    if denominator == 0:
        raise DivisionByZeroError

    result = (a * b) // denominator

    if result > MAX_UINT256:
        raise ArithmeticOverflowError(message="Invalid result, does not fit in uint256")

    return result


def muldiv_rounding_up(a: int, b: int, denominator: int) -> int:
    """
    Calculates ceil(a*b/denominator) with a full-width intermediate product.
    """

    result = muldiv(a, b, denominator)
    if mulmod(a, b, denominator) > 0:
        # must be less than max uint256 since we're rounding up
        if result == MAX_UINT256:
            raise ArithmeticOverflowError(message="Invalid result, does not fit in uint256")
        return result + 1
    return result
