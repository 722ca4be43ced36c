"""
Collateral requirements and the solvency predicate.

Every conversion here rounds against the borrower: the required collateral is rounded up so that a
position sitting exactly on the boundary is never accepted because of truncation.
"""

from lendpair.constants import EXCHANGE_PRECISION, LTV_PRECISION
from lendpair.exceptions import DivisionByZeroError, InvalidLtv, ZeroExchangeRate
from lendpair.libraries.full_math import muldiv, muldiv_rounding_up


def required_collateral(borrow_amount: int, exchange_rate: int, target_ltv: int) -> int:
    """
    Calculate the collateral needed to back `borrow_amount` at `target_ltv`.

    The borrow amount is converted to collateral units by the exchange rate, then scaled by the
    inverse of the target LTV: `borrow_amount * exchange_rate * LTV_PRECISION /
    (target_ltv * EXCHANGE_PRECISION)`, rounded up.

    Rounding up is deliberate. A truncating division agrees with it whenever the division is exact
    (3,000 borrowed at a 2.0 exchange rate and 75% LTV needs exactly 8,000), and otherwise would
    accept a position one unit short of the boundary.
    """

    if exchange_rate == 0:
        raise ZeroExchangeRate
    if target_ltv == 0:
        raise InvalidLtv(ltv=target_ltv)

    return muldiv_rounding_up(
        borrow_amount,
        exchange_rate * LTV_PRECISION,
        target_ltv * EXCHANGE_PRECISION,
    )


def is_solvent(
    borrow_amount: int,
    collateral_balance: int,
    exchange_rate: int,
    max_ltv: int,
) -> bool:
    if borrow_amount == 0:
        return True
    return collateral_balance >= required_collateral(
        borrow_amount=borrow_amount,
        exchange_rate=exchange_rate,
        target_ltv=max_ltv,
    )


def loan_to_value(borrow_amount: int, collateral_balance: int, exchange_rate: int) -> int:
    """
    The current LTV of a position at LTV_PRECISION.
    """

    if borrow_amount == 0:
        return 0
    if collateral_balance == 0:
        raise DivisionByZeroError
    return muldiv(
        muldiv(borrow_amount, exchange_rate, EXCHANGE_PRECISION),
        LTV_PRECISION,
        collateral_balance,
    )
