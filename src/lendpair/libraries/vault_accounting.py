"""
Conversions between a vault's total amount and the shares issued against it.

The same two functions serve the lender side (total asset amount vs. asset shares) and the borrower
side (total borrow amount vs. borrow shares). Rounding direction is chosen by the caller at each use
site; the functions themselves favor neither side.
"""

from lendpair.libraries.full_math import muldiv


def to_shares(total_amount: int, total_shares: int, amount: int, round_up: bool) -> int:
    """
    Convert an amount to shares at the ratio `total_shares / total_amount`.

    An empty vault (`total_amount == 0`) issues shares 1:1. When rounding up, the truncated result
    is reconstructed back into an amount and incremented if precision was lost.
    """

    if total_amount == 0:
        return amount

    shares = muldiv(amount, total_shares, total_amount)
    if round_up and total_shares != 0 and muldiv(shares, total_amount, total_shares) < amount:
        shares += 1
    return shares


def to_amount(total_amount: int, total_shares: int, shares: int, round_up: bool) -> int:
    """
    Convert shares to an amount at the ratio `total_amount / total_shares`.

    A vault without shares (`total_shares == 0`) values shares 1:1. When rounding up, the truncated
    result is reconstructed back into shares and incremented if precision was lost.
    """

    if total_shares == 0:
        return shares

    amount = muldiv(shares, total_amount, total_shares)
    if round_up and total_amount != 0 and muldiv(amount, total_shares, total_amount) < shares:
        amount += 1
    return amount
