"""
Interest accrual for a lending pair.

`accrue_interest` is pure: it returns a new state and leaves the input untouched, so a pair can fold
the accrual into a larger action and commit everything at once.
"""

import dataclasses

from lendpair.constants import FEE_PRECISION, MAX_UINT128, RATE_PRECISION
from lendpair.exceptions import LateUpdateError
from lendpair.libraries.checked_math import to_uint128
from lendpair.logging import logger
from lendpair.rates import LinearRateConstants, VariableRateConstants, get_rate_calculator
from lendpair.types import InterestAccrualResult, LendingPairState, VaultAccount


def get_utilization(total_asset: VaultAccount, total_borrow: VaultAccount, precision: int) -> int:
    """
    The borrowed fraction of deposited assets at `precision`, or zero for an empty pair.
    """

    if total_asset.amount == 0:
        return 0
    return (total_borrow.amount * precision) // total_asset.amount


def accrue_interest(
    state: LendingPairState,
    *,
    rate_constants: VariableRateConstants | LinearRateConstants,
    timestamp: int,
    maturity: int = 0,
    penalty_rate: int = 0,
) -> tuple[LendingPairState, InterestAccrualResult]:
    """
    Advance the pair state to `timestamp`.

    Interest for the elapsed time is added to both the total borrow amount (owed by borrowers) and
    the total asset amount (claimed by lenders). The protocol's cut of the interest is taken by
    issuing new asset shares, diluting lenders, rather than by removing assets. The caller is
    responsible for crediting `fee_shares` to the fee recipient's position.

    Once a maturity is set and has passed, the penalty rate replaces the rate curve.

    Args:
        state: The state to advance
        rate_constants: Validated constants for the pair's rate module
        timestamp: The time to advance to, not earlier than the last update
        maturity: The maturity timestamp, 0 for none
        penalty_rate: The per-second rate applied after maturity

    Returns:
        A tuple of the advanced state and the accrual result. If `timestamp` equals the last update,
        the input state is returned unchanged.
    """

    rate_info = state.current_rate_info
    total_asset = state.total_asset
    total_borrow = state.total_borrow
    precision = rate_constants.utilization_precision

    if timestamp < rate_info.last_timestamp:
        raise LateUpdateError(timestamp=timestamp, last_timestamp=rate_info.last_timestamp)

    if timestamp == rate_info.last_timestamp:
        return state, InterestAccrualResult(
            interest_earned=0,
            fee_amount=0,
            fee_shares=0,
            new_rate=rate_info.rate_per_second,
            new_utilization=get_utilization(total_asset, total_borrow, precision),
        )

    if total_asset.amount == 0:
        # Nothing to lend, only the clock advances
        return dataclasses.replace(
            state,
            current_rate_info=dataclasses.replace(rate_info, last_timestamp=timestamp),
        ), InterestAccrualResult(
            interest_earned=0,
            fee_amount=0,
            fee_shares=0,
            new_rate=rate_info.rate_per_second,
            new_utilization=get_utilization(total_asset, total_borrow, precision),
        )

    elapsed_time = timestamp - rate_info.last_timestamp
    utilization = get_utilization(total_asset, total_borrow, precision)

    if maturity != 0 and timestamp > maturity:
        new_rate = penalty_rate
    else:
        new_rate = get_rate_calculator(rate_constants).update_rate(
            rate_constants,
            utilization=utilization,
            current_rate=rate_info.rate_per_second,
            elapsed_time=elapsed_time,
        )

    interest_earned = (total_borrow.amount * new_rate * elapsed_time) // RATE_PRECISION
    fee_amount = 0
    fee_shares = 0

    if (
        interest_earned + total_borrow.amount > MAX_UINT128
        or interest_earned + total_asset.amount > MAX_UINT128
    ):
        logger.warning(
            f"Interest of {interest_earned} would overflow the pair totals, skipping accrual."
        )
        interest_earned = 0

    if interest_earned > 0:
        total_borrow = VaultAccount(
            amount=total_borrow.amount + interest_earned,
            shares=total_borrow.shares,
        )
        new_asset_amount = total_asset.amount + interest_earned

        if rate_info.fee_to_protocol_rate > 0:
            fee_amount = (interest_earned * rate_info.fee_to_protocol_rate) // FEE_PRECISION
            fee_shares = VaultAccount(
                amount=new_asset_amount,
                shares=total_asset.shares,
            ).to_shares(fee_amount, round_up=False)

        total_asset = VaultAccount(
            amount=new_asset_amount,
            shares=to_uint128(total_asset.shares + fee_shares),
        )

    new_state = dataclasses.replace(
        state,
        total_asset=total_asset,
        total_borrow=total_borrow,
        current_rate_info=dataclasses.replace(
            rate_info,
            last_timestamp=timestamp,
            rate_per_second=new_rate,
        ),
    )

    logger.debug(
        f"Accrued {interest_earned} interest over {elapsed_time}s at {new_rate}/s "
        f"(utilization {utilization}, fee {fee_amount} as {fee_shares} shares)"
    )

    return new_state, InterestAccrualResult(
        interest_earned=interest_earned,
        fee_amount=fee_amount,
        fee_shares=fee_shares,
        new_rate=new_rate,
        new_utilization=get_utilization(total_asset, total_borrow, precision),
    )
