import dataclasses
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from eth_typing import ChecksumAddress

from lendpair.access import AccessControl
from lendpair.accrual import accrue_interest, get_utilization
from lendpair.cache import get_checksum_address
from lendpair.config import PairConfig, parse_pair_config
from lendpair.constants import EXCHANGE_PRECISION, LIQ_PRECISION, LTV_PRECISION
from lendpair.exceptions import (
    InsolventPosition,
    InsufficientAssetsInPool,
    InsufficientBalance,
    InvalidAmount,
    LiquidationNotEligible,
    PastMaturity,
    ZeroExchangeRate,
)
from lendpair.libraries.checked_math import add_uint128, add_uint256, sub_uint128, sub_uint256
from lendpair.libraries.full_math import muldiv
from lendpair.logging import logger
from lendpair.oracle import ExchangeRateOracle
from lendpair.rates import get_rate_calculator
from lendpair.solvency import is_solvent, loan_to_value, required_collateral
from lendpair.types import (
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

type PositionUpdates = dict[ChecksumAddress, UserPosition]


def _check_amount(amount: int) -> None:
    if amount <= 0:
        raise InvalidAmount(amount=amount)


class LendingPair:
    """
    An isolated lending pair: one lendable asset against one collateral asset.

    Lender and borrower claims are share balances against the `total_asset` and `total_borrow`
    ledgers. Every mutating action brings the pair to the action's timestamp by accruing interest
    first, computes on immutable copies of the state, and commits in a single step at the end. An
    action that raises leaves the pair untouched.

    Actions are not synchronized. Callers sharing a pair between threads must serialize access.
    """

    def __init__(
        self,
        config: PairConfig | Mapping[str, Any],
        *,
        oracle: ExchangeRateOracle,
        timestamp: int = 0,
        name: str | None = None,
        silent: bool = False,
    ) -> None:
        """
        Arguments
        ---------
        config:
            The pair parameters, as a validated `PairConfig` or a mapping to be validated.
        oracle:
            The source of the collateral exchange rate, consulted by borrow-side actions.
        timestamp:
            The creation time. Interest accrues from this point.
        name:
            A display name. Generated from the configuration if omitted.
        silent:
            Suppress status output.
        """

        self.config = config if isinstance(config, PairConfig) else parse_pair_config(config)
        self.oracle = oracle
        self.access = AccessControl(
            approved_borrowers=self.config.approved_borrowers,
            approved_lenders=self.config.approved_lenders,
        )
        self.rate_calculator = get_rate_calculator(self.config.rate)
        self.fee_recipient = get_checksum_address(self.config.fee_recipient)

        initial_rate = (
            self.config.initial_rate_per_second
            if self.config.initial_rate_per_second is not None
            else self.rate_calculator.initial_rate(self.config.rate)
        )

        self._state = LendingPairState(
            total_asset=VaultAccount(),
            total_borrow=VaultAccount(),
            total_collateral=0,
            current_rate_info=CurrentRateInfo(
                last_timestamp=timestamp,
                fee_to_protocol_rate=self.config.fee_to_protocol_rate,
                rate_per_second=initial_rate,
            ),
            exchange_rate_info=ExchangeRateInfo(last_timestamp=0, exchange_rate=0),
        )
        self._positions: PositionUpdates = {}

        self.name = (
            name
            if name is not None
            else (
                f"LendingPair ({self.rate_calculator.name}, "
                f"{100 * self.config.max_ltv / LTV_PRECISION:.2f}% max LTV)"
            )
        )

        if not silent:  # pragma: no cover
            logger.info(self.name)
            logger.info(f"• Initial rate: {initial_rate}/s")
            logger.info(
                f"• Maturity: {self.config.maturity if self.config.maturity != 0 else 'none'}"
            )

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"{self.__class__.__name__}(name={self.name}, "
            f"total_asset={self.total_asset}, total_borrow={self.total_borrow})"
        )

    @property
    def state(self) -> LendingPairState:
        return self._state

    @property
    def total_asset(self) -> VaultAccount:
        return self._state.total_asset

    @property
    def total_borrow(self) -> VaultAccount:
        return self._state.total_borrow

    @property
    def total_collateral(self) -> int:
        return self._state.total_collateral

    @property
    def current_rate_info(self) -> CurrentRateInfo:
        return self._state.current_rate_info

    @property
    def exchange_rate_info(self) -> ExchangeRateInfo:
        return self._state.exchange_rate_info

    @property
    def positions(self) -> Mapping[ChecksumAddress, UserPosition]:
        return MappingProxyType(self._positions)

    def get_user_snapshot(self, user: str) -> UserPosition:
        return self._positions.get(get_checksum_address(user), UserPosition())

    def asset_shares(self, user: str) -> int:
        return self.get_user_snapshot(user).asset_shares

    def borrow_shares(self, user: str) -> int:
        return self.get_user_snapshot(user).borrow_shares

    def collateral_balance(self, user: str) -> int:
        return self.get_user_snapshot(user).collateral_balance

    def snapshot(self) -> AccountingSnapshot:
        return AccountingSnapshot.from_state(self._state)

    def utilization(self) -> int:
        """
        The borrowed fraction of deposited assets, at the rate module's utilization precision.
        """

        return get_utilization(
            self.total_asset,
            self.total_borrow,
            self.config.rate.utilization_precision,
        )

    def to_asset_amount(self, shares: int, *, round_up: bool = False) -> int:
        return self.total_asset.to_amount(shares, round_up=round_up)

    def to_asset_shares(self, amount: int, *, round_up: bool = False) -> int:
        return self.total_asset.to_shares(amount, round_up=round_up)

    def to_borrow_amount(self, shares: int, *, round_up: bool = False) -> int:
        return self.total_borrow.to_amount(shares, round_up=round_up)

    def to_borrow_shares(self, amount: int, *, round_up: bool = False) -> int:
        return self.total_borrow.to_shares(amount, round_up=round_up)

    def is_solvent(self, user: str, exchange_rate: int | None = None) -> bool:
        """
        Check a position against the maximum LTV, using the last recorded exchange rate unless one
        is provided.
        """

        position = self.get_user_snapshot(user)
        return is_solvent(
            borrow_amount=self.total_borrow.to_amount(position.borrow_shares, round_up=True),
            collateral_balance=position.collateral_balance,
            exchange_rate=(
                exchange_rate
                if exchange_rate is not None
                else self.exchange_rate_info.exchange_rate
            ),
            max_ltv=self.config.max_ltv,
        )

    def get_user_ltv(self, user: str, exchange_rate: int | None = None) -> int:
        position = self.get_user_snapshot(user)
        return loan_to_value(
            borrow_amount=self.total_borrow.to_amount(position.borrow_shares, round_up=True),
            collateral_balance=position.collateral_balance,
            exchange_rate=(
                exchange_rate
                if exchange_rate is not None
                else self.exchange_rate_info.exchange_rate
            ),
        )

    def is_past_maturity(self, timestamp: int) -> bool:
        return self.config.maturity != 0 and timestamp > self.config.maturity

    def _position(self, updates: PositionUpdates, user: ChecksumAddress) -> UserPosition:
        return updates.get(user, self._positions.get(user, UserPosition()))

    def _accrue(
        self, timestamp: int
    ) -> tuple[LendingPairState, PositionUpdates, InterestAccrualResult]:
        state, result = accrue_interest(
            self._state,
            rate_constants=self.config.rate,
            timestamp=timestamp,
            maturity=self.config.maturity,
            penalty_rate=self.config.penalty_rate,
        )

        updates: PositionUpdates = {}
        if result.fee_shares > 0:
            recipient = self._position(updates, self.fee_recipient)
            updates[self.fee_recipient] = dataclasses.replace(
                recipient,
                asset_shares=recipient.asset_shares + result.fee_shares,
            )

        return state, updates, result

    def _fetch_exchange_rate(
        self, state: LendingPairState, timestamp: int
    ) -> tuple[LendingPairState, int]:
        exchange_rate = self.oracle.get_exchange_rate(timestamp)
        if exchange_rate == 0:
            raise ZeroExchangeRate
        return (
            dataclasses.replace(
                state,
                exchange_rate_info=ExchangeRateInfo(
                    last_timestamp=timestamp,
                    exchange_rate=exchange_rate,
                ),
            ),
            exchange_rate,
        )

    @staticmethod
    def _check_available_assets(state: LendingPairState, amount: int) -> None:
        available = state.total_asset.amount - state.total_borrow.amount
        if amount > available:
            raise InsufficientAssetsInPool(available=available, requested=amount)

    def _commit(self, state: LendingPairState, updates: PositionUpdates) -> None:
        self._state = state
        self._positions.update(updates)

    def add_interest(self, *, timestamp: int) -> InterestAccrualResult:
        state, updates, result = self._accrue(timestamp)
        self._commit(state, updates)
        return result

    def update_exchange_rate(self, *, timestamp: int) -> int:
        state, exchange_rate = self._fetch_exchange_rate(self._state, timestamp)
        self._commit(state, {})
        return exchange_rate

    def deposit(self, amount: int, receiver: str, *, timestamp: int) -> int:
        """
        Deposit `amount` of the asset and credit the resulting shares, rounded down, to `receiver`.

        Returns the number of shares issued.
        """

        _check_amount(amount)
        receiver = get_checksum_address(receiver)
        self.access.check_lender(receiver)
        if self.is_past_maturity(timestamp):
            raise PastMaturity(maturity=self.config.maturity)

        state, updates, _ = self._accrue(timestamp)

        shares = state.total_asset.to_shares(amount, round_up=False)
        state = dataclasses.replace(
            state,
            total_asset=VaultAccount(
                amount=add_uint128(state.total_asset.amount, amount),
                shares=add_uint128(state.total_asset.shares, shares),
            ),
        )
        position = self._position(updates, receiver)
        updates[receiver] = dataclasses.replace(
            position,
            asset_shares=position.asset_shares + shares,
        )

        self._commit(state, updates)
        logger.debug(f"{receiver} deposited {amount} for {shares} shares")
        return shares

    def _remove_assets(
        self,
        state: LendingPairState,
        updates: PositionUpdates,
        owner: ChecksumAddress,
        amount: int,
        shares: int,
    ) -> LendingPairState:
        position = self._position(updates, owner)
        if shares > position.asset_shares:
            raise InsufficientBalance(
                account=owner,
                requested=shares,
                available=position.asset_shares,
            )
        self._check_available_assets(state, amount)

        updates[owner] = dataclasses.replace(
            position,
            asset_shares=position.asset_shares - shares,
        )
        return dataclasses.replace(
            state,
            total_asset=VaultAccount(
                amount=sub_uint128(state.total_asset.amount, amount),
                shares=sub_uint128(state.total_asset.shares, shares),
            ),
        )

    def redeem(self, shares: int, owner: str, *, timestamp: int) -> int:
        """
        Burn `shares` held by `owner` for the asset amount they represent, rounded down.
        """

        _check_amount(shares)
        owner = get_checksum_address(owner)

        state, updates, _ = self._accrue(timestamp)
        amount = state.total_asset.to_amount(shares, round_up=False)
        state = self._remove_assets(state, updates, owner, amount, shares)

        self._commit(state, updates)
        logger.debug(f"{owner} redeemed {shares} shares for {amount}")
        return amount

    def withdraw(self, amount: int, owner: str, *, timestamp: int) -> int:
        """
        Withdraw exactly `amount` of the asset for `owner`, burning the shares it represents,
        rounded up.
        """

        _check_amount(amount)
        owner = get_checksum_address(owner)

        state, updates, _ = self._accrue(timestamp)
        shares = state.total_asset.to_shares(amount, round_up=True)
        state = self._remove_assets(state, updates, owner, amount, shares)

        self._commit(state, updates)
        logger.debug(f"{owner} withdrew {amount} for {shares} shares")
        return shares

    def add_collateral(self, amount: int, borrower: str, *, timestamp: int) -> None:
        _check_amount(amount)
        borrower = get_checksum_address(borrower)

        state, updates, _ = self._accrue(timestamp)
        position = self._position(updates, borrower)
        updates[borrower] = dataclasses.replace(
            position,
            collateral_balance=add_uint256(position.collateral_balance, amount),
        )
        state = dataclasses.replace(
            state,
            total_collateral=add_uint256(state.total_collateral, amount),
        )

        self._commit(state, updates)
        logger.debug(f"{borrower} added {amount} collateral")

    def remove_collateral(self, amount: int, borrower: str, *, timestamp: int) -> None:
        """
        Remove `amount` of collateral from `borrower`'s position. A position with outstanding debt
        must remain solvent at the current exchange rate.
        """

        _check_amount(amount)
        borrower = get_checksum_address(borrower)

        state, updates, _ = self._accrue(timestamp)
        position = self._position(updates, borrower)
        if amount > position.collateral_balance:
            raise InsufficientBalance(
                account=borrower,
                requested=amount,
                available=position.collateral_balance,
            )

        position = dataclasses.replace(
            position,
            collateral_balance=position.collateral_balance - amount,
        )
        if position.borrow_shares > 0:
            state, exchange_rate = self._fetch_exchange_rate(state, timestamp)
            borrow_amount = state.total_borrow.to_amount(position.borrow_shares, round_up=True)
            required = required_collateral(
                borrow_amount=borrow_amount,
                exchange_rate=exchange_rate,
                target_ltv=self.config.max_ltv,
            )
            if position.collateral_balance < required:
                raise InsolventPosition(
                    borrower=borrower,
                    required=required,
                    collateral=position.collateral_balance,
                )

        updates[borrower] = position
        state = dataclasses.replace(
            state,
            total_collateral=sub_uint256(state.total_collateral, amount),
        )

        self._commit(state, updates)
        logger.debug(f"{borrower} removed {amount} collateral")

    def borrow_asset(
        self,
        amount: int,
        collateral_amount: int,
        borrower: str,
        *,
        timestamp: int,
    ) -> BorrowResult:
        """
        Borrow `amount` of the asset, optionally posting `collateral_amount` in the same action.

        Borrow shares are rounded up against the borrower. The position must be solvent at the
        freshly fetched exchange rate once the borrow and the new collateral are applied,
        otherwise `InsolventPosition` is raised and nothing changes.
        """

        _check_amount(amount)
        if collateral_amount < 0:
            raise InvalidAmount(amount=collateral_amount)
        borrower = get_checksum_address(borrower)
        self.access.check_borrower(borrower)
        if self.is_past_maturity(timestamp):
            raise PastMaturity(maturity=self.config.maturity)

        state, updates, _ = self._accrue(timestamp)
        state, exchange_rate = self._fetch_exchange_rate(state, timestamp)
        position = self._position(updates, borrower)

        if collateral_amount > 0:
            position = dataclasses.replace(
                position,
                collateral_balance=add_uint256(position.collateral_balance, collateral_amount),
            )
            state = dataclasses.replace(
                state,
                total_collateral=add_uint256(state.total_collateral, collateral_amount),
            )

        self._check_available_assets(state, amount)

        shares = state.total_borrow.to_shares(amount, round_up=True)
        total_borrow = VaultAccount(
            amount=add_uint128(state.total_borrow.amount, amount),
            shares=add_uint128(state.total_borrow.shares, shares),
        )
        position = dataclasses.replace(
            position,
            borrow_shares=position.borrow_shares + shares,
        )

        required = required_collateral(
            borrow_amount=total_borrow.to_amount(position.borrow_shares, round_up=True),
            exchange_rate=exchange_rate,
            target_ltv=self.config.max_ltv,
        )
        if position.collateral_balance < required:
            raise InsolventPosition(
                borrower=borrower,
                required=required,
                collateral=position.collateral_balance,
            )

        updates[borrower] = position
        state = dataclasses.replace(state, total_borrow=total_borrow)

        self._commit(state, updates)
        logger.debug(
            f"{borrower} borrowed {amount} for {shares} shares "
            f"(collateral {position.collateral_balance}, required {required})"
        )
        return BorrowResult(shares=shares, collateral_balance=position.collateral_balance)

    def repay_asset(self, shares: int, borrower: str, *, timestamp: int) -> RepayResult:
        """
        Repay `shares` of `borrower`'s debt. The amount owed is rounded up.
        """

        _check_amount(shares)
        borrower = get_checksum_address(borrower)

        state, updates, _ = self._accrue(timestamp)
        position = self._position(updates, borrower)
        if shares > position.borrow_shares:
            raise InsufficientBalance(
                account=borrower,
                requested=shares,
                available=position.borrow_shares,
            )

        amount = state.total_borrow.to_amount(shares, round_up=True)
        state = dataclasses.replace(
            state,
            total_borrow=VaultAccount(
                amount=sub_uint128(state.total_borrow.amount, amount),
                shares=sub_uint128(state.total_borrow.shares, shares),
            ),
        )
        position = dataclasses.replace(
            position,
            borrow_shares=position.borrow_shares - shares,
        )
        updates[borrower] = position

        self._commit(state, updates)
        logger.debug(f"{borrower} repaid {shares} shares for {amount}")
        return RepayResult(amount=amount, remaining_shares=position.borrow_shares)

    def liquidate(
        self,
        shares: int,
        borrower: str,
        liquidator: str,
        *,
        timestamp: int,
    ) -> LiquidationResult:
        """
        Repay `shares` of an eligible borrower's debt in exchange for their collateral.

        A position is eligible when it is insolvent at the current exchange rate, or when the pair
        has matured. The liquidator receives the collateral value of the repaid debt plus the
        liquidation fee, capped at the borrower's balance. When the cap is reached, any borrow
        shares left on the position are written off against lenders as bad debt.
        """

        _check_amount(shares)
        borrower = get_checksum_address(borrower)
        liquidator = get_checksum_address(liquidator)
        self.access.check_lender(liquidator)

        state, updates, _ = self._accrue(timestamp)
        state, exchange_rate = self._fetch_exchange_rate(state, timestamp)
        position = self._position(updates, borrower)
        if shares > position.borrow_shares:
            raise InsufficientBalance(
                account=borrower,
                requested=shares,
                available=position.borrow_shares,
            )

        total_borrow = state.total_borrow
        if (
            is_solvent(
                borrow_amount=total_borrow.to_amount(position.borrow_shares, round_up=True),
                collateral_balance=position.collateral_balance,
                exchange_rate=exchange_rate,
                max_ltv=self.config.max_ltv,
            )
            and not self.is_past_maturity(timestamp)
        ):
            raise LiquidationNotEligible(borrower=borrower)

        collateral_value = muldiv(
            total_borrow.to_amount(shares, round_up=False),
            exchange_rate,
            EXCHANGE_PRECISION,
        )
        collateral_with_fee = muldiv(
            collateral_value,
            LIQ_PRECISION + self.config.liquidation_fee,
            LIQ_PRECISION,
        )
        amount_to_repay = total_borrow.to_amount(shares, round_up=True)

        bad_debt_shares = 0
        bad_debt_amount = 0
        if collateral_with_fee >= position.collateral_balance:
            collateral_for_liquidator = position.collateral_balance
            bad_debt_shares = position.borrow_shares - shares
            if bad_debt_shares > 0:
                bad_debt_amount = total_borrow.to_amount(bad_debt_shares, round_up=False)
        else:
            collateral_for_liquidator = collateral_with_fee

        state = dataclasses.replace(
            state,
            total_asset=VaultAccount(
                amount=sub_uint128(state.total_asset.amount, bad_debt_amount),
                shares=state.total_asset.shares,
            ),
            total_borrow=VaultAccount(
                amount=sub_uint128(total_borrow.amount, amount_to_repay + bad_debt_amount),
                shares=sub_uint128(total_borrow.shares, shares + bad_debt_shares),
            ),
            total_collateral=sub_uint256(state.total_collateral, collateral_for_liquidator),
        )
        updates[borrower] = dataclasses.replace(
            position,
            borrow_shares=position.borrow_shares - shares - bad_debt_shares,
            collateral_balance=position.collateral_balance - collateral_for_liquidator,
        )

        self._commit(state, updates)
        logger.debug(
            f"{liquidator} liquidated {shares} shares of {borrower} for "
            f"{collateral_for_liquidator} collateral, repaying {amount_to_repay} "
            f"(bad debt {bad_debt_amount} as {bad_debt_shares} shares)"
        )
        return LiquidationResult(
            collateral_for_liquidator=collateral_for_liquidator,
            amount_to_repay=amount_to_repay,
            shares_liquidated=shares,
            bad_debt_shares=bad_debt_shares,
            bad_debt_amount=bad_debt_amount,
        )
