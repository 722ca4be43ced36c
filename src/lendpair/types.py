import dataclasses

from lendpair.libraries import vault_accounting


@dataclasses.dataclass(slots=True, frozen=True)
class VaultAccount:
    """
    A total amount and the shares issued against it.
    """

    amount: int = 0
    shares: int = 0

    def to_shares(self, amount: int, *, round_up: bool) -> int:
        return vault_accounting.to_shares(
            total_amount=self.amount,
            total_shares=self.shares,
            amount=amount,
            round_up=round_up,
        )

    def to_amount(self, shares: int, *, round_up: bool) -> int:
        return vault_accounting.to_amount(
            total_amount=self.amount,
            total_shares=self.shares,
            shares=shares,
            round_up=round_up,
        )


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class CurrentRateInfo:
    last_timestamp: int
    fee_to_protocol_rate: int
    rate_per_second: int


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class ExchangeRateInfo:
    last_timestamp: int
    exchange_rate: int


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class UserPosition:
    asset_shares: int = 0
    borrow_shares: int = 0
    collateral_balance: int = 0


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class LendingPairState:
    total_asset: VaultAccount
    total_borrow: VaultAccount
    total_collateral: int
    current_rate_info: CurrentRateInfo
    exchange_rate_info: ExchangeRateInfo


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class AccountingSnapshot:
    """
    A read-only projection of the pair's ledger totals, taken between actions for reconciliation.
    """

    total_asset_amount: int
    total_asset_shares: int
    total_borrow_amount: int
    total_borrow_shares: int
    total_collateral: int

    @classmethod
    def from_state(cls, state: LendingPairState) -> "AccountingSnapshot":
        return cls(
            total_asset_amount=state.total_asset.amount,
            total_asset_shares=state.total_asset.shares,
            total_borrow_amount=state.total_borrow.amount,
            total_borrow_shares=state.total_borrow.shares,
            total_collateral=state.total_collateral,
        )


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class InterestAccrualResult:
    interest_earned: int
    fee_amount: int
    fee_shares: int
    new_rate: int
    new_utilization: int


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class BorrowResult:
    shares: int
    collateral_balance: int


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class RepayResult:
    amount: int
    remaining_shares: int


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class LiquidationResult:
    collateral_for_liquidator: int
    amount_to_repay: int
    shares_liquidated: int
    bad_debt_shares: int
    bad_debt_amount: int
