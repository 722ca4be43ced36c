from eth_typing import ChecksumAddress

from lendpair.exceptions.base import LendPairError


class PairError(LendPairError):
    """
    Exception raised inside lending pair actions.
    """


class LateUpdateError(PairError):
    """
    Raised when an action is attempted at a timestamp prior to the last recorded update.
    """

    def __init__(self, timestamp: int, last_timestamp: int) -> None:
        self.timestamp = timestamp
        self.last_timestamp = last_timestamp
        super().__init__(
            message=f"Timestamp {timestamp} is earlier than the last update at {last_timestamp}."
        )

    def __reduce__(self) -> tuple[type["LateUpdateError"], tuple[int, int]]:
        return self.__class__, (self.timestamp, self.last_timestamp)


class PastMaturity(PairError):
    def __init__(self, maturity: int) -> None:
        self.maturity = maturity
        super().__init__(message=f"The pair matured at {maturity}.")

    def __reduce__(self) -> tuple[type["PastMaturity"], tuple[int]]:
        return self.__class__, (self.maturity,)


class InsufficientBalance(PairError):
    """
    Raised when an account tries to redeem, repay or liquidate more than it holds.
    """

    def __init__(self, account: ChecksumAddress, requested: int, available: int) -> None:
        self.account = account
        self.requested = requested
        self.available = available
        super().__init__(
            message=f"{account} requested {requested}, only {available} available."
        )

    def __reduce__(self) -> tuple[type["InsufficientBalance"], tuple[ChecksumAddress, int, int]]:
        return self.__class__, (self.account, self.requested, self.available)


class InsolvencyError(PairError):
    """
    Raised when an action would leave a position undercollateralized or the pair under-reserved.
    """


class InsolventPosition(InsolvencyError):
    def __init__(self, borrower: ChecksumAddress, required: int, collateral: int) -> None:
        self.borrower = borrower
        self.required = required
        self.collateral = collateral
        super().__init__(
            message=f"{borrower} would hold {collateral} collateral, {required} is required."
        )

    def __reduce__(self) -> tuple[type["InsolventPosition"], tuple[ChecksumAddress, int, int]]:
        return self.__class__, (self.borrower, self.required, self.collateral)


class InsufficientAssetsInPool(InsolvencyError):
    def __init__(self, available: int, requested: int) -> None:
        self.available = available
        self.requested = requested
        super().__init__(
            message=f"Insufficient assets in pair: {requested} requested, {available} available."
        )

    def __reduce__(self) -> tuple[type["InsufficientAssetsInPool"], tuple[int, int]]:
        return self.__class__, (self.available, self.requested)


class LiquidationNotEligible(PairError):
    """
    Raised when liquidation is attempted on a solvent position before maturity.
    """

    def __init__(self, borrower: ChecksumAddress) -> None:
        self.borrower = borrower
        super().__init__(message=f"{borrower} is solvent and the pair has not matured.")

    def __reduce__(self) -> tuple[type["LiquidationNotEligible"], tuple[ChecksumAddress]]:
        return self.__class__, (self.borrower,)
