from eth_typing import ChecksumAddress

from lendpair.exceptions.base import LendPairError


class ConfigurationError(LendPairError):
    """
    Raised when a pair configuration or the identity requesting an action is not acceptable.

    Configuration errors are never defaulted around, they prevent the pair from being built or the
    specific action from executing.
    """


class InvalidLtv(ConfigurationError):
    def __init__(self, ltv: int) -> None:
        self.ltv = ltv
        super().__init__(message=f"Invalid loan-to-value {ltv}.")

    def __reduce__(self) -> tuple[type["InvalidLtv"], tuple[int]]:
        return self.__class__, (self.ltv,)


class InvalidPairConfig(ConfigurationError):
    """
    Raised when a pair configuration fails validation.
    """


class InvalidRateConstants(ConfigurationError):
    """
    Raised when the constants for an interest rate module fail validation.
    """


class MissingOracleFeed(ConfigurationError):
    def __init__(self, message: str = "At least one price feed must be provided.") -> None:
        super().__init__(message=message)

    def __reduce__(self) -> tuple[type["MissingOracleFeed"], tuple[str]]:
        return self.__class__, (self.message,)


class NotApprovedBorrower(ConfigurationError):
    def __init__(self, borrower: ChecksumAddress) -> None:
        self.borrower = borrower
        super().__init__(message=f"{borrower} is not an approved borrower.")

    def __reduce__(self) -> tuple[type["NotApprovedBorrower"], tuple[ChecksumAddress]]:
        return self.__class__, (self.borrower,)


class NotApprovedLender(ConfigurationError):
    def __init__(self, lender: ChecksumAddress) -> None:
        self.lender = lender
        super().__init__(message=f"{lender} is not an approved lender.")

    def __reduce__(self) -> tuple[type["NotApprovedLender"], tuple[ChecksumAddress]]:
        return self.__class__, (self.lender,)
