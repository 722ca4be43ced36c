from lendpair.exceptions.base import LendPairError


class MathError(LendPairError):
    """
    Raised by the fixed-width integer helpers.
    """


class ArithmeticOverflowError(MathError):
    """
    An input or result falls outside the representable range of its fixed-width type.

    Accounting values are unsigned integers with a bounded width, so a value outside that range is
    a precondition violation and is never wrapped or saturated.
    """


class DivisionByZeroError(MathError):
    def __init__(self, message: str = "Division by zero") -> None:
        super().__init__(message=message)

    def __reduce__(self) -> tuple[type["DivisionByZeroError"], tuple[str]]:
        return self.__class__, (self.message,)
