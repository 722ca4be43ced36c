class LendPairError(Exception):
    """
    Base exception used as the parent class for all exceptions raised by this package.

    Calling code should catch `LendPairError` and derived classes separately before general
    exceptions, e.g.:

    ```
    try:
        pair.borrow_asset(...)
    except OracleError:
        ... # refresh the price feeds and resubmit
    except InsolvencyError:
        ... # do not retry
    except LendPairError:
        ... # handle non-specific lendpair exception
    except Exception:
        ... # handle exceptions raised by 3rd party dependencies or Python built-ins
    ```

    An optional string-formatted message may be attached to the exception and retrieved by accessing
    the `.message` attribute.
    """

    message: str | None = None

    def __init__(self, message: str | None = None) -> None:
        if message:
            self.message = message
            super().__init__(message)


class LendPairValueError(LendPairError): ...


class InvalidAmount(LendPairValueError):
    """
    Raised when an action is requested with a zero or negative amount.
    """

    def __init__(self, amount: int) -> None:
        self.amount = amount
        super().__init__(message=f"Invalid amount {amount}, must be positive.")

    def __reduce__(self) -> tuple[type["InvalidAmount"], tuple[int]]:
        return self.__class__, (self.amount,)
