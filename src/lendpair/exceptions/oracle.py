from lendpair.exceptions.base import LendPairError

"""
Exceptions defined here are raised while composing an exchange rate from the price feeds. An oracle
error is transient from the caller's point of view: the action may be resubmitted after the feeds
are refreshed.
"""


class OracleError(LendPairError):
    """
    Exception raised when a usable exchange rate cannot be produced.
    """


class InvalidOraclePrice(OracleError):
    def __init__(self, price: int) -> None:
        self.price = price
        super().__init__(message=f"Oracle price {price} is not positive.")

    def __reduce__(self) -> tuple[type["InvalidOraclePrice"], tuple[int]]:
        return self.__class__, (self.price,)


class StaleOraclePrice(OracleError):
    def __init__(self, updated_at: int, timestamp: int, max_delay: int) -> None:
        self.updated_at = updated_at
        self.timestamp = timestamp
        self.max_delay = max_delay
        super().__init__(
            message=(
                f"Oracle price updated at {updated_at} is older than {max_delay}s at {timestamp}."
            )
        )

    def __reduce__(self) -> tuple[type["StaleOraclePrice"], tuple[int, int, int]]:
        return self.__class__, (self.updated_at, self.timestamp, self.max_delay)


class ZeroExchangeRate(OracleError):
    def __init__(self, message: str = "Exchange rate is zero.") -> None:
        super().__init__(message=message)

    def __reduce__(self) -> tuple[type["ZeroExchangeRate"], tuple[str]]:
        return self.__class__, (self.message,)


class PriceTooLarge(OracleError):
    def __init__(self, exchange_rate: int) -> None:
        self.exchange_rate = exchange_rate
        super().__init__(message=f"Exchange rate {exchange_rate} exceeds the uint224 range.")

    def __reduce__(self) -> tuple[type["PriceTooLarge"], tuple[int]]:
        return self.__class__, (self.exchange_rate,)
