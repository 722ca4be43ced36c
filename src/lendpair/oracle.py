"""
Exchange rate composition from one or two price feeds.

Price feeds are external collaborators. Anything exposing `latest_round_data()` and returning a
`PriceFeedReading` can be used.
"""

import dataclasses
from typing import Protocol

from lendpair.config import settings
from lendpair.constants import EXCHANGE_PRECISION, MAX_UINT224, ORACLE_PRECISION
from lendpair.exceptions import (
    InvalidOraclePrice,
    MissingOracleFeed,
    PriceTooLarge,
    StaleOraclePrice,
    ZeroExchangeRate,
)
from lendpair.logging import logger

ORACLE_DECIMALS = 18


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class PriceFeedReading:
    price: int
    decimals: int
    updated_at: int


class PriceFeed(Protocol):
    def latest_round_data(self) -> PriceFeedReading: ...


class ExchangeRateOracle(Protocol):
    def get_exchange_rate(self, timestamp: int) -> int: ...


def scale_price(price: int, decimals: int) -> int:
    """
    Convert a feed price with `decimals` decimal places to ORACLE_PRECISION.
    """

    if decimals <= ORACLE_DECIMALS:
        return price * 10 ** (ORACLE_DECIMALS - decimals)
    return price // 10 ** (decimals - ORACLE_DECIMALS)


class DualOracle:
    """
    Composes an exchange rate from a "multiply" feed and a "divide" feed:

        rate = EXCHANGE_PRECISION * multiply / divide / 10**normalization

    Either feed may be omitted, in which case it contributes a price of 1.0. The normalization
    exponent corrects for the decimal places of the asset and collateral tokens and may be
    negative.
    """

    def __init__(
        self,
        *,
        multiply_feed: PriceFeed | None = None,
        divide_feed: PriceFeed | None = None,
        normalization: int = 0,
        max_delay: int | None = None,
    ) -> None:
        if multiply_feed is None and divide_feed is None:
            raise MissingOracleFeed

        self.multiply_feed = multiply_feed
        self.divide_feed = divide_feed
        self.normalization = normalization
        self.max_delay = max_delay if max_delay is not None else settings.max_oracle_delay

    def _read(self, feed: PriceFeed, timestamp: int) -> int:
        reading = feed.latest_round_data()
        if reading.price <= 0:
            raise InvalidOraclePrice(price=reading.price)
        if timestamp - reading.updated_at > self.max_delay:
            raise StaleOraclePrice(
                updated_at=reading.updated_at,
                timestamp=timestamp,
                max_delay=self.max_delay,
            )

        price = scale_price(reading.price, reading.decimals)
        if price == 0:
            raise InvalidOraclePrice(price=price)
        return price

    def get_exchange_rate(self, timestamp: int) -> int:
        multiply_price = (
            self._read(self.multiply_feed, timestamp)
            if self.multiply_feed is not None
            else ORACLE_PRECISION
        )
        divide_price = (
            self._read(self.divide_feed, timestamp)
            if self.divide_feed is not None
            else ORACLE_PRECISION
        )

        exchange_rate = (EXCHANGE_PRECISION * multiply_price) // divide_price
        if self.normalization >= 0:
            exchange_rate //= 10**self.normalization
        else:
            exchange_rate *= 10 ** (-self.normalization)

        if exchange_rate == 0:
            raise ZeroExchangeRate
        if exchange_rate > MAX_UINT224:
            raise PriceTooLarge(exchange_rate=exchange_rate)

        logger.debug(f"Exchange rate at {timestamp}: {exchange_rate}")
        return exchange_rate
