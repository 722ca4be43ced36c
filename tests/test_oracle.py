import dataclasses

import pytest

from lendpair.config import settings
from lendpair.exceptions import (
    InvalidOraclePrice,
    MissingOracleFeed,
    OracleError,
    PriceTooLarge,
    StaleOraclePrice,
    ZeroExchangeRate,
)
from lendpair.oracle import DualOracle, PriceFeedReading, scale_price


@dataclasses.dataclass
class FakePriceFeed:
    price: int
    decimals: int = 18
    updated_at: int = 0

    def latest_round_data(self) -> PriceFeedReading:
        return PriceFeedReading(
            price=self.price,
            decimals=self.decimals,
            updated_at=self.updated_at,
        )


def test_scale_price() -> None:
    assert scale_price(123, 2) == 123 * 10**16
    assert scale_price(10**20, 20) == 10**18
    assert scale_price(10**18, 18) == 10**18


def test_multiply_feed_only() -> None:
    oracle = DualOracle(multiply_feed=FakePriceFeed(price=2_000 * 10**8, decimals=8))
    assert oracle.get_exchange_rate(timestamp=0) == 2_000 * 10**18


def test_divide_feed_only() -> None:
    oracle = DualOracle(divide_feed=FakePriceFeed(price=2_000 * 10**8, decimals=8))
    assert oracle.get_exchange_rate(timestamp=0) == 5 * 10**14


def test_both_feeds() -> None:
    oracle = DualOracle(
        multiply_feed=FakePriceFeed(price=3_000 * 10**8, decimals=8),
        divide_feed=FakePriceFeed(price=1_500 * 10**18),
    )
    assert oracle.get_exchange_rate(timestamp=0) == 2 * 10**18


def test_normalization() -> None:
    feed = FakePriceFeed(price=2_000 * 10**18)
    assert DualOracle(multiply_feed=feed, normalization=12).get_exchange_rate(0) == 2 * 10**9
    assert DualOracle(multiply_feed=feed, normalization=-2).get_exchange_rate(0) == 2 * 10**23


def test_missing_feeds() -> None:
    with pytest.raises(MissingOracleFeed):
        DualOracle()


def test_default_max_delay() -> None:
    oracle = DualOracle(multiply_feed=FakePriceFeed(price=10**18))
    assert oracle.max_delay == settings.max_oracle_delay


def test_stale_price() -> None:
    feed = FakePriceFeed(price=10**18, updated_at=1_000)
    oracle = DualOracle(multiply_feed=feed, max_delay=3_600)

    assert oracle.get_exchange_rate(timestamp=4_600) == 10**18
    with pytest.raises(StaleOraclePrice):
        oracle.get_exchange_rate(timestamp=4_601)


@pytest.mark.parametrize("price", [0, -1])
def test_invalid_price(price: int) -> None:
    with pytest.raises(InvalidOraclePrice):
        DualOracle(multiply_feed=FakePriceFeed(price=price)).get_exchange_rate(0)
    with pytest.raises(InvalidOraclePrice):
        DualOracle(divide_feed=FakePriceFeed(price=price)).get_exchange_rate(0)


def test_price_truncated_to_zero() -> None:
    with pytest.raises(InvalidOraclePrice):
        DualOracle(multiply_feed=FakePriceFeed(price=1, decimals=19)).get_exchange_rate(0)


def test_zero_exchange_rate() -> None:
    oracle = DualOracle(divide_feed=FakePriceFeed(price=10**40))
    with pytest.raises(ZeroExchangeRate):
        oracle.get_exchange_rate(0)


def test_price_too_large() -> None:
    oracle = DualOracle(multiply_feed=FakePriceFeed(price=2**200, decimals=0))
    with pytest.raises(PriceTooLarge):
        oracle.get_exchange_rate(0)


def test_oracle_errors_share_a_base() -> None:
    for exc in (
        InvalidOraclePrice(price=0),
        StaleOraclePrice(updated_at=0, timestamp=1, max_delay=0),
        ZeroExchangeRate(),
        PriceTooLarge(exchange_rate=2**230),
    ):
        assert isinstance(exc, OracleError)
