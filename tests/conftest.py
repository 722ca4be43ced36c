import dataclasses
import logging

import pytest

from lendpair import LendingPair, PairConfig
from lendpair.logging import logger

FEE_RECIPIENT = "0x4444444444444444444444444444444444444444"

# Two collateral units per asset unit
DEFAULT_EXCHANGE_RATE = 2 * 10**18


@dataclasses.dataclass
class FixedOracle:
    """
    An oracle returning a settable exchange rate regardless of the timestamp, or raising `error`
    when one is set.
    """

    exchange_rate: int = DEFAULT_EXCHANGE_RATE
    calls: int = 0
    error: Exception | None = None

    def get_exchange_rate(self, timestamp: int) -> int:  # noqa: ARG002
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.exchange_rate


@pytest.fixture(scope="session", autouse=True)
def _set_lendpair_logging():
    """
    Set the logging level to DEBUG for the test run
    """
    logger.setLevel(logging.DEBUG)


@pytest.fixture
def oracle() -> FixedOracle:
    return FixedOracle()


@pytest.fixture
def pair_config() -> PairConfig:
    return PairConfig(
        max_ltv=75_000,
        liquidation_fee=10_000,
        fee_to_protocol_rate=10_000,
        fee_recipient=FEE_RECIPIENT,
    )


@pytest.fixture
def pair(pair_config: PairConfig, oracle: FixedOracle) -> LendingPair:
    return LendingPair(pair_config, oracle=oracle, timestamp=0, silent=True)


@pytest.fixture
def funded_pair(pair: LendingPair) -> LendingPair:
    """
    A pair holding a 10,000 unit deposit and no borrows.
    """

    pair.deposit(10_000, "0x1111111111111111111111111111111111111111", timestamp=0)
    return pair
