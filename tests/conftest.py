import pytest

from starregistry.blockchain.ledger import Ledger
from starregistry.wallet.keys import WalletKeys


START_TIME = 1_700_000_000


class FakeClock:
    """Controllable replacement for time.time."""

    def __init__(self, now=START_TIME):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ledger(clock):
    return Ledger(clock=clock)


@pytest.fixture(scope="session")
def wallet():
    return WalletKeys.generate()


@pytest.fixture(scope="session")
def other_wallet():
    return WalletKeys.generate()
