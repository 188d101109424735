"""Shared fixtures for payout ledger tests."""
import pytest

from payout_domain import InMemoryCustody, PayoutEngine, PayoutSettings, SequenceClock

ADMIN = "admin"
ADMIN_FUNDS = 100_000_000


@pytest.fixture
def settings() -> PayoutSettings:
    return PayoutSettings()


@pytest.fixture
def custody() -> InMemoryCustody:
    return InMemoryCustody(wallets={ADMIN: ADMIN_FUNDS})


@pytest.fixture
def clock() -> SequenceClock:
    return SequenceClock()


@pytest.fixture
def engine(custody, clock, settings) -> PayoutEngine:
    return PayoutEngine(administrator=ADMIN, custody=custody, clock=clock, settings=settings)


@pytest.fixture
def funded_engine(engine) -> PayoutEngine:
    """1,000,000 shares split 100k / 900k and one 2,000,000 distribution (id 1)."""
    engine.issue(ADMIN, "holder_a", 100_000)
    engine.issue(ADMIN, "holder_b", 900_000)
    engine.create_distribution(ADMIN, 2_000_000)
    return engine
