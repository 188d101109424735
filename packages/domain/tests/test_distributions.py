"""Tests for distribution creation and closing."""

import pytest

from payout_domain import (
    AssetTransferFailed,
    DistributionNotFound,
    InMemoryCustody,
    InvalidAmount,
    InvalidShares,
    MIN_DIVIDEND_AMOUNT,
    PayoutEngine,
    Unauthorized,
)
from payout_domain.schemas import DistributionStatus

ADMIN = "admin"


# =============================================================================
# Creation
# =============================================================================

def test_reference_distribution_rate(engine, custody):
    """1,000,000 shares, 2,000,000 deposited → rate 2,000,000 and funds in custody."""
    engine.issue(ADMIN, "holder_a", 1_000_000)
    distribution_id = engine.create_distribution(ADMIN, 2_000_000)

    distribution = engine.get_distribution(distribution_id)
    assert distribution_id == 1
    assert distribution.per_share_rate == 2_000_000
    assert distribution.total_amount == 2_000_000
    assert distribution.total_claimed == 0
    assert distribution.shares_at_creation == 1_000_000
    assert distribution.creator == ADMIN
    assert distribution.status == DistributionStatus.ACTIVE
    assert custody.pool_balance == 2_000_000


def test_ids_increase_and_totals_accumulate(engine):
    engine.issue(ADMIN, "holder_a", 1_000)
    ids = [engine.create_distribution(ADMIN, 10_000) for _ in range(3)]

    state = engine.get_lifecycle_state()
    assert ids == [1, 2, 3]
    assert state.next_distribution_id == 4
    assert state.total_distributed == 30_000


def test_created_at_uses_logical_clock(engine, clock):
    engine.issue(ADMIN, "holder_a", 1_000)
    clock.advance(41)
    distribution_id = engine.create_distribution(ADMIN, 10_000)
    assert engine.get_distribution(distribution_id).created_at == 42


def test_below_minimum_consumes_no_id(engine, custody):
    """Deposits below the minimum fail with InvalidAmount and leave the counter alone."""
    engine.issue(ADMIN, "holder_a", 1_000)

    with pytest.raises(InvalidAmount):
        engine.create_distribution(ADMIN, MIN_DIVIDEND_AMOUNT - 1)

    state = engine.get_lifecycle_state()
    assert state.next_distribution_id == 1
    assert state.total_distributed == 0
    assert custody.pool_balance == 0


@pytest.mark.parametrize("deposit", [1_500.5, True, "2000"])
def test_non_integer_deposit_consumes_no_id(engine, custody, deposit):
    engine.issue(ADMIN, "holder_a", 1_000)

    with pytest.raises(InvalidAmount, match="whole number"):
        engine.create_distribution(ADMIN, deposit)

    state = engine.get_lifecycle_state()
    assert state.next_distribution_id == 1
    assert state.total_distributed == 0
    assert custody.pool_balance == 0


def test_minimum_deposit_is_accepted(engine):
    engine.issue(ADMIN, "holder_a", 1_000)
    assert engine.create_distribution(ADMIN, MIN_DIVIDEND_AMOUNT) == 1


def test_zero_total_shares_rejected(engine):
    with pytest.raises(InvalidShares):
        engine.create_distribution(ADMIN, 10_000)
    assert engine.get_lifecycle_state().next_distribution_id == 1


def test_non_administrator_cannot_distribute(engine):
    engine.issue(ADMIN, "holder_a", 1_000)
    with pytest.raises(Unauthorized):
        engine.create_distribution("holder_a", 10_000)
    assert engine.list_distributions() == []


def test_failed_custody_pull_creates_nothing(clock):
    """If the deposit cannot be pulled, no record exists and no id is used."""
    custody = InMemoryCustody(wallets={ADMIN: 5_000})
    engine = PayoutEngine(ADMIN, custody, clock)
    engine.issue(ADMIN, "holder_a", 1_000)

    with pytest.raises(AssetTransferFailed):
        engine.create_distribution(ADMIN, 10_000)

    assert engine.list_distributions() == []
    assert engine.get_lifecycle_state().next_distribution_id == 1
    assert custody.wallet_balance(ADMIN) == 5_000
    engine.verify_invariants()


def test_rate_is_fixed_after_creation(engine):
    """Issuing more shares later never changes an existing rate."""
    engine.issue(ADMIN, "holder_a", 1_000_000)
    engine.create_distribution(ADMIN, 2_000_000)
    engine.issue(ADMIN, "holder_b", 3_000_000)

    distribution = engine.get_distribution(1)
    assert distribution.per_share_rate == 2_000_000
    assert distribution.shares_at_creation == 1_000_000


def test_get_distribution_returns_a_copy(engine):
    engine.issue(ADMIN, "holder_a", 1_000)
    engine.create_distribution(ADMIN, 10_000)

    copy = engine.get_distribution(1)
    copy.total_claimed = 5_000

    assert engine.get_distribution(1).total_claimed == 0


def test_unknown_distribution_lookup(engine):
    with pytest.raises(DistributionNotFound):
        engine.get_distribution(99)


def test_rounding_dust_is_tracked(engine):
    """1,000 over 3 shares: 999 allocatable, 1 unit of dust stays in the pool."""
    engine.issue(ADMIN, "holder_a", 3)
    engine.create_distribution(ADMIN, 1_000)

    distribution = engine.get_distribution(1)
    assert distribution.per_share_rate == 333_333_333
    assert distribution.allocatable_amount == 999
    assert distribution.rounding_dust == 1
    assert distribution.unclaimed_amount == 1_000


# =============================================================================
# Closing
# =============================================================================

def test_close_distribution(funded_engine, clock):
    clock.advance(5)
    funded_engine.close_distribution(ADMIN, 1)

    distribution = funded_engine.get_distribution(1)
    assert distribution.status == DistributionStatus.COMPLETED
    assert distribution.closed_at == 6
    assert not distribution.is_active


def test_closed_distribution_rejects_claims(funded_engine):
    funded_engine.close_distribution(ADMIN, 1)
    with pytest.raises(DistributionNotFound, match="not active"):
        funded_engine.claim(1, "holder_a")


def test_close_twice_fails(funded_engine):
    funded_engine.close_distribution(ADMIN, 1)
    with pytest.raises(DistributionNotFound):
        funded_engine.close_distribution(ADMIN, 1)


def test_close_requires_administrator(funded_engine):
    with pytest.raises(Unauthorized):
        funded_engine.close_distribution("holder_a", 1)
    assert funded_engine.get_distribution(1).is_active
