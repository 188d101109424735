"""Tests for the administrator check and the global pause switch."""

import pytest

from payout_domain import InMemoryCustody, Paused, PayoutEngine, Unauthorized
from payout_domain.core import AccessGate
from payout_domain.schemas import LifecycleState

ADMIN = "admin"


def test_toggle_pause_flips_and_returns_state(engine):
    assert engine.toggle_pause(ADMIN) is True
    assert engine.get_lifecycle_state().paused is True
    assert engine.toggle_pause(ADMIN) is False
    assert engine.get_lifecycle_state().paused is False


def test_toggle_pause_requires_administrator(engine):
    """Non-administrator toggle fails and leaves the flag unchanged."""
    with pytest.raises(Unauthorized):
        engine.toggle_pause("mallory")
    assert engine.get_lifecycle_state().paused is False


def test_pause_blocks_every_mutation(funded_engine):
    funded_engine.toggle_pause(ADMIN)

    with pytest.raises(Paused):
        funded_engine.issue(ADMIN, "holder_a", 10)
    with pytest.raises(Paused):
        funded_engine.transfer("holder_a", "holder_b", 10)
    with pytest.raises(Paused):
        funded_engine.create_distribution(ADMIN, 10_000)
    with pytest.raises(Paused):
        funded_engine.claim(1, "holder_a")
    with pytest.raises(Paused):
        funded_engine.close_distribution(ADMIN, 1)

    assert funded_engine.balance_of("holder_a") == 100_000
    assert funded_engine.get_lifecycle_state().next_distribution_id == 2
    assert funded_engine.get_claim(1, "holder_a") is None


def test_reads_work_while_paused(funded_engine):
    funded_engine.toggle_pause(ADMIN)

    assert funded_engine.balance_of("holder_b") == 900_000
    assert funded_engine.get_distribution(1).total_amount == 2_000_000
    assert funded_engine.get_claim(1, "holder_a") is None
    assert funded_engine.get_history("holder_a") is None
    assert funded_engine.get_lifecycle_state().paused is True
    assert funded_engine.entitlement(1, "holder_a") == 200_000
    assert funded_engine.snapshot().lifecycle.paused is True


def test_unpause_restores_mutations(funded_engine):
    funded_engine.toggle_pause(ADMIN)
    funded_engine.toggle_pause(ADMIN)

    funded_engine.issue(ADMIN, "holder_c", 10)
    funded_engine.transfer("holder_a", "holder_b", 10)
    assert funded_engine.claim(1, "holder_b") > 0
    assert funded_engine.create_distribution(ADMIN, 10_000) == 2


def test_authorization_checked_before_pause(engine):
    """A non-administrator gets Unauthorized whether or not the ledger is paused."""
    engine.toggle_pause(ADMIN)
    with pytest.raises(Unauthorized):
        engine.issue("mallory", "mallory", 1)


def test_administrator_is_injected():
    engine = PayoutEngine(administrator="treasury", custody=InMemoryCustody())
    assert engine.administrator == "treasury"
    with pytest.raises(Unauthorized):
        engine.toggle_pause("admin")


def test_gate_requires_administrator_identity():
    with pytest.raises(ValueError):
        AccessGate("", LifecycleState())
