"""Tests for fixed-point arithmetic helpers."""

import random

import pytest

from payout_domain import DivisionByZero, InvalidAmount, PRECISION
from payout_domain.arithmetic import proportional_amount, rate_for_total


# =============================================================================
# rate_for_total
# =============================================================================

def test_rate_for_reference_deposit():
    """2,000,000 over 1,000,000 shares at 1e6 precision is a rate of 2,000,000."""
    assert rate_for_total(2_000_000, 1_000_000, PRECISION) == 2_000_000


def test_rate_truncates():
    """Rates floor rather than round."""
    assert rate_for_total(1_000, 3, PRECISION) == 333_333_333


def test_rate_zero_units_raises_division_by_zero():
    """A zero share total is a division by zero, and still a ZeroDivisionError."""
    with pytest.raises(DivisionByZero):
        rate_for_total(1_000, 0, PRECISION)
    with pytest.raises(ZeroDivisionError):
        rate_for_total(1_000, 0, PRECISION)


def test_rate_rejects_negative_deposit():
    with pytest.raises(InvalidAmount):
        rate_for_total(-1, 10, PRECISION)


def test_non_positive_precision_rejected():
    with pytest.raises(InvalidAmount, match="precision"):
        rate_for_total(100, 10, 0)


# =============================================================================
# proportional_amount
# =============================================================================

def test_proportional_reference_claim():
    """100,000 shares at rate 2,000,000 is owed 200,000."""
    assert proportional_amount(100_000, 2_000_000, PRECISION) == 200_000


def test_proportional_truncates_to_zero_for_tiny_holdings():
    assert proportional_amount(1, 333, PRECISION) == 0


def test_proportional_handles_large_products():
    """Python ints do not overflow on the intermediate product."""
    quantity = 10**30
    rate = 10**30
    assert proportional_amount(quantity, rate, PRECISION) == 10**54


def test_proportional_rejects_negative_quantity():
    with pytest.raises(InvalidAmount):
        proportional_amount(-5, 100, PRECISION)


@pytest.mark.parametrize("quantity", [2.5, True])
def test_proportional_rejects_non_integer_quantity(quantity):
    with pytest.raises(InvalidAmount, match="whole number"):
        proportional_amount(quantity, 100, PRECISION)


# =============================================================================
# Aggregate properties
# =============================================================================

@pytest.mark.parametrize("seed", range(5))
def test_full_holder_never_over_allocated(seed):
    """A single holder of every share never receives more than the deposit."""
    rng = random.Random(seed)
    for _ in range(200):
        deposit = rng.randint(1, 10**12)
        total = rng.randint(1, 10**12)
        rate = rate_for_total(deposit, total, PRECISION)
        assert proportional_amount(total, rate, PRECISION) <= deposit


@pytest.mark.parametrize("seed", range(5))
def test_split_across_holders_never_exceeds_deposit(seed):
    """Summing every holder's floor never exceeds the deposit; the gap is dust."""
    rng = random.Random(seed)
    balances = [rng.randint(1, 10**7) for _ in range(rng.randint(1, 50))]
    deposit = rng.randint(1_000, 10**10)
    rate = rate_for_total(deposit, sum(balances), PRECISION)

    paid = sum(proportional_amount(b, rate, PRECISION) for b in balances)
    assert paid <= deposit
