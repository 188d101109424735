"""Distribution records.

A Distribution is one deposit converted into a fixed per-share payout rate.
The rate is computed once at creation and never changes; only total_claimed
moves afterwards (and status, through an explicit close).
"""

from enum import Enum
from typing import Dict, Optional
from pydantic import Field, model_validator

from .base import (
    DomainModel,
    Amount,
    DistributionId,
    FixedPointRate,
    HolderId,
    LogicalTime,
    ShareCount,
)


class DistributionStatus(str, Enum):
    """Distribution lifecycle status"""
    ACTIVE = "active"  # Open for claims
    COMPLETED = "completed"  # Closed by the administrator


class Distribution(DomainModel):
    """A single dividend deposit and its claim progress.

    Example:
        1,000,000 shares outstanding, 2,000,000 deposited, precision 1e6:
            per_share_rate = 2_000_000 * 1_000_000 // 1_000_000 = 2_000_000
        A holder of 100,000 shares is owed 100_000 * 2_000_000 // 1_000_000 = 200_000.
    """

    id: DistributionId = Field(
        description="Distribution id (never reused)"
    )

    total_amount: Amount = Field(
        description="Deposited value"
    )

    per_share_rate: FixedPointRate = Field(
        description="Fixed-point payout per share, set once at creation"
    )

    precision: int = Field(
        gt=0,
        description="Precision multiplier the rate is scaled by"
    )

    shares_at_creation: ShareCount = Field(
        description="Total shares outstanding when the rate was computed"
    )

    created_at: LogicalTime = Field(
        description="Logical time of creation"
    )

    creator: HolderId = Field(
        description="Identity that deposited the funds"
    )

    total_claimed: Amount = Field(
        default=0,
        description="Running sum of paid claims (monotonically non-decreasing)"
    )

    status: DistributionStatus = Field(
        default=DistributionStatus.ACTIVE,
        description="ACTIVE until explicitly closed"
    )

    closed_at: Optional[LogicalTime] = Field(
        default=None,
        description="Logical time the distribution was closed"
    )

    balance_snapshot: Dict[str, ShareCount] = Field(
        default_factory=dict,
        description="Holder balances at creation (only for distribution_time entitlements)"
    )

    @model_validator(mode='after')
    def validate_claimed_within_deposit(self):
        """total_claimed can never exceed the deposit."""
        if self.total_claimed > self.total_amount:
            raise ValueError(
                f"total_claimed {self.total_claimed} exceeds total_amount {self.total_amount}"
            )
        return self

    @property
    def is_active(self) -> bool:
        return self.status == DistributionStatus.ACTIVE

    @property
    def allocatable_amount(self) -> Amount:
        """Amount payable if every share outstanding at creation claims."""
        return (self.shares_at_creation * self.per_share_rate) // self.precision

    @property
    def rounding_dust(self) -> Amount:
        """Remainder lost to floor division at creation; retained by the pool."""
        return self.total_amount - self.allocatable_amount

    @property
    def unclaimed_amount(self) -> Amount:
        """Deposit not yet paid out (unclaimed entitlements plus dust)."""
        return self.total_amount - self.total_claimed
