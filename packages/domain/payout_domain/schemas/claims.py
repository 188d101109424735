"""Claim records and per-holder payout history."""

from typing import Literal, Optional
from pydantic import Field

from .base import DomainModel, Amount, DistributionId, HolderId, LogicalTime, ShareCount


class Claim(DomainModel):
    """One paid claim by a holder against one distribution.

    The record's existence is the claimed marker: at most one Claim exists per
    (distribution_id, claimant) pair and it is never modified after creation.
    """

    distribution_id: DistributionId
    claimant: HolderId

    amount_claimed: Amount = Field(
        description="Amount paid to the claimant"
    )

    shares_used: ShareCount = Field(
        description="Share balance the entitlement was computed from"
    )

    claimed_at: LogicalTime

    claimed: Literal[True] = True


class ShareholderHistory(DomainModel):
    """Cumulative claim statistics for one holder.

    Created on the holder's first claim and updated on every later one.
    """

    holder: HolderId

    total_received: Amount = Field(
        default=0,
        description="Sum of all amounts claimed across distributions"
    )

    participation_count: int = Field(
        default=0,
        ge=0,
        description="Number of distributions claimed"
    )

    first_claim_at: Optional[LogicalTime] = None
    last_claim_at: Optional[LogicalTime] = None
