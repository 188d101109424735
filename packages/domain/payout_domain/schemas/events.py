"""Ledger notifications for external observers.

Events are immutable records of committed mutations. The engine appends them
to its event log and hands them to subscribers after the state change has been
applied; they never feed back into core state.

Event timeline example:
    1. SharesIssued: admin issues 1,000,000 shares to holder_a
    2. DistributionCreated: admin deposits 2,000,000 (distribution 1)
    3. DividendClaimed: holder_a claims 2,000,000 from distribution 1
"""

from typing import Any, Dict, Literal, Union
from pydantic import Field

from .base import (
    DomainModel,
    Amount,
    DistributionId,
    FixedPointRate,
    HolderId,
    LogicalTime,
    ShareCount,
)


# =============================================================================
# Event Base Class
# =============================================================================

class LedgerEvent(DomainModel):
    """Base class for all ledger events.

    Subclasses add a literal event_type used as the discriminator when events
    are serialized and read back.
    """

    sequence: int = Field(
        ge=1,
        description="Position of this event in the engine's event log"
    )

    occurred_at: LogicalTime = Field(
        description="Logical time the mutation was committed"
    )

    def log_fields(self) -> Dict[str, Any]:
        """Fields passed to the structured logger."""
        return self.model_dump(exclude={"event_type"})


# =============================================================================
# Share Events
# =============================================================================

class SharesIssued(LedgerEvent):
    """New shares were issued to a holder."""

    event_type: Literal["shares_issued"] = "shares_issued"

    recipient: HolderId
    amount: ShareCount
    total_shares: ShareCount = Field(
        description="Total shares outstanding after issuance"
    )


class SharesTransferred(LedgerEvent):
    """Shares moved between two holders. Total outstanding is unchanged."""

    event_type: Literal["shares_transferred"] = "shares_transferred"

    from_holder: HolderId
    to_holder: HolderId
    amount: ShareCount


# =============================================================================
# Distribution Events
# =============================================================================

class DistributionCreated(LedgerEvent):
    """A deposit was taken into custody and turned into a per-share rate."""

    event_type: Literal["distribution_created"] = "distribution_created"

    distribution_id: DistributionId
    amount: Amount
    per_share_rate: FixedPointRate
    creator: HolderId


class DividendClaimed(LedgerEvent):
    """A holder was paid their entitlement from one distribution."""

    event_type: Literal["dividend_claimed"] = "dividend_claimed"

    distribution_id: DistributionId
    claimant: HolderId
    amount: Amount


class DistributionClosed(LedgerEvent):
    """The administrator closed a distribution; no further claims are accepted."""

    event_type: Literal["distribution_closed"] = "distribution_closed"

    distribution_id: DistributionId
    unclaimed_amount: Amount


# =============================================================================
# Lifecycle Events
# =============================================================================

class PauseToggled(LedgerEvent):
    """The pause switch was flipped."""

    event_type: Literal["pause_toggled"] = "pause_toggled"

    paused: bool
    caller: HolderId


AnyLedgerEvent = Union[
    SharesIssued,
    SharesTransferred,
    DistributionCreated,
    DividendClaimed,
    DistributionClosed,
    PauseToggled,
]
