"""Read-only aggregate view of the ledger for reporting.

A LedgerSnapshot is a detached copy of the public aggregates at one logical
time. Report blocks consume it; nothing in it links back to live state.
"""

from typing import Dict, List
from pydantic import Field

from .base import DomainModel, Amount, LogicalTime, ShareCount
from .claims import ShareholderHistory
from .distribution import Distribution
from .lifecycle import LifecycleState


class LedgerSnapshot(DomainModel):
    """Point-in-time copy of ledger aggregates.

    Usage:
        snapshot = engine.snapshot()
        snapshot.total_shares
        snapshot.ownership_fraction("holder_a")
    """

    as_of: LogicalTime = Field(
        description="Logical time the snapshot was taken"
    )

    total_shares: ShareCount = 0

    balances: Dict[str, ShareCount] = Field(
        default_factory=dict,
        description="Holder identity → share balance (includes zero balances)"
    )

    lifecycle: LifecycleState = Field(
        default_factory=LifecycleState
    )

    distributions: List[Distribution] = Field(
        default_factory=list,
        description="All distributions in id order"
    )

    histories: Dict[str, ShareholderHistory] = Field(
        default_factory=dict,
        description="Holder identity → cumulative claim history"
    )

    @property
    def holder_count(self) -> int:
        """Holders with a positive balance."""
        return sum(1 for shares in self.balances.values() if shares > 0)

    @property
    def total_unclaimed(self) -> Amount:
        return sum(d.unclaimed_amount for d in self.distributions)

    @property
    def total_rounding_dust(self) -> Amount:
        return sum(d.rounding_dust for d in self.distributions)

    def ownership_fraction(self, holder: str) -> float:
        """Holder's share of total_shares as a fraction (0.25 = 25%)."""
        if self.total_shares == 0:
            return 0.0
        return self.balances.get(holder, 0) / self.total_shares
