"""Claim ledger: which (distribution, holder) pairs have been paid."""

from typing import Dict, List, Optional, Tuple

from ..errors import AlreadyClaimed, LedgerInvariantError
from ..schemas import Claim

ClaimKey = Tuple[int, str]


class ClaimLedger:
    """At most one Claim per (distribution_id, claimant), ever."""

    def __init__(self):
        self._claims: Dict[ClaimKey, Claim] = {}

    def has_claimed(self, distribution_id: int, claimant: str) -> bool:
        return (distribution_id, claimant) in self._claims

    def ensure_unclaimed(self, distribution_id: int, claimant: str) -> None:
        """Raise AlreadyClaimed if a record exists for this pair."""
        if self.has_claimed(distribution_id, claimant):
            raise AlreadyClaimed(distribution_id, claimant)

    def record(self, claim: Claim) -> None:
        self.ensure_unclaimed(claim.distribution_id, claim.claimant)
        self._claims[(claim.distribution_id, claim.claimant)] = claim

    def get(self, distribution_id: int, claimant: str) -> Optional[Claim]:
        return self._claims.get((distribution_id, claimant))

    def for_distribution(self, distribution_id: int) -> List[Claim]:
        return [c for (d_id, _), c in self._claims.items() if d_id == distribution_id]

    def for_holder(self, claimant: str) -> List[Claim]:
        return [c for (_, holder), c in self._claims.items() if holder == claimant]

    def total_for_distribution(self, distribution_id: int) -> int:
        return sum(c.amount_claimed for c in self.for_distribution(distribution_id))

    def verify(self) -> None:
        """Check every record sits under its own key."""
        for (distribution_id, claimant), claim in self._claims.items():
            if (claim.distribution_id, claim.claimant) != (distribution_id, claimant):
                raise LedgerInvariantError(
                    f"Claim for ({claim.distribution_id}, {claim.claimant}) stored "
                    f"under ({distribution_id}, {claimant})"
                )

    def __len__(self) -> int:
        return len(self._claims)
