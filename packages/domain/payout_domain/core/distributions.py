"""Distribution registry: append-only log of dividend deposits."""

from typing import Dict, List, Optional

from ..arithmetic import rate_for_total, require_whole_amount
from ..errors import DistributionNotFound, InvalidAmount, InvalidShares, LedgerInvariantError
from ..schemas import Distribution, DistributionStatus, LifecycleState


class DistributionRegistry:
    """Stores distributions by id and owns the id counter.

    Ids start at 1 and are consumed only when a record is actually stored, so a
    rejected deposit leaves next_distribution_id untouched.

    Args:
        lifecycle: Shared lifecycle counters (next id, total distributed)
        precision: Fixed-point multiplier for per-share rates
        min_amount: Smallest accepted deposit
    """

    def __init__(self, lifecycle: LifecycleState, precision: int, min_amount: int):
        self.lifecycle = lifecycle
        self.precision = precision
        self.min_amount = min_amount
        self._distributions: Dict[int, Distribution] = {}

    def prepare(
        self,
        deposit_amount: int,
        total_shares: int,
        creator: str,
        created_at: int,
        balance_snapshot: Optional[Dict[str, int]] = None,
    ) -> Distribution:
        """Validate a deposit and build its record without storing it.

        The rate is computed against `total_shares` as it is right now.

        Raises:
            InvalidAmount: If deposit_amount is not a whole number or is below the minimum
            InvalidShares: If no shares are outstanding
        """
        require_whole_amount(deposit_amount, "Deposit")
        if deposit_amount < self.min_amount:
            raise InvalidAmount(
                f"Deposit {deposit_amount} is below the minimum of {self.min_amount}"
            )
        if total_shares <= 0:
            raise InvalidShares("Cannot distribute with zero shares outstanding")

        return Distribution(
            id=self.lifecycle.next_distribution_id,
            total_amount=deposit_amount,
            per_share_rate=rate_for_total(deposit_amount, total_shares, self.precision),
            precision=self.precision,
            shares_at_creation=total_shares,
            created_at=created_at,
            creator=creator,
            balance_snapshot=balance_snapshot or {},
        )

    def commit(self, distribution: Distribution) -> int:
        """Store a prepared distribution and advance the lifecycle counters."""
        if distribution.id != self.lifecycle.next_distribution_id:
            raise LedgerInvariantError(
                f"Distribution id {distribution.id} does not match next id "
                f"{self.lifecycle.next_distribution_id}"
            )
        self._distributions[distribution.id] = distribution
        self.lifecycle.next_distribution_id += 1
        self.lifecycle.total_distributed += distribution.total_amount
        return distribution.id

    def get(self, distribution_id: int) -> Optional[Distribution]:
        return self._distributions.get(distribution_id)

    def require_active(self, distribution_id: int) -> Distribution:
        """Look up a distribution that can still be claimed.

        Raises:
            DistributionNotFound: If the id is unknown or the distribution is closed
        """
        distribution = self._distributions.get(distribution_id)
        if distribution is None:
            raise DistributionNotFound(distribution_id)
        if not distribution.is_active:
            raise DistributionNotFound(distribution_id, reason="is not active")
        return distribution

    def close(self, distribution_id: int, closed_at: int) -> Distribution:
        """Move an ACTIVE distribution to COMPLETED."""
        distribution = self.require_active(distribution_id)
        distribution.status = DistributionStatus.COMPLETED
        distribution.closed_at = closed_at
        return distribution

    def list_distributions(self) -> List[Distribution]:
        """All distributions in id order."""
        return [self._distributions[i] for i in sorted(self._distributions)]

    def verify(self) -> None:
        """Check claim totals stay within deposits and ids are contiguous."""
        for distribution in self._distributions.values():
            if distribution.total_claimed > distribution.total_amount:
                raise LedgerInvariantError(
                    f"Distribution {distribution.id} paid {distribution.total_claimed} "
                    f"out of {distribution.total_amount}"
                )
        expected_ids = list(range(1, self.lifecycle.next_distribution_id))
        if sorted(self._distributions) != expected_ids:
            raise LedgerInvariantError(
                f"Distribution ids {sorted(self._distributions)} do not match "
                f"next_distribution_id {self.lifecycle.next_distribution_id}"
            )
