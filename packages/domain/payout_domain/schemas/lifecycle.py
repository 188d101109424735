"""Process-wide lifecycle counters."""

from pydantic import Field

from .base import DomainModel, Amount


class LifecycleState(DomainModel):
    """Pause flag and global counters.

    Mutated only by the access gate (paused) and the distribution registry
    (next_distribution_id, total_distributed). total_claimed is advanced by
    successful claims.
    """

    paused: bool = False

    next_distribution_id: int = Field(
        default=1,
        ge=1,
        description="Id the next distribution will receive"
    )

    total_distributed: Amount = Field(
        default=0,
        description="Sum of all deposits ever made"
    )

    total_claimed: Amount = Field(
        default=0,
        description="Sum of all claims ever paid"
    )
