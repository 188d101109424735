"""Base classes and type system for payout ledger models.

This module provides the foundational types and the base model shared by
every record the ledger stores or emits.
"""

from typing import Annotated
from pydantic import BaseModel, Field, ConfigDict

# =============================================================================
# Base Model
# =============================================================================

class DomainModel(BaseModel):
    """Base class for all ledger models.

    Provides common configuration for all Pydantic models in the domain layer:
    - Validation on assignment, so counters can never go negative in place
    - Enum value serialization
    """

    model_config = ConfigDict(
        frozen=False,  # Counters such as total_claimed are updated in place
        validate_assignment=True,
        use_enum_values=True,
    )


# =============================================================================
# Type Aliases - Numeric
# =============================================================================

ShareCount = Annotated[
    int,
    Field(ge=0, description="Number of shares (non-negative integer)")
]

Amount = Annotated[
    int,
    Field(ge=0, description="Quantity of the underlying asset in its smallest unit")
]

FixedPointRate = Annotated[
    int,
    Field(ge=0, description="Per-share rate scaled by the precision multiplier")
]

LogicalTime = Annotated[
    int,
    Field(ge=0, description="Logical time marker (block height or sequence number)")
]


# =============================================================================
# ID Conventions
# =============================================================================

HolderId = Annotated[
    str,
    Field(
        min_length=1,
        description="Identity supplied by the host (wallet address, account id, ...)"
    )
]

DistributionId = Annotated[
    int,
    Field(
        ge=1,
        description="Monotonically increasing distribution id, starting at 1"
    )
]
