"""Report configuration - entry point for Excel generation.

ReportCFG ties a LedgerSnapshot to display options. This is what gets passed
to the Excel renderer.
"""

from typing import Optional
from pydantic import Field, model_validator

from .base import DomainModel
from .snapshot import LedgerSnapshot


class ReportCFG(DomainModel):
    """Configuration for a payout report workbook.

    Example:
        ReportCFG(
            title="Q3 Dividend Report",
            snapshot=engine.snapshot(),
            include_holders=True,
        )
    """

    title: str = Field(
        default="Payout Ledger Report",
        description="Title shown at the top of the summary sheet"
    )

    snapshot: LedgerSnapshot = Field(
        description="Ledger aggregates to render"
    )

    asset_symbol: Optional[str] = Field(
        default=None,
        description="Label for the distributed asset (e.g., 'USDC'), shown in headers"
    )

    include_distributions: bool = Field(
        default=True,
        description="Render the Distributions sheet"
    )

    include_holders: bool = Field(
        default=True,
        description="Render the Holders sheet"
    )

    include_zero_balances: bool = Field(
        default=False,
        description="List holders with no shares and no claim history on the Holders sheet"
    )

    @model_validator(mode='after')
    def validate_title(self):
        """Title must have visible text."""
        if not self.title.strip():
            raise ValueError("title must not be blank")
        return self
