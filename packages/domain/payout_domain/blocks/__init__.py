"""Report blocks for payout ledger analysis.

This package turns a read-only LedgerSnapshot into DataFrames suitable for
Excel rendering or other consumption.

Architecture:
    PayoutEngine.snapshot() → LedgerSnapshot → Blocks → DataFrames

Available blocks:
- LedgerSummaryBlock: one-row aggregate summary
- DistributionBlock: claim progress per distribution
- HolderBlock: ownership and cumulative payouts per holder

Usage:
    from payout_domain.blocks import ReportExecutor, ReportContext, default_blocks

    context = ReportContext()
    context.set("ledger_snapshot", engine.snapshot())
    ReportExecutor(default_blocks()).execute(context)

    holders_df = context.get("holder_payouts")
"""

from typing import List

from .base import ReportBlock, ReportExecutor, ReportContext, CircularDependencyError, topological_sort
from .summary import LedgerSummaryBlock
from .distributions import DistributionBlock
from .holders import HolderBlock


def default_blocks() -> List[ReportBlock]:
    """The full standard report: summary, distributions and holders."""
    return [LedgerSummaryBlock(), DistributionBlock(), HolderBlock()]


__all__ = [
    "ReportBlock",
    "ReportExecutor",
    "ReportContext",
    "CircularDependencyError",
    "topological_sort",
    "LedgerSummaryBlock",
    "DistributionBlock",
    "HolderBlock",
    "default_blocks",
]
