"""Ledger summary block.

One-row DataFrame of the public aggregates. Every figure is read straight off
the snapshot; nothing is estimated.
"""

from typing import List
import pandas as pd

from .base import ReportBlock, ReportContext
from ..schemas import LedgerSnapshot


class LedgerSummaryBlock(ReportBlock):
    """LedgerSnapshot → ledger_summary DataFrame.

    Inputs (from context):
        - ledger_snapshot: LedgerSnapshot to summarize

    Outputs (to context):
        - ledger_summary: single row with columns:
            * as_of: Logical time of the snapshot
            * total_shares: Shares outstanding
            * holders: Holders with a positive balance
            * distributions: Distributions created
            * active_distributions: Distributions still open for claims
            * total_distributed: Sum of all deposits
            * total_claimed: Sum of all claims paid
            * total_unclaimed: Deposits not yet paid out
            * rounding_dust: Remainders lost to floor division at creation
            * paused: Pause switch state
    """

    def __init__(self, snapshot_key: str = "ledger_snapshot"):
        self.snapshot_key = snapshot_key

    def inputs(self) -> List[str]:
        return [self.snapshot_key]

    def outputs(self) -> List[str]:
        return ["ledger_summary"]

    def execute(self, context: ReportContext) -> None:
        snapshot: LedgerSnapshot = context.get(self.snapshot_key)
        lifecycle = snapshot.lifecycle

        summary = pd.DataFrame([{
            "as_of": snapshot.as_of,
            "total_shares": snapshot.total_shares,
            "holders": snapshot.holder_count,
            "distributions": len(snapshot.distributions),
            "active_distributions": sum(1 for d in snapshot.distributions if d.is_active),
            "total_distributed": lifecycle.total_distributed,
            "total_claimed": lifecycle.total_claimed,
            "total_unclaimed": snapshot.total_unclaimed,
            "rounding_dust": snapshot.total_rounding_dust,
            "paused": lifecycle.paused,
        }])

        context.set("ledger_summary", summary)
