"""Per-holder ownership and payout block."""

from typing import List
import pandas as pd

from .base import ReportBlock, ReportContext
from ..schemas import LedgerSnapshot

HOLDER_COLUMNS = [
    "holder_id",
    "shares",
    "ownership_pct",
    "total_received",
    "participation_count",
    "last_claim_at",
]


class HolderBlock(ReportBlock):
    """LedgerSnapshot → holder_payouts DataFrame.

    Inputs (from context):
        - ledger_snapshot: LedgerSnapshot to read balances and histories from

    Outputs (to context):
        - holder_payouts: one row per holder with columns:
            * holder_id: Holder identity
            * shares: Current share balance
            * ownership_pct: Share of total_shares (0-100)
            * total_received: Cumulative amount claimed
            * participation_count: Number of distributions claimed
            * last_claim_at: Logical time of the latest claim (None if never)

    Holders appear if they have a ledger entry or a claim history. Rows are
    sorted by shares descending, then holder id. With include_zero_balances
    False, holders with no shares and no claims are left out.
    """

    def __init__(self, snapshot_key: str = "ledger_snapshot", include_zero_balances: bool = True):
        self.snapshot_key = snapshot_key
        self.include_zero_balances = include_zero_balances

    def inputs(self) -> List[str]:
        return [self.snapshot_key]

    def outputs(self) -> List[str]:
        return ["holder_payouts"]

    def execute(self, context: ReportContext) -> None:
        snapshot: LedgerSnapshot = context.get(self.snapshot_key)

        holder_ids = list(snapshot.balances)
        holder_ids += [h for h in snapshot.histories if h not in snapshot.balances]

        rows = []
        for holder_id in holder_ids:
            shares = snapshot.balances.get(holder_id, 0)
            history = snapshot.histories.get(holder_id)
            if shares == 0 and history is None and not self.include_zero_balances:
                continue
            rows.append({
                "holder_id": holder_id,
                "shares": shares,
                "ownership_pct": snapshot.ownership_fraction(holder_id) * 100,
                "total_received": history.total_received if history else 0,
                "participation_count": history.participation_count if history else 0,
                "last_claim_at": history.last_claim_at if history else None,
            })

        df = pd.DataFrame(rows, columns=HOLDER_COLUMNS)
        if not df.empty:
            df = df.sort_values(["shares", "holder_id"], ascending=[False, True]).reset_index(drop=True)

        context.set("holder_payouts", df)
