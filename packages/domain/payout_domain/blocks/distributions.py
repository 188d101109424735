"""Per-distribution payout progress block."""

from typing import List
import pandas as pd

from .base import ReportBlock, ReportContext
from ..schemas import DistributionStatus, LedgerSnapshot

DISTRIBUTION_COLUMNS = [
    "distribution_id",
    "status",
    "created_at",
    "creator",
    "total_amount",
    "per_share_rate",
    "shares_at_creation",
    "total_claimed",
    "claimed_pct",
    "unclaimed_amount",
    "rounding_dust",
]


class DistributionBlock(ReportBlock):
    """LedgerSnapshot → distribution_summary DataFrame, one row per distribution in id order.

    claimed_pct is total_claimed as a percentage of total_amount (0-100). It
    can stay below 100 forever because of rounding dust.
    """

    def __init__(self, snapshot_key: str = "ledger_snapshot"):
        self.snapshot_key = snapshot_key

    def inputs(self) -> List[str]:
        return [self.snapshot_key]

    def outputs(self) -> List[str]:
        return ["distribution_summary"]

    def execute(self, context: ReportContext) -> None:
        snapshot: LedgerSnapshot = context.get(self.snapshot_key)

        rows = []
        for distribution in snapshot.distributions:
            rows.append({
                "distribution_id": distribution.id,
                "status": DistributionStatus(distribution.status).value,
                "created_at": distribution.created_at,
                "creator": distribution.creator,
                "total_amount": distribution.total_amount,
                "per_share_rate": distribution.per_share_rate,
                "shares_at_creation": distribution.shares_at_creation,
                "total_claimed": distribution.total_claimed,
                "claimed_pct": (
                    distribution.total_claimed / distribution.total_amount * 100
                    if distribution.total_amount > 0
                    else 0.0
                ),
                "unclaimed_amount": distribution.unclaimed_amount,
                "rounding_dust": distribution.rounding_dust,
            })

        context.set("distribution_summary", pd.DataFrame(rows, columns=DISTRIBUTION_COLUMNS))
