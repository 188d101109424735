"""Stateful ledger components and the engine facade.

Components, leaf-first:
- ShareLedger: holder balances and total shares
- DistributionRegistry: append-only dividend deposits with fixed per-share rates
- ClaimLedger: one claim per (distribution, holder)
- HistoryBook: cumulative per-holder claim statistics
- AccessGate: administrator check and global pause switch
- PayoutEngine: wires the above behind the public operation surface

Host collaborators:
- AssetCustody / InMemoryCustody: moves the underlying asset
- SequenceClock: logical time
"""

from .share_ledger import ShareLedger
from .distributions import DistributionRegistry
from .claims import ClaimLedger
from .history import HistoryBook
from .gate import AccessGate
from .custody import AssetCustody, InMemoryCustody
from .clock import SequenceClock
from .engine import PayoutEngine, EventSubscriber

__all__ = [
    "ShareLedger",
    "DistributionRegistry",
    "ClaimLedger",
    "HistoryBook",
    "AccessGate",
    "AssetCustody",
    "InMemoryCustody",
    "SequenceClock",
    "PayoutEngine",
    "EventSubscriber",
]
