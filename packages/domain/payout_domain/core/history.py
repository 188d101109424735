"""Per-holder cumulative claim statistics."""

from typing import Dict, Optional

from ..schemas import ShareholderHistory


class HistoryBook:
    """ShareholderHistory records keyed by holder, created on first claim."""

    def __init__(self):
        self._histories: Dict[str, ShareholderHistory] = {}

    def get(self, holder: str) -> Optional[ShareholderHistory]:
        return self._histories.get(holder)

    def all(self) -> Dict[str, ShareholderHistory]:
        return dict(self._histories)

    def record_claim(self, holder: str, amount: int, claimed_at: int) -> ShareholderHistory:
        history = self._histories.get(holder)
        if history is None:
            history = ShareholderHistory(holder=holder, first_claim_at=claimed_at)
            self._histories[holder] = history

        history.total_received += amount
        history.participation_count += 1
        history.last_claim_at = claimed_at
        return history
