"""Share ledger: holder identity → share balance, plus the issued total.

Authorization and the pause gate are enforced by the engine before these
methods are reached; the ledger itself only guards quantities.
"""

from typing import Dict, List, Optional

from ..arithmetic import require_whole_amount
from ..errors import (
    HolderLimitExceeded,
    InsufficientBalance,
    InvalidAmount,
    InvalidIdentity,
    LedgerInvariantError,
)


class ShareLedger:
    """Mapping of owner identity to share balance.

    Entries are never removed; a holder who transfers everything away keeps a
    zero entry. total_shares always equals the sum of all balances.

    Args:
        max_holders: Cap on holders with a positive balance, or None for no cap
    """

    def __init__(self, max_holders: Optional[int] = None):
        self.max_holders = max_holders
        self._balances: Dict[str, int] = {}
        self.total_shares = 0

    def balance_of(self, owner: str) -> int:
        """Share balance for `owner`, 0 for unknown identities."""
        return self._balances.get(owner, 0)

    def balances(self) -> Dict[str, int]:
        """Copy of every entry, zero balances included."""
        return dict(self._balances)

    def holders(self) -> List[str]:
        """Identities with a positive balance, in first-seen order."""
        return [owner for owner, shares in self._balances.items() if shares > 0]

    @property
    def holder_count(self) -> int:
        return sum(1 for shares in self._balances.values() if shares > 0)

    def check_issue(self, recipient: str, amount: int) -> None:
        """Raise if issue(recipient, amount) would be rejected."""
        _require_identity(recipient)
        require_whole_amount(amount, "Issue amount")
        if amount <= 0:
            raise InvalidAmount(f"Issue amount must be positive, got {amount}")
        self._check_new_holder(recipient)

    def issue(self, recipient: str, amount: int) -> None:
        """Add `amount` new shares to `recipient` and to the total.

        Raises:
            InvalidIdentity: If recipient is empty
            InvalidAmount: If amount is not a positive whole number
            HolderLimitExceeded: If a holder cap is set and recipient would exceed it
        """
        self.check_issue(recipient, amount)
        self._balances[recipient] = self.balance_of(recipient) + amount
        self.total_shares += amount

    def check_transfer(self, from_holder: str, to_holder: str, amount: int) -> None:
        """Raise if transfer(from_holder, to_holder, amount) would be rejected."""
        _require_identity(from_holder)
        _require_identity(to_holder)
        require_whole_amount(amount, "Transfer amount")
        if amount <= 0:
            raise InvalidAmount(f"Transfer amount must be positive, got {amount}")
        balance = self.balance_of(from_holder)
        if balance < amount:
            raise InsufficientBalance(from_holder, balance, amount)
        # A sender moving its whole balance drops out, so the holder count cannot grow
        if to_holder != from_holder and balance > amount:
            self._check_new_holder(to_holder)

    def transfer(self, from_holder: str, to_holder: str, amount: int) -> None:
        """Move `amount` shares between holders. total_shares is unchanged.

        Raises:
            InvalidIdentity: If either identity is empty
            InvalidAmount: If amount is not a positive whole number
            InsufficientBalance: If from_holder holds fewer than amount shares
            HolderLimitExceeded: If a holder cap is set and to_holder would exceed it
        """
        self.check_transfer(from_holder, to_holder, amount)
        self._balances[from_holder] = self.balance_of(from_holder) - amount
        self._balances[to_holder] = self.balance_of(to_holder) + amount

    def verify(self) -> None:
        """Check sum(balances) == total_shares.

        Raises:
            LedgerInvariantError: If the sum and the total disagree
        """
        balance_sum = sum(self._balances.values())
        if balance_sum != self.total_shares:
            raise LedgerInvariantError(
                f"Share balances sum to {balance_sum} but total_shares is {self.total_shares}"
            )

    def _check_new_holder(self, owner: str) -> None:
        if self.max_holders is None or self.balance_of(owner) > 0:
            return
        if self.holder_count >= self.max_holders:
            raise HolderLimitExceeded(self.max_holders)


def _require_identity(owner) -> None:
    if not isinstance(owner, str) or not owner:
        raise InvalidIdentity(owner)
