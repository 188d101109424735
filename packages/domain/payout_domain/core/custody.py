"""Asset custody boundary.

The engine never moves value itself. It calls an AssetCustody implementation
supplied by the host, which either completes a transfer or raises
AssetTransferFailed. A raised failure aborts the calling operation before any
ledger state is written.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Set

import structlog

from ..errors import AssetTransferFailed

logger = structlog.get_logger(__name__)


class AssetCustody(ABC):
    """Moves the underlying asset between external holders and the pool."""

    @abstractmethod
    def pull(self, source: str, amount: int) -> None:
        """Move `amount` from `source`'s external custody into the pool.

        Raises:
            AssetTransferFailed: If the transfer is rejected
        """
        pass

    @abstractmethod
    def push(self, destination: str, amount: int) -> None:
        """Move `amount` from the pool to `destination`.

        Raises:
            AssetTransferFailed: If the transfer is rejected
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class InMemoryCustody(AssetCustody):
    """Custody backed by plain dictionaries.

    Tracks external wallet balances and the pool balance. Useful for tests and
    simulations; `reject` lets a caller force failures for specific identities.

    Example:
        custody = InMemoryCustody(wallets={"admin": 5_000_000})
        custody.pull("admin", 2_000_000)
        custody.pool_balance  # 2_000_000
    """

    def __init__(self, wallets: Optional[Dict[str, int]] = None, reject: Optional[Set[str]] = None):
        self.wallets: Dict[str, int] = dict(wallets or {})
        self.reject: Set[str] = set(reject or ())
        self.pool_balance = 0

    def wallet_balance(self, owner: str) -> int:
        return self.wallets.get(owner, 0)

    def pull(self, source: str, amount: int) -> None:
        if source in self.reject:
            raise AssetTransferFailed(f"Transfer from '{source}' rejected")
        available = self.wallet_balance(source)
        if available < amount:
            raise AssetTransferFailed(
                f"'{source}' holds {available}, cannot deposit {amount}"
            )
        self.wallets[source] = available - amount
        self.pool_balance += amount
        logger.debug("custody_pull", source=source, amount=amount, pool_balance=self.pool_balance)

    def push(self, destination: str, amount: int) -> None:
        if destination in self.reject:
            raise AssetTransferFailed(f"Transfer to '{destination}' rejected")
        if self.pool_balance < amount:
            raise AssetTransferFailed(
                f"Pool holds {self.pool_balance}, cannot pay {amount}"
            )
        self.pool_balance -= amount
        self.wallets[destination] = self.wallet_balance(destination) + amount
        logger.debug("custody_push", destination=destination, amount=amount, pool_balance=self.pool_balance)

    def __repr__(self) -> str:
        return f"InMemoryCustody(pool_balance={self.pool_balance}, wallets={len(self.wallets)})"
