"""Payout engine: the public operation surface of the ledger.

The engine wires the share ledger, distribution registry, claim ledger and
holder history behind the access gate, and talks to the host through three
injected collaborators: asset custody, a logical clock and event subscribers.

Every operation validates first, performs the external asset movement second,
and only then writes ledger state. A failure at any step therefore leaves the
ledger exactly as it was.

Example:
    custody = InMemoryCustody(wallets={"admin": 10_000_000})
    engine = PayoutEngine(administrator="admin", custody=custody)

    engine.issue("admin", "holder_a", 1_000_000)
    dist_id = engine.create_distribution("admin", 2_000_000)
    engine.claim(dist_id, "holder_a")   # 2_000_000
"""

from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional

import structlog

from ..arithmetic import proportional_amount
from ..config import PayoutSettings, get_settings
from ..errors import (
    AssetTransferFailed,
    DistributionExhausted,
    DistributionNotFound,
    InvalidShares,
    LedgerInvariantError,
    NoDividends,
    PayoutError,
)
from ..schemas import (
    Claim,
    Distribution,
    DistributionClosed,
    DistributionCreated,
    DividendClaimed,
    LedgerEvent,
    LedgerSnapshot,
    LifecycleState,
    PauseToggled,
    SharesIssued,
    SharesTransferred,
    ShareholderHistory,
)
from .claims import ClaimLedger
from .clock import SequenceClock
from .custody import AssetCustody
from .distributions import DistributionRegistry
from .gate import AccessGate
from .history import HistoryBook
from .share_ledger import ShareLedger

logger = structlog.get_logger(__name__)

EventSubscriber = Callable[[LedgerEvent], None]


class PayoutEngine:
    """Share ledger plus distribution and claim state machine.

    Args:
        administrator: Identity allowed to issue shares, deposit, close and pause
        custody: Host asset-transfer primitive
        clock: Logical time source (default: SequenceClock starting at 1)
        settings: Ledger settings (default: cached PayoutSettings from the environment)
    """

    def __init__(
        self,
        administrator: str,
        custody: AssetCustody,
        clock: Optional[SequenceClock] = None,
        settings: Optional[PayoutSettings] = None,
    ):
        self.settings = settings or get_settings()
        self._custody = custody
        self._clock = clock or SequenceClock()

        self._lifecycle = LifecycleState()
        self._gate = AccessGate(administrator, self._lifecycle)
        self._ledger = ShareLedger(
            max_holders=self.settings.max_holders if self.settings.enforce_max_holders else None
        )
        self._distributions = DistributionRegistry(
            self._lifecycle,
            precision=self.settings.precision,
            min_amount=self.settings.min_dividend_amount,
        )
        self._claims = ClaimLedger()
        self._history = HistoryBook()

        self._events: List[LedgerEvent] = []
        self._subscribers: List[EventSubscriber] = []

    @property
    def administrator(self) -> str:
        return self._gate.administrator

    @property
    def total_shares(self) -> int:
        return self._ledger.total_shares

    # ------------------------------------------------------------------ #
    # Share ledger
    # ------------------------------------------------------------------ #

    def issue(self, caller: str, recipient: str, amount: int) -> None:
        """Issue new shares to `recipient`. Administrator only."""
        with self._rejections("issue", caller=caller, recipient=recipient, amount=amount):
            self._gate.require_administrator(caller, "issue shares")
            self._gate.require_open("issue shares")
            self._ledger.issue(recipient, amount)

        self._emit(
            SharesIssued,
            recipient=recipient,
            amount=amount,
            total_shares=self._ledger.total_shares,
        )

    def transfer(self, from_holder: str, to_holder: str, amount: int) -> None:
        """Move shares from the calling holder to another identity.

        `from_holder` is the authenticated caller supplied by the host.
        """
        with self._rejections("transfer", from_holder=from_holder, to_holder=to_holder, amount=amount):
            self._gate.require_open("transfer shares")
            self._ledger.transfer(from_holder, to_holder, amount)

        self._emit(SharesTransferred, from_holder=from_holder, to_holder=to_holder, amount=amount)

    def balance_of(self, owner: str) -> int:
        return self._ledger.balance_of(owner)

    # ------------------------------------------------------------------ #
    # Distributions
    # ------------------------------------------------------------------ #

    def create_distribution(self, caller: str, deposit_amount: int) -> int:
        """Deposit `deposit_amount` and fix its per-share rate. Administrator only.

        The rate uses total shares outstanding at this instant. The deposit is
        pulled into custody before the record is stored; if the pull fails no
        id is consumed.

        Returns:
            The new distribution id
        """
        with self._rejections("create_distribution", caller=caller, amount=deposit_amount):
            self._gate.require_administrator(caller, "create distribution")
            self._gate.require_open("create distribution")

            balance_snapshot = None
            if self.settings.entitlement_basis == "distribution_time":
                balance_snapshot = {
                    holder: self._ledger.balance_of(holder) for holder in self._ledger.holders()
                }

            distribution = self._distributions.prepare(
                deposit_amount,
                total_shares=self._ledger.total_shares,
                creator=caller,
                created_at=self._clock.now(),
                balance_snapshot=balance_snapshot,
            )
            self._move_asset(self._custody.pull, caller, deposit_amount)

        distribution_id = self._distributions.commit(distribution)
        self._emit(
            DistributionCreated,
            distribution_id=distribution_id,
            amount=deposit_amount,
            per_share_rate=distribution.per_share_rate,
            creator=caller,
        )
        return distribution_id

    def close_distribution(self, caller: str, distribution_id: int) -> None:
        """Mark an ACTIVE distribution COMPLETED. Administrator only.

        Unclaimed funds and dust stay in the pool.
        """
        with self._rejections("close_distribution", caller=caller, distribution_id=distribution_id):
            self._gate.require_administrator(caller, "close distribution")
            self._gate.require_open("close distribution")
            distribution = self._distributions.close(distribution_id, closed_at=self._clock.now())

        self._emit(
            DistributionClosed,
            distribution_id=distribution_id,
            unclaimed_amount=distribution.unclaimed_amount,
        )

    def get_distribution(self, distribution_id: int) -> Distribution:
        """Copy of a distribution record.

        Raises:
            DistributionNotFound: If the id is unknown
        """
        distribution = self._distributions.get(distribution_id)
        if distribution is None:
            raise DistributionNotFound(distribution_id)
        return distribution.model_copy(deep=True)

    def list_distributions(self) -> List[Distribution]:
        return [d.model_copy(deep=True) for d in self._distributions.list_distributions()]

    # ------------------------------------------------------------------ #
    # Claims
    # ------------------------------------------------------------------ #

    def claim(self, distribution_id: int, claimant: str) -> int:
        """Pay `claimant` their entitlement from one distribution, once.

        Returns:
            Amount paid

        Raises:
            Paused: If the gate is closed
            DistributionNotFound: If the id is unknown or closed
            AlreadyClaimed: If claimant was already paid from this distribution
            InvalidShares: If claimant holds no shares
            NoDividends: If the entitlement truncates to zero
            DistributionExhausted: If paying would exceed the deposit
            AssetTransferFailed: If custody rejects the payout
        """
        with self._rejections("claim", distribution_id=distribution_id, claimant=claimant):
            self._gate.require_open("claim")
            distribution = self._distributions.require_active(distribution_id)
            self._claims.ensure_unclaimed(distribution_id, claimant)

            shares = self._entitled_shares(distribution, claimant)
            if shares <= 0:
                raise InvalidShares(f"'{claimant}' holds no shares")

            amount = proportional_amount(shares, distribution.per_share_rate, distribution.precision)
            if amount == 0:
                raise NoDividends(
                    f"{shares} shares earn nothing at rate {distribution.per_share_rate}"
                )
            if amount > distribution.unclaimed_amount:
                raise DistributionExhausted(distribution_id, amount, distribution.unclaimed_amount)

            now = self._clock.now()
            record = Claim(
                distribution_id=distribution_id,
                claimant=claimant,
                amount_claimed=amount,
                shares_used=shares,
                claimed_at=now,
            )
            self._move_asset(self._custody.push, claimant, amount)

        self._claims.record(record)
        distribution.total_claimed += amount
        self._lifecycle.total_claimed += amount
        self._history.record_claim(claimant, amount, claimed_at=now)

        self._emit(DividendClaimed, distribution_id=distribution_id, claimant=claimant, amount=amount)
        return amount

    def entitlement(self, distribution_id: int, holder: str) -> int:
        """Amount a claim by `holder` would pay right now, or 0 if it would fail."""
        distribution = self._distributions.get(distribution_id)
        if distribution is None or not distribution.is_active:
            return 0
        if self._claims.has_claimed(distribution_id, holder):
            return 0
        amount = proportional_amount(
            self._entitled_shares(distribution, holder),
            distribution.per_share_rate,
            distribution.precision,
        )
        return amount if amount <= distribution.unclaimed_amount else 0

    def get_claim(self, distribution_id: int, claimant: str) -> Optional[Claim]:
        claim = self._claims.get(distribution_id, claimant)
        return claim.model_copy() if claim else None

    def get_history(self, holder: str) -> Optional[ShareholderHistory]:
        history = self._history.get(holder)
        return history.model_copy() if history else None

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def toggle_pause(self, caller: str) -> bool:
        """Flip the global pause switch. Administrator only.

        Returns:
            True if the ledger is now paused
        """
        with self._rejections("toggle_pause", caller=caller):
            paused = self._gate.toggle(caller)

        self._emit(PauseToggled, paused=paused, caller=caller)
        return paused

    def get_lifecycle_state(self) -> LifecycleState:
        return self._lifecycle.model_copy()

    # ------------------------------------------------------------------ #
    # Events
    # ------------------------------------------------------------------ #

    def subscribe(self, subscriber: EventSubscriber) -> None:
        """Register a callable invoked with every committed event."""
        self._subscribers.append(subscriber)

    @property
    def events(self) -> List[LedgerEvent]:
        return list(self._events)

    # ------------------------------------------------------------------ #
    # Reporting and invariants
    # ------------------------------------------------------------------ #

    def snapshot(self) -> LedgerSnapshot:
        """Detached copy of the public aggregates for reporting."""
        return LedgerSnapshot(
            as_of=self._clock.now(),
            total_shares=self._ledger.total_shares,
            balances=self._ledger.balances(),
            lifecycle=self._lifecycle.model_copy(),
            distributions=self.list_distributions(),
            histories={h: rec.model_copy() for h, rec in self._history.all().items()},
        )

    def verify_invariants(self) -> None:
        """Check every ledger invariant.

        Raises:
            LedgerInvariantError: On the first invariant that does not hold
        """
        self._ledger.verify()
        self._distributions.verify()
        self._claims.verify()

        for distribution in self._distributions.list_distributions():
            paid = self._claims.total_for_distribution(distribution.id)
            if paid != distribution.total_claimed:
                raise LedgerInvariantError(
                    f"Distribution {distribution.id} records {distribution.total_claimed} "
                    f"claimed but claim records sum to {paid}"
                )

        claimed = sum(d.total_claimed for d in self._distributions.list_distributions())
        if claimed != self._lifecycle.total_claimed:
            raise LedgerInvariantError(
                f"Lifecycle total_claimed {self._lifecycle.total_claimed} != {claimed}"
            )

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _entitled_shares(self, distribution: Distribution, holder: str) -> int:
        if self.settings.entitlement_basis == "distribution_time":
            return distribution.balance_snapshot.get(holder, 0)
        return self._ledger.balance_of(holder)

    @staticmethod
    def _move_asset(transfer: Callable[[str, int], None], identity: str, amount: int) -> None:
        try:
            transfer(identity, amount)
        except AssetTransferFailed:
            raise
        except Exception as exc:
            raise AssetTransferFailed(f"Asset transfer for '{identity}' failed: {exc}") from exc

    @contextmanager
    def _rejections(self, operation: str, **fields) -> Iterator[None]:
        try:
            yield
        except PayoutError as exc:
            logger.warning(
                "Operation rejected",
                operation=operation,
                error=type(exc).__name__,
                detail=str(exc),
                **fields,
            )
            raise

    def _emit(self, event_cls, **fields) -> LedgerEvent:
        event = event_cls(sequence=len(self._events) + 1, occurred_at=self._clock.now(), **fields)
        self._events.append(event)
        logger.info(event.event_type, **event.log_fields())

        for subscriber in self._subscribers:
            try:
                subscriber(event)
            except Exception as exc:
                logger.error(
                    "Event subscriber failed",
                    event_type=event.event_type,
                    subscriber=repr(subscriber),
                    error=str(exc),
                )
        return event
