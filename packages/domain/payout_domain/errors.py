"""Error taxonomy for the payout ledger.

Every failure surfaced by the core is a subclass of PayoutError so hosts can
catch the whole family in one place. Failed operations never leave partial
state behind: each error is raised before anything is written.
"""


class PayoutError(Exception):
    """Base class for all payout ledger errors."""
    pass


class Unauthorized(PayoutError):
    """Caller is not the administrator for an administrator-only operation."""

    def __init__(self, caller: str, operation: str):
        self.caller = caller
        self.operation = operation
        super().__init__(f"'{caller}' is not authorized to {operation}")


class Paused(PayoutError):
    """The lifecycle gate is closed; mutating operations are rejected."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Ledger is paused, cannot {operation}")


class InvalidAmount(PayoutError):
    """Zero, negative or otherwise nonsensical quantity."""
    pass


class InvalidIdentity(PayoutError):
    """Holder identity is empty or not a string."""

    def __init__(self, identity: object):
        self.identity = identity
        super().__init__(f"Invalid holder identity {identity!r}")


class InsufficientBalance(PayoutError):
    """Transfer exceeds the holder's share balance."""

    def __init__(self, holder: str, balance: int, requested: int):
        self.holder = holder
        self.balance = balance
        self.requested = requested
        super().__init__(
            f"Insufficient shares: '{holder}' holds {balance}, tried to move {requested}"
        )


class InvalidShares(PayoutError):
    """Operation requires a positive share count or total and it is zero."""
    pass


class NoDividends(PayoutError):
    """Computed entitlement is zero (or nothing is left to pay)."""
    pass


class DistributionExhausted(NoDividends):
    """Paying the claim would push a distribution's total_claimed past its deposit.

    Only reachable when entitlements are computed from claim-time balances and
    shares were issued after the distribution was created.
    """

    def __init__(self, distribution_id: int, requested: int, remaining: int):
        self.distribution_id = distribution_id
        self.requested = requested
        self.remaining = remaining
        super().__init__(
            f"Distribution {distribution_id} has {remaining} left, claim needs {requested}"
        )


class AlreadyClaimed(PayoutError):
    """A claim record already exists for this (distribution, claimant) pair."""

    def __init__(self, distribution_id: int, claimant: str):
        self.distribution_id = distribution_id
        self.claimant = claimant
        super().__init__(
            f"'{claimant}' already claimed distribution {distribution_id}"
        )


class DistributionNotFound(PayoutError):
    """Unknown distribution id, or the distribution is no longer ACTIVE."""

    def __init__(self, distribution_id: int, reason: str = "not found"):
        self.distribution_id = distribution_id
        super().__init__(f"Distribution {distribution_id} {reason}")


class AssetTransferFailed(PayoutError):
    """The underlying value-movement primitive rejected the transfer."""
    pass


class HolderLimitExceeded(PayoutError):
    """Adding a new holder would exceed the configured holder cap."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Holder limit of {limit} reached")


class LedgerInvariantError(PayoutError):
    """A ledger invariant does not hold. Indicates a bug, never user input."""
    pass


class DivisionByZero(ZeroDivisionError):
    """Raised by rate_for_total when there are no units to divide across."""
    pass
