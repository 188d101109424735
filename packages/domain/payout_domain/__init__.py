"""Payout Ledger Domain Engine - proportional dividend accounting.

This package provides the core of the payout ledger:
- Share ledger with issuance and transfers
- Dividend distributions converted into fixed-point per-share rates
- One-time claims with per-holder payout history
- Administrator gate and global pause switch
- Read-only report blocks over ledger snapshots

The domain layer is designed to be:
- Host-agnostic (identity, asset movement and time are injected)
- Deterministic (integer fixed-point math, floor division everywhere)
- Testable (pure Python with Pydantic validation)
"""

from .schemas import *  # noqa: F403, F401
from .errors import (  # noqa: F401
    PayoutError,
    Unauthorized,
    Paused,
    InvalidAmount,
    InvalidIdentity,
    InsufficientBalance,
    InvalidShares,
    NoDividends,
    DistributionExhausted,
    AlreadyClaimed,
    DistributionNotFound,
    AssetTransferFailed,
    HolderLimitExceeded,
    LedgerInvariantError,
    DivisionByZero,
)
from .arithmetic import PRECISION, proportional_amount, rate_for_total  # noqa: F401
from .config import PayoutSettings, get_settings, MIN_DIVIDEND_AMOUNT, MAX_HOLDERS  # noqa: F401
from .core import PayoutEngine, InMemoryCustody, AssetCustody, SequenceClock  # noqa: F401
from .log import configure_logging  # noqa: F401

__version__ = "0.1.0"
