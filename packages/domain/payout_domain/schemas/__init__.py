"""Payout ledger schemas.

This package contains all Pydantic models for the payout ledger:
- Base types and conventions
- Distributions, claims and holder history
- Lifecycle counters
- Ledger events
- Reporting snapshot and report configuration

Usage:
    from payout_domain.schemas import (
        Distribution, DistributionStatus, Claim, ShareholderHistory,
        LifecycleState, LedgerSnapshot, DividendClaimed
    )
"""

# Base types
from .base import (
    DomainModel,
    ShareCount,
    Amount,
    FixedPointRate,
    LogicalTime,
    HolderId,
    DistributionId,
)

# Records
from .distribution import Distribution, DistributionStatus
from .claims import Claim, ShareholderHistory
from .lifecycle import LifecycleState

# Events
from .events import (
    LedgerEvent,
    AnyLedgerEvent,
    SharesIssued,
    SharesTransferred,
    DistributionCreated,
    DividendClaimed,
    DistributionClosed,
    PauseToggled,
)

# Reporting
from .snapshot import LedgerSnapshot
from .report import ReportCFG

__all__ = [
    # Base types
    "DomainModel",
    "ShareCount",
    "Amount",
    "FixedPointRate",
    "LogicalTime",
    "HolderId",
    "DistributionId",
    # Records
    "Distribution",
    "DistributionStatus",
    "Claim",
    "ShareholderHistory",
    "LifecycleState",
    # Events
    "LedgerEvent",
    "AnyLedgerEvent",
    "SharesIssued",
    "SharesTransferred",
    "DistributionCreated",
    "DividendClaimed",
    "DistributionClosed",
    "PauseToggled",
    # Reporting
    "LedgerSnapshot",
    "ReportCFG",
]
