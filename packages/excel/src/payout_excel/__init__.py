"""Excel rendering for payout ledger reports."""

from .report_renderer import PayoutReportRenderer

__all__ = ["PayoutReportRenderer"]
