"""Payout ledger configuration"""
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .arithmetic import PRECISION

MIN_DIVIDEND_AMOUNT = 1_000
MAX_HOLDERS = 10_000

# claim_time: entitlement uses the claimant's balance when they claim.
# distribution_time: entitlement uses the balance captured at distribution creation.
EntitlementBasis = Literal["claim_time", "distribution_time"]


class PayoutSettings(BaseSettings):
    """Ledger settings, overridable through PAYOUT_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="PAYOUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Arithmetic
    precision: int = Field(default=PRECISION, gt=0)
    min_dividend_amount: int = Field(default=MIN_DIVIDEND_AMOUNT, ge=1)

    # Holder policy
    max_holders: int = Field(default=MAX_HOLDERS, gt=0)
    enforce_max_holders: bool = False

    # Which share balance a claim is computed against
    entitlement_basis: EntitlementBasis = "claim_time"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False


@lru_cache()
def get_settings() -> PayoutSettings:
    """Get cached settings instance"""
    return PayoutSettings()
