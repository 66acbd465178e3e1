"""
Expiry policy for reward accounts.

An AVAILABLE account expires once it has sat in inventory, unassigned,
for longer than ``max_age`` since creation.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from reward_vault.config.constants import DEFAULT_REWARD_EXPIRY_DAYS
from reward_vault.models.enums import RewardStatus
from reward_vault.models.reward_account import RewardAccount
from reward_vault.utils.datetime_utils import ensure_utc


@dataclass(frozen=True)
class ExpiryPolicy:
    """Age-based expiry criterion."""

    max_age: timedelta = timedelta(days=DEFAULT_REWARD_EXPIRY_DAYS)

    @classmethod
    def from_days(cls, days: int) -> "ExpiryPolicy":
        if days <= 0:
            raise ValueError("Expiry age must be positive")
        return cls(max_age=timedelta(days=days))

    def cutoff(self, now: datetime) -> datetime:
        """Accounts created strictly before this instant are past expiry."""
        return ensure_utc(now) - self.max_age

    def is_expired(self, account: RewardAccount, now: datetime) -> bool:
        """Check whether a single account meets the expiry criterion."""
        if account.status != RewardStatus.AVAILABLE:
            return False
        return ensure_utc(account.created_at) < self.cutoff(now)
