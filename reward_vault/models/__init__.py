"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from reward_vault.models.base import Base
from reward_vault.models.enums import AuditAction, RewardCategory, RewardStatus
from reward_vault.models.reward_account import RewardAccount
from reward_vault.models.reward_audit_log import RewardAuditLog
from reward_vault.models.submission import Submission


__all__ = [
    "AuditAction",
    "Base",
    "RewardAccount",
    "RewardAuditLog",
    "RewardCategory",
    "RewardStatus",
    "Submission",
]
