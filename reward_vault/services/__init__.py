"""
Services.

Business logic layer on top of the repositories.
"""

from reward_vault.services.audit_trail_service import AuditTrailService
from reward_vault.services.base_service import BaseService, log_operation, transaction
from reward_vault.services.expiry_policy import ExpiryPolicy
from reward_vault.services.inventory_service import InventoryService
from reward_vault.services.reward_distribution_service import (
    RewardDistributionService,
    create_distribution_service,
)

__all__ = [
    "AuditTrailService",
    "BaseService",
    "ExpiryPolicy",
    "InventoryService",
    "RewardDistributionService",
    "create_distribution_service",
    "log_operation",
    "transaction",
]
