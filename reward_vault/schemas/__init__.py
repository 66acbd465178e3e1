"""
Schemas.

Boundary inputs (pydantic) and result structures (dataclasses).
"""

from reward_vault.schemas.inventory import (
    AssignmentTrend,
    CategoryStatistics,
    DistributionAnalytics,
    InventoryStats,
    ServiceStatistics,
)
from reward_vault.schemas.reward_account import (
    AssignableReward,
    AssignmentValidation,
    BulkCreateResult,
    BulkFailure,
    BulkOperationResult,
    BulkSummary,
    CreateRewardAccountInput,
    CredentialAccess,
    CredentialIntegrity,
    Page,
    Pagination,
    RewardAccountFilters,
    RewardAccountView,
    SortOptions,
    UpdateRewardAccountInput,
    to_assignable,
    to_view,
)


__all__ = [
    "AssignableReward",
    "AssignmentTrend",
    "AssignmentValidation",
    "BulkCreateResult",
    "BulkFailure",
    "BulkOperationResult",
    "BulkSummary",
    "CategoryStatistics",
    "CreateRewardAccountInput",
    "CredentialAccess",
    "CredentialIntegrity",
    "DistributionAnalytics",
    "InventoryStats",
    "Page",
    "Pagination",
    "RewardAccountFilters",
    "RewardAccountView",
    "ServiceStatistics",
    "SortOptions",
    "UpdateRewardAccountInput",
    "to_assignable",
    "to_view",
]
