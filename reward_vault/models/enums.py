"""
Enumerations shared by models, repositories and services.
"""

from enum import Enum


class RewardCategory(str, Enum):
    """Category of a reward account."""

    STREAMING_SERVICE = "STREAMING_SERVICE"
    GIFT_CARD = "GIFT_CARD"
    SUBSCRIPTION = "SUBSCRIPTION"
    DIGITAL_PRODUCT = "DIGITAL_PRODUCT"
    OTHER = "OTHER"


class RewardStatus(str, Enum):
    """
    Lifecycle status of a reward account.

    AVAILABLE -> ASSIGNED (assign), ASSIGNED -> AVAILABLE (unassign),
    AVAILABLE/EXPIRED/DEACTIVATED -> DEACTIVATED (deactivate),
    DEACTIVATED/EXPIRED -> AVAILABLE (reactivate),
    AVAILABLE -> EXPIRED (expiry sweep).
    """

    AVAILABLE = "AVAILABLE"
    ASSIGNED = "ASSIGNED"
    EXPIRED = "EXPIRED"
    DEACTIVATED = "DEACTIVATED"


class AuditAction(str, Enum):
    """Action recorded in the reward audit trail."""

    CREATED = "CREATED"
    ACCESSED = "ACCESSED"
    ASSIGNED = "ASSIGNED"
    UNASSIGNED = "UNASSIGNED"
    ROTATED = "ROTATED"
    DELETED = "DELETED"
