"""Inventory reporting structures."""

from dataclasses import dataclass, field


@dataclass
class InventoryStats:
    """Counts by status and category. total equals the sum of status counts."""

    available: int = 0
    assigned: int = 0
    expired: int = 0
    deactivated: int = 0
    by_category: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.available + self.assigned + self.expired + self.deactivated


@dataclass
class DistributionAnalytics:
    """Distribution rates as fractions in [0, 1]."""

    inventory: InventoryStats
    distribution_rate: float
    availability_rate: float
    category_distribution: dict[str, int]


@dataclass
class CategoryStatistics:
    """Per-category inventory breakdown."""

    category: str
    total_accounts: int
    available_accounts: int
    assigned_accounts: int
    assignment_rate: float


@dataclass
class ServiceStatistics:
    """Per-service inventory breakdown."""

    service_name: str
    account_type: str
    category: str
    total_accounts: int
    assigned_accounts: int
    assignment_rate: float


@dataclass
class AssignmentTrend:
    """Assignments on one day with category breakdown."""

    date: str
    assignment_count: int
    category_breakdown: dict[str, int] = field(default_factory=dict)
