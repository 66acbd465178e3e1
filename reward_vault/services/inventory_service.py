"""
Inventory Service.

Read-only reporting over the reward account inventory.
"""

from collections import defaultdict
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from reward_vault.config.constants import DEFAULT_TREND_WINDOW_DAYS
from reward_vault.models.enums import RewardCategory, RewardStatus
from reward_vault.repositories.reward_account_repository import RewardAccountRepository
from reward_vault.schemas.inventory import (
    AssignmentTrend,
    CategoryStatistics,
    DistributionAnalytics,
    InventoryStats,
    ServiceStatistics,
)
from reward_vault.services.base_service import BaseService
from reward_vault.utils.datetime_utils import utc_now


def _rate(part: int, total: int) -> float:
    """Fraction of total, 0 for an empty denominator."""
    return part / total if total else 0.0


class InventoryService(BaseService):
    """
    Inventory reporting service.

    Every report is computed from grouped queries, so counts are consistent
    within one report even while assignments run concurrently.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize inventory service.

        Args:
            session: Async database session
        """
        super().__init__(session)
        self.account_repo = RewardAccountRepository(session)

    async def get_inventory_stats(self) -> InventoryStats:
        """
        Get counts by status and by category.

        Returns:
            InventoryStats with every category present (zero if empty)
        """
        stats = InventoryStats(by_category={category.value: 0 for category in RewardCategory})

        for status, category, count in await self.account_repo.count_by_status_and_category():
            if status == RewardStatus.AVAILABLE:
                stats.available += count
            elif status == RewardStatus.ASSIGNED:
                stats.assigned += count
            elif status == RewardStatus.EXPIRED:
                stats.expired += count
            elif status == RewardStatus.DEACTIVATED:
                stats.deactivated += count
            stats.by_category[category.value] += count

        self.logger.debug(
            f"Inventory: total={stats.total} available={stats.available} "
            f"assigned={stats.assigned}"
        )
        return stats

    async def get_distribution_analytics(self) -> DistributionAnalytics:
        """
        Get distribution and availability rates.

        Returns:
            Rates as fractions of the total inventory
        """
        stats = await self.get_inventory_stats()
        return DistributionAnalytics(
            inventory=stats,
            distribution_rate=_rate(stats.assigned, stats.total),
            availability_rate=_rate(stats.available, stats.total),
            category_distribution=dict(stats.by_category),
        )

    async def get_category_statistics(
        self,
        category: RewardCategory | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> list[CategoryStatistics]:
        """
        Get per-category totals, sorted by total descending.

        Args:
            category: Restrict to one category
            date_from: Created at or after
            date_to: Created at or before
        """
        totals: dict[RewardCategory, dict[RewardStatus, int]] = defaultdict(lambda: defaultdict(int))
        rows = await self.account_repo.count_by_category_and_status(category, date_from, date_to)
        for row_category, status, count in rows:
            totals[row_category][status] += count

        result = []
        for row_category, by_status in totals.items():
            total = sum(by_status.values())
            assigned = by_status[RewardStatus.ASSIGNED]
            result.append(
                CategoryStatistics(
                    category=row_category.value,
                    total_accounts=total,
                    available_accounts=by_status[RewardStatus.AVAILABLE],
                    assigned_accounts=assigned,
                    assignment_rate=_rate(assigned, total),
                )
            )

        result.sort(key=lambda item: (-item.total_accounts, item.category))
        return result

    async def get_service_statistics(
        self,
        category: RewardCategory | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> list[ServiceStatistics]:
        """Get per service and account type totals, sorted by total descending."""
        groups: dict[tuple[str, str, RewardCategory], dict[RewardStatus, int]] = defaultdict(
            lambda: defaultdict(int)
        )
        rows = await self.account_repo.count_by_service(category, date_from, date_to)
        for service_name, account_type, row_category, status, count in rows:
            groups[(service_name, account_type, row_category)][status] += count

        result = []
        for (service_name, account_type, row_category), by_status in groups.items():
            total = sum(by_status.values())
            assigned = by_status[RewardStatus.ASSIGNED]
            result.append(
                ServiceStatistics(
                    service_name=service_name,
                    account_type=account_type,
                    category=row_category.value,
                    total_accounts=total,
                    assigned_accounts=assigned,
                    assignment_rate=_rate(assigned, total),
                )
            )

        result.sort(key=lambda item: (-item.total_accounts, item.service_name, item.account_type))
        return result

    async def get_assignment_trends(
        self,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> list[AssignmentTrend]:
        """
        Get daily assignment counts for currently assigned accounts.

        Args:
            date_from: Window start (defaults to 30 days before date_to)
            date_to: Window end (defaults to now)

        Returns:
            One entry per day with at least one assignment, oldest first
        """
        date_to = date_to or utc_now()
        date_from = date_from or date_to - timedelta(days=DEFAULT_TREND_WINDOW_DAYS)

        trends: dict[str, AssignmentTrend] = {}
        for day, category, count in await self.account_repo.count_assignments_by_day(date_from, date_to):
            trend = trends.setdefault(day, AssignmentTrend(date=day, assignment_count=0))
            trend.assignment_count += count
            trend.category_breakdown[category.value] = (
                trend.category_breakdown.get(category.value, 0) + count
            )

        return [trends[day] for day in sorted(trends)]
