"""
RewardAccount repository.

Data access layer for RewardAccount model.

Every status change is a single conditional UPDATE whose WHERE clause
carries the allowed source states. A zero rowcount means the precondition
no longer holds; callers never read-then-write a status.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from reward_vault.models.enums import RewardCategory, RewardStatus
from reward_vault.models.reward_account import RewardAccount
from reward_vault.repositories.base import BaseRepository
from reward_vault.schemas.reward_account import Pagination, RewardAccountFilters, SortOptions


class RewardAccountRepository(BaseRepository[RewardAccount]):
    """Repository for reward account operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(RewardAccount, session)

    async def get_status(self, account_id: int) -> RewardStatus | None:
        """
        Read the committed-or-own status of an account.

        Args:
            account_id: Reward account ID

        Returns:
            Current status or None if the account does not exist
        """
        stmt = select(RewardAccount.status).where(RewardAccount.id == account_id)
        result = await self.session.execute(stmt)
        status = result.scalar_one_or_none()
        return RewardStatus(status) if status is not None else None

    async def transition_status(
        self,
        account_id: int,
        from_statuses: Iterable[RewardStatus],
        to_status: RewardStatus,
        now: datetime,
        **values: Any,
    ) -> bool:
        """
        Compare-and-swap status change.

        Args:
            account_id: Reward account ID
            from_statuses: Statuses the row must currently have
            to_status: Target status
            now: Mutation timestamp
            **values: Extra columns written in the same statement

        Returns:
            True if exactly this call moved the row
        """
        stmt = (
            update(RewardAccount)
            .where(
                and_(
                    RewardAccount.id == account_id,
                    RewardAccount.status.in_(list(from_statuses)),
                )
            )
            .values(status=to_status, updated_at=now, **values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def claim(self, account_id: int, submission_id: int, assigned_at: datetime) -> bool:
        """
        Atomically bind an AVAILABLE account to a submission.

        Args:
            account_id: Reward account ID
            submission_id: Winning submission ID
            assigned_at: Assignment timestamp

        Returns:
            True if the account was AVAILABLE and is now ASSIGNED
        """
        return await self.transition_status(
            account_id,
            (RewardStatus.AVAILABLE,),
            RewardStatus.ASSIGNED,
            assigned_at,
            assigned_to_submission_id=submission_id,
            assigned_at=assigned_at,
        )

    async def release(self, account_id: int, now: datetime) -> bool:
        """
        Atomically return an ASSIGNED account to AVAILABLE.

        Clears the submission link and assignment time in the same write.
        """
        return await self.transition_status(
            account_id,
            (RewardStatus.ASSIGNED,),
            RewardStatus.AVAILABLE,
            now,
            assigned_to_submission_id=None,
            assigned_at=None,
        )

    async def update_fields(self, account_id: int, now: datetime, **values: Any) -> bool:
        """
        Update descriptor columns or credentials.

        Args:
            account_id: Reward account ID
            now: Mutation timestamp
            **values: Columns to write

        Returns:
            True if the account exists
        """
        stmt = (
            update(RewardAccount)
            .where(RewardAccount.id == account_id)
            .values(updated_at=now, **values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def delete_unless_assigned(self, account_id: int) -> bool:
        """
        Hard delete an account that is not ASSIGNED.

        Returns:
            True if deleted, False if missing or currently assigned
        """
        stmt = (
            delete(RewardAccount)
            .where(
                and_(
                    RewardAccount.id == account_id,
                    RewardAccount.status != RewardStatus.ASSIGNED,
                )
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def find_with_filters(
        self,
        filters: RewardAccountFilters,
        pagination: Pagination,
        sorting: SortOptions,
    ) -> tuple[list[RewardAccount], int]:
        """
        Find reward accounts with filtering, sorting, and pagination.

        Args:
            filters: Search and column filters
            pagination: Page request
            sorting: Sort field and direction

        Returns:
            Tuple of (items, total_count)
        """
        conditions = []

        if filters.search:
            # Search text is a literal substring, not a LIKE pattern
            escaped = (
                filters.search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            )
            pattern = f"%{escaped}%"
            conditions.append(
                or_(
                    RewardAccount.service_name.ilike(pattern, escape="\\"),
                    RewardAccount.account_type.ilike(pattern, escape="\\"),
                    RewardAccount.description.ilike(pattern, escape="\\"),
                )
            )
        if filters.category is not None:
            conditions.append(RewardAccount.category == filters.category)
        if filters.status is not None:
            conditions.append(RewardAccount.status == filters.status)
        if filters.assigned_to_submission_id is not None:
            conditions.append(
                RewardAccount.assigned_to_submission_id == filters.assigned_to_submission_id
            )
        if filters.created_by is not None:
            conditions.append(RewardAccount.created_by == filters.created_by)

        where = and_(*conditions) if conditions else True

        count_stmt = select(func.count(RewardAccount.id)).where(where)
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar() or 0

        sort_column = getattr(RewardAccount, sorting.sort_by)
        order = sort_column.asc() if sorting.sort_order == "asc" else sort_column.desc()

        stmt = (
            self._select()
            .where(where)
            .order_by(order, RewardAccount.id.asc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def find_available(self, category: RewardCategory | None = None) -> list[RewardAccount]:
        """
        Get AVAILABLE accounts, oldest first (FIFO for fairness).

        Args:
            category: Optional category filter

        Returns:
            List of available accounts
        """
        conditions = [RewardAccount.status == RewardStatus.AVAILABLE]
        if category is not None:
            conditions.append(RewardAccount.category == category)

        stmt = (
            self._select()
            .where(and_(*conditions))
            .order_by(RewardAccount.created_at.asc(), RewardAccount.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_assigned_to_submission(self, submission_id: int) -> list[RewardAccount]:
        """Get accounts currently assigned to a submission."""
        stmt = (
            self._select()
            .where(
                and_(
                    RewardAccount.assigned_to_submission_id == submission_id,
                    RewardAccount.status == RewardStatus.ASSIGNED,
                )
            )
            .order_by(RewardAccount.assigned_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_by_creator(self, created_by: int) -> list[RewardAccount]:
        """Get accounts created by an admin, newest first."""
        stmt = (
            self._select()
            .where(RewardAccount.created_by == created_by)
            .order_by(RewardAccount.created_at.desc(), RewardAccount.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_by_ids(self, account_ids: Iterable[int]) -> list[RewardAccount]:
        """Get accounts by ID list."""
        ids = list(account_ids)
        if not ids:
            return []
        stmt = self._select().where(RewardAccount.id.in_(ids)).order_by(RewardAccount.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_expiry_candidates(self, cutoff: datetime) -> list[int]:
        """
        Get IDs of AVAILABLE accounts created before cutoff.

        The sweep still expires each one with its own conditional write,
        so accounts claimed after this scan are skipped.
        """
        stmt = (
            select(RewardAccount.id)
            .where(
                and_(
                    RewardAccount.status == RewardStatus.AVAILABLE,
                    RewardAccount.created_at < cutoff,
                )
            )
            .order_by(RewardAccount.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_status_and_category(self) -> list[tuple[RewardStatus, RewardCategory, int]]:
        """
        Count accounts grouped by (status, category) in one query.

        Returns:
            List of (status, category, count)
        """
        stmt = (
            select(
                RewardAccount.status,
                RewardAccount.category,
                func.count(RewardAccount.id),
            )
            .group_by(RewardAccount.status, RewardAccount.category)
        )
        result = await self.session.execute(stmt)
        return [
            (RewardStatus(status), RewardCategory(category), count)
            for status, category, count in result.all()
        ]

    def _date_conditions(
        self,
        category: RewardCategory | None,
        date_from: datetime | None,
        date_to: datetime | None,
    ) -> list:
        conditions = []
        if category is not None:
            conditions.append(RewardAccount.category == category)
        if date_from is not None:
            conditions.append(RewardAccount.created_at >= date_from)
        if date_to is not None:
            conditions.append(RewardAccount.created_at <= date_to)
        return conditions

    async def count_by_category_and_status(
        self,
        category: RewardCategory | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> list[tuple[RewardCategory, RewardStatus, int]]:
        """Count accounts grouped by (category, status), filtered by creation date."""
        conditions = self._date_conditions(category, date_from, date_to)
        stmt = (
            select(
                RewardAccount.category,
                RewardAccount.status,
                func.count(RewardAccount.id),
            )
            .where(and_(*conditions) if conditions else True)
            .group_by(RewardAccount.category, RewardAccount.status)
        )
        result = await self.session.execute(stmt)
        return [
            (RewardCategory(category), RewardStatus(status), count)
            for category, status, count in result.all()
        ]

    async def count_by_service(
        self,
        category: RewardCategory | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> list[tuple[str, str, RewardCategory, RewardStatus, int]]:
        """Count accounts grouped by service, account type, category and status."""
        conditions = self._date_conditions(category, date_from, date_to)
        stmt = (
            select(
                RewardAccount.service_name,
                RewardAccount.account_type,
                RewardAccount.category,
                RewardAccount.status,
                func.count(RewardAccount.id),
            )
            .where(and_(*conditions) if conditions else True)
            .group_by(
                RewardAccount.service_name,
                RewardAccount.account_type,
                RewardAccount.category,
                RewardAccount.status,
            )
        )
        result = await self.session.execute(stmt)
        return [
            (service, account_type, RewardCategory(category), RewardStatus(status), count)
            for service, account_type, category, status, count in result.all()
        ]

    async def count_assignments_by_day(
        self,
        date_from: datetime,
        date_to: datetime,
    ) -> list[tuple[str, RewardCategory, int]]:
        """
        Count current assignments per day and category.

        Returns:
            List of (YYYY-MM-DD, category, count) ordered by day
        """
        day = func.date(RewardAccount.assigned_at)
        stmt = (
            select(day, RewardAccount.category, func.count(RewardAccount.id))
            .where(
                and_(
                    RewardAccount.status == RewardStatus.ASSIGNED,
                    RewardAccount.assigned_at >= date_from,
                    RewardAccount.assigned_at <= date_to,
                )
            )
            .group_by(day, RewardAccount.category)
            .order_by(day)
        )
        result = await self.session.execute(stmt)
        return [
            (str(assigned_day)[:10], RewardCategory(category), count)
            for assigned_day, category, count in result.all()
        ]
