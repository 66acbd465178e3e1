"""
Reward audit repository.

Data access layer for the append-only reward audit trail.
Inserts and reads only.
"""

from datetime import datetime

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from reward_vault.models.enums import AuditAction
from reward_vault.models.reward_audit_log import RewardAuditLog
from reward_vault.repositories.base import BaseRepository


class RewardAuditRepository(BaseRepository[RewardAuditLog]):
    """Repository for reward audit log entries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(RewardAuditLog, session)

    async def append(
        self,
        reward_account_id: int,
        action: AuditAction,
        performed_by: int | None,
        performed_at: datetime,
        reason: str | None = None,
    ) -> RewardAuditLog:
        """
        Append an audit entry.

        Args:
            reward_account_id: Reward account the action targeted
            action: Audited action
            performed_by: Admin ID (None for system actions)
            performed_at: Action timestamp
            reason: Free-text reason

        Returns:
            Flushed RewardAuditLog with ID
        """
        entry = RewardAuditLog(
            reward_account_id=reward_account_id,
            action=action,
            performed_by=performed_by,
            performed_at=performed_at,
            reason=reason,
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def get_history(
        self,
        reward_account_id: int | None = None,
        action: AuditAction | None = None,
        performed_by: int | None = None,
        since: datetime | None = None,
        limit: int = 100,
    ) -> list[RewardAuditLog]:
        """
        Get audit entries with filters, newest first.

        Args:
            reward_account_id: Filter by reward account
            action: Filter by action
            performed_by: Filter by admin
            since: Filter by date (after)
            limit: Max results

        Returns:
            List of audit entries
        """
        conditions = []

        if reward_account_id is not None:
            conditions.append(RewardAuditLog.reward_account_id == reward_account_id)
        if action is not None:
            conditions.append(RewardAuditLog.action == action)
        if performed_by is not None:
            conditions.append(RewardAuditLog.performed_by == performed_by)
        if since is not None:
            conditions.append(RewardAuditLog.performed_at >= since)

        query = (
            select(RewardAuditLog)
            .where(and_(*conditions) if conditions else True)
            .order_by(RewardAuditLog.performed_at.desc(), RewardAuditLog.id.desc())
            .limit(limit)
        )

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_entries(
        self,
        reward_account_id: int | None = None,
        action: AuditAction | None = None,
    ) -> int:
        """Count audit entries by account and/or action."""
        filters = {}
        if reward_account_id is not None:
            filters["reward_account_id"] = reward_account_id
        if action is not None:
            filters["action"] = action
        return await self.count(**filters)
