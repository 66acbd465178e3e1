"""
Audit trail service.

Appends audit entries inside the caller's transaction and retries the ones
that failed after the business transaction has committed.
"""

import asyncio
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reward_vault.config.constants import DEFAULT_AUDIT_HISTORY_LIMIT
from reward_vault.models.enums import AuditAction
from reward_vault.models.reward_audit_log import RewardAuditLog
from reward_vault.repositories.reward_audit_repository import RewardAuditRepository
from reward_vault.services.base_service import BaseService
from reward_vault.utils.datetime_utils import utc_now


class AuditTrailService(BaseService):
    """
    Append-only audit trail for reward accounts.

    record() writes inside a SAVEPOINT so a failed insert never rolls back
    the surrounding business mutation. Failed entries are queued and
    flush_pending() retries them with exponential backoff once the caller
    has committed. Audit completeness is best-effort; account state is not.
    """

    def __init__(
        self,
        session: AsyncSession,
        max_attempts: int = 3,
        retry_delay: float = 0.2,
    ) -> None:
        """
        Initialize audit trail service.

        Args:
            session: Database session shared with the calling service
            max_attempts: Post-commit retry attempts per failed entry
            retry_delay: Base delay in seconds between retries
        """
        super().__init__(session)
        self.audit_repo = RewardAuditRepository(session)
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self._pending: list[dict[str, Any]] = []

    @property
    def pending_count(self) -> int:
        """Entries waiting for a post-commit retry."""
        return len(self._pending)

    async def record(
        self,
        reward_account_id: int,
        action: AuditAction,
        performed_by: int | None,
        reason: str | None = None,
    ) -> RewardAuditLog | None:
        """
        Append an audit entry in the current transaction.

        Args:
            reward_account_id: Reward account the action targeted
            action: Audited action
            performed_by: Admin ID (None for system actions)
            reason: Free-text reason

        Returns:
            Flushed entry, or None if the write was deferred for retry
        """
        data = {
            "reward_account_id": reward_account_id,
            "action": action,
            "performed_by": performed_by,
            "performed_at": utc_now(),
            "reason": reason,
        }

        try:
            async with self.session.begin_nested():
                return await self.audit_repo.append(**data)
        except SQLAlchemyError as e:
            self.logger.warning(
                f"Audit write for reward account {reward_account_id} "
                f"({action.value}) deferred: {type(e).__name__}"
            )
            self._pending.append(data)
            return None

    def discard_pending(self) -> int:
        """
        Drop deferred entries whose business transaction rolled back.

        Returns:
            Number of entries dropped
        """
        dropped = len(self._pending)
        if dropped:
            self.logger.info(f"Discarded {dropped} deferred audit entries after rollback")
        self._pending.clear()
        return dropped

    async def flush_pending(self) -> int:
        """
        Retry deferred entries after the business transaction committed.

        Returns:
            Number of entries written
        """
        written = 0

        while self._pending:
            data = self._pending.pop(0)

            for attempt in range(1, self.max_attempts + 1):
                try:
                    await self.audit_repo.append(**data)
                    await self.session.commit()
                    written += 1
                    break
                except SQLAlchemyError as e:
                    await self.session.rollback()
                    if attempt == self.max_attempts:
                        self.logger.error(
                            f"Audit entry dropped after {attempt} attempts: "
                            f"account={data['reward_account_id']} "
                            f"action={data['action'].value} "
                            f"by={data['performed_by']} ({type(e).__name__})"
                        )
                    else:
                        await asyncio.sleep(self.retry_delay * 2 ** (attempt - 1))

        return written

    async def history(
        self,
        reward_account_id: int | None = None,
        action: AuditAction | None = None,
        performed_by: int | None = None,
        limit: int = DEFAULT_AUDIT_HISTORY_LIMIT,
    ) -> list[RewardAuditLog]:
        """Get audit entries, newest first."""
        return await self.audit_repo.get_history(
            reward_account_id=reward_account_id,
            action=action,
            performed_by=performed_by,
            limit=limit,
        )

    async def count(
        self,
        reward_account_id: int | None = None,
        action: AuditAction | None = None,
    ) -> int:
        """Count audit entries."""
        return await self.audit_repo.count_entries(
            reward_account_id=reward_account_id,
            action=action,
        )
