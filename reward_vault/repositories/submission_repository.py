"""
Submission repository.

Data access for the submission side of an assignment.
"""

from datetime import datetime

from sqlalchemy import and_, update
from sqlalchemy.ext.asyncio import AsyncSession

from reward_vault.models.submission import Submission
from reward_vault.repositories.base import BaseRepository


class SubmissionRepository(BaseRepository[Submission]):
    """Repository for submission reward links."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(Submission, session)

    async def attach_reward(
        self,
        submission_id: int,
        reward_account_id: int,
        assigned_by: int,
        assigned_at: datetime,
        notes: str | None = None,
    ) -> bool:
        """
        Link a reward account to a submission that has none yet.

        Conditional write on ``assigned_reward_account_id IS NULL`` so two
        concurrent assignments for one submission cannot both succeed.

        Returns:
            True if the submission existed and had no reward
        """
        stmt = (
            update(Submission)
            .where(
                and_(
                    Submission.id == submission_id,
                    Submission.assigned_reward_account_id.is_(None),
                )
            )
            .values(
                assigned_reward_account_id=reward_account_id,
                reward_assigned_at=assigned_at,
                reward_assigned_by=assigned_by,
                reward_notes=notes,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def detach_reward(self, reward_account_id: int) -> int:
        """
        Remove the link to a reward account from any submission.

        Returns:
            Number of submissions updated
        """
        stmt = (
            update(Submission)
            .where(Submission.assigned_reward_account_id == reward_account_id)
            .values(
                assigned_reward_account_id=None,
                reward_assigned_at=None,
                reward_assigned_by=None,
                reward_notes=None,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
