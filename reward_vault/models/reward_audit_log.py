"""
Reward audit log model.

Append-only record of credential access and assignment changes.
"""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Enum, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from reward_vault.models.base import Base
from reward_vault.models.enums import AuditAction


class RewardAuditLog(Base):
    """
    Audit entry for a reward account.

    Rows are never updated or deleted. reward_account_id is a plain
    reference so entries outlive hard-deleted accounts.
    """

    __tablename__ = "reward_audit_logs"
    __table_args__ = (
        Index("ix_reward_audit_logs_account_performed", "reward_account_id", "performed_at"),
        Index("ix_reward_audit_logs_action_performed", "action", "performed_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    reward_account_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    action: Mapped[AuditAction] = mapped_column(
        Enum(AuditAction, name="reward_audit_action", native_enum=False, length=32),
        nullable=False,
    )

    # None for system actions (expiry sweep)
    performed_by: Mapped[int | None] = mapped_column(Integer, nullable=True)

    performed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<RewardAuditLog(id={self.id}, account={self.reward_account_id}, "
            f"action={self.action}, by={self.performed_by})>"
        )
