"""
Submission model.

Minimal view of a winning submission: the engine only needs to know that
it exists, which reward category it selected and which reward account (if
any) it already received.
"""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reward_vault.models.base import Base
from reward_vault.models.enums import RewardCategory


class Submission(Base):
    """Winning submission eligible for a reward account."""

    __tablename__ = "submissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    selected_category: Mapped[RewardCategory | None] = mapped_column(
        Enum(RewardCategory, name="reward_category", native_enum=False, length=32),
        nullable=True,
    )

    assigned_reward_account_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("reward_accounts.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    )
    reward_assigned_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    reward_assigned_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reward_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Submission(id={self.id}, category={self.selected_category}, "
            f"reward={self.assigned_reward_account_id})>"
        )
