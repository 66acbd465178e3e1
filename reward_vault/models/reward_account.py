"""
RewardAccount model.

Stores third-party account credentials held in inventory for winners.
"""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Enum, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reward_vault.models.base import Base
from reward_vault.models.enums import RewardCategory, RewardStatus


class RewardAccount(Base):
    """
    RewardAccount entity.

    Invariants:
    - assigned_to_submission_id is set iff status is ASSIGNED
    - assigned_at is set iff assigned_to_submission_id is set

    Attributes:
        id: Primary key
        service_name: Provider name (e.g. "Netflix")
        account_type: Plan or tier (e.g. "Premium")
        category: Reward category
        encrypted_credentials: AES-GCM blob, never plaintext
        subscription_duration: Optional duration text
        description: Optional description
        status: Lifecycle status
        assigned_to_submission_id: Winning submission (ASSIGNED only)
        assigned_at: When the account was assigned
        created_by: Admin who created the record
        created_at: Creation timestamp
        updated_at: Last mutation timestamp
    """

    __tablename__ = "reward_accounts"
    __table_args__ = (
        Index("ix_reward_accounts_status_category", "status", "category"),
        Index("ix_reward_accounts_status_created", "status", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    service_name: Mapped[str] = mapped_column(String(255), nullable=False)
    account_type: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[RewardCategory] = mapped_column(
        Enum(RewardCategory, name="reward_category", native_enum=False, length=32),
        nullable=False,
        index=True,
    )

    encrypted_credentials: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="base64(IV || TAG || CIPHERTEXT), AES-256-GCM",
    )

    subscription_duration: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[RewardStatus] = mapped_column(
        Enum(RewardStatus, name="reward_status", native_enum=False, length=32),
        nullable=False,
        default=RewardStatus.AVAILABLE,
        index=True,
    )

    # One reward per submission
    assigned_to_submission_id: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        unique=True,
    )
    assigned_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    created_by: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation without credentials."""
        return (
            f"<RewardAccount(id={self.id}, service={self.service_name!r}, "
            f"status={self.status}, submission={self.assigned_to_submission_id})>"
        )
