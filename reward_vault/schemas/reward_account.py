"""
Reward account request and response structures.

Inputs are pydantic models validated at the boundary. Results are plain
dataclasses; ``to_view`` is the single conversion point from ORM rows and
never copies encrypted credentials.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from reward_vault.config.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_FIELD,
    MAX_ACCOUNT_TYPE_LENGTH,
    MAX_CREDENTIALS_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_PAGE_SIZE,
    MAX_SERVICE_NAME_LENGTH,
    MAX_SUBSCRIPTION_DURATION_LENGTH,
    SORTABLE_FIELDS,
)
from reward_vault.models.enums import RewardCategory, RewardStatus
from reward_vault.models.reward_account import RewardAccount


T = TypeVar("T")


# ========================================================================
# INPUTS
# ========================================================================


class CreateRewardAccountInput(BaseModel):
    """Data for a new reward account. Credentials are plaintext here only."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    service_name: str = Field(min_length=1, max_length=MAX_SERVICE_NAME_LENGTH)
    account_type: str = Field(min_length=1, max_length=MAX_ACCOUNT_TYPE_LENGTH)
    category: RewardCategory
    credentials: str = Field(min_length=1, max_length=MAX_CREDENTIALS_LENGTH, repr=False)
    created_by: int = Field(gt=0)
    subscription_duration: str | None = Field(default=None, max_length=MAX_SUBSCRIPTION_DURATION_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)


class UpdateRewardAccountInput(BaseModel):
    """Descriptor changes. Status moves only through lifecycle operations."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    service_name: str | None = Field(default=None, min_length=1, max_length=MAX_SERVICE_NAME_LENGTH)
    account_type: str | None = Field(default=None, min_length=1, max_length=MAX_ACCOUNT_TYPE_LENGTH)
    category: RewardCategory | None = None
    subscription_duration: str | None = Field(default=None, max_length=MAX_SUBSCRIPTION_DURATION_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)

    def changes(self) -> dict[str, Any]:
        """Fields explicitly provided by the caller."""
        return self.model_dump(exclude_unset=True)


class RewardAccountFilters(BaseModel):
    """Filters accepted by the account listing."""

    search: str | None = None
    category: RewardCategory | None = None
    status: RewardStatus | None = None
    assigned_to_submission_id: int | None = None
    created_by: int | None = None


class Pagination(BaseModel):
    """Page request (1-indexed)."""

    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        """Rows to skip."""
        return (self.page - 1) * self.limit


class SortOptions(BaseModel):
    """Sort request. Unknown fields fall back to created_at."""

    sort_by: str = DEFAULT_SORT_FIELD
    sort_order: Literal["asc", "desc"] = "desc"

    @field_validator("sort_by")
    @classmethod
    def fallback_sort_field(cls, v: str) -> str:
        """Restrict sorting to indexed, non-secret columns."""
        return v if v in SORTABLE_FIELDS else DEFAULT_SORT_FIELD


# ========================================================================
# RESULTS
# ========================================================================


@dataclass
class RewardAccountView:
    """Reward account as returned to callers, without credentials."""

    id: int
    service_name: str
    account_type: str
    category: RewardCategory
    status: RewardStatus
    created_by: int
    created_at: datetime
    updated_at: datetime
    subscription_duration: str | None = None
    description: str | None = None
    assigned_to_submission_id: int | None = None
    assigned_at: datetime | None = None


@dataclass
class AssignableReward:
    """Reward account summary for selection UIs."""

    id: int
    service_name: str
    account_type: str
    category: RewardCategory
    subscription_duration: str | None
    description: str | None
    created_at: datetime


@dataclass
class Page(Generic[T]):
    """One page of results with navigation metadata."""

    data: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        """Number of pages for the current filter."""
        return -(-self.total // self.limit) if self.limit else 0

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1


@dataclass
class BulkFailure:
    """One failed item of a bulk operation."""

    index: int
    input: Any
    error: str
    error_code: str


@dataclass
class BulkSummary:
    """Counts for a bulk operation."""

    total: int
    successful: int
    failed: int


@dataclass
class BulkCreateResult:
    """Outcome of bulk creation; failures never abort the batch."""

    successful: list[RewardAccountView] = field(default_factory=list)
    failed: list[BulkFailure] = field(default_factory=list)

    @property
    def summary(self) -> BulkSummary:
        return BulkSummary(
            total=len(self.successful) + len(self.failed),
            successful=len(self.successful),
            failed=len(self.failed),
        )


@dataclass
class BulkOperationResult:
    """Outcome of a bulk status operation keyed by reward account id."""

    succeeded: list[int] = field(default_factory=list)
    failed: list[BulkFailure] = field(default_factory=list)

    @property
    def summary(self) -> BulkSummary:
        return BulkSummary(
            total=len(self.succeeded) + len(self.failed),
            successful=len(self.succeeded),
            failed=len(self.failed),
        )


@dataclass
class AssignmentValidation:
    """Read-only precondition check for an assignment."""

    is_valid: bool
    error: str | None = None
    error_code: str | None = None
    reward_account: RewardAccountView | None = None


@dataclass
class CredentialAccess:
    """Decrypted credentials with the audit entry that recorded the access."""

    reward_account_id: int
    service_name: str
    account_type: str
    decrypted_credentials: str = field(repr=False)
    accessed_at: datetime
    accessed_by: int
    access_reason: str
    audit_log_id: int | None
    audit_warning: str


@dataclass
class CredentialIntegrity:
    """Whether a stored credential blob still decrypts under the current key."""

    reward_account_id: int
    integrity_check_passed: bool
    error_code: str | None = None


def to_view(account: RewardAccount) -> RewardAccountView:
    """
    Convert ORM row to a caller-facing view.

    Args:
        account: RewardAccount row

    Returns:
        View without encrypted credentials
    """
    return RewardAccountView(
        id=account.id,
        service_name=account.service_name,
        account_type=account.account_type,
        category=RewardCategory(account.category),
        status=RewardStatus(account.status),
        created_by=account.created_by,
        created_at=account.created_at,
        updated_at=account.updated_at,
        subscription_duration=account.subscription_duration,
        description=account.description,
        assigned_to_submission_id=account.assigned_to_submission_id,
        assigned_at=account.assigned_at,
    )


def to_assignable(account: RewardAccount) -> AssignableReward:
    """Convert ORM row to an assignable summary."""
    return AssignableReward(
        id=account.id,
        service_name=account.service_name,
        account_type=account.account_type,
        category=RewardCategory(account.category),
        subscription_duration=account.subscription_duration,
        description=account.description,
        created_at=account.created_at,
    )
