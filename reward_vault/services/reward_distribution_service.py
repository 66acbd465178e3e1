"""
Reward Distribution Service.

Creates, assigns and retires reward accounts. Every status change goes
through a conditional write, so concurrent requests for the same account
serialize in the database and exactly one of them wins.
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reward_vault.config.constants import (
    CREDENTIAL_ACCESS_WARNING,
    DEFAULT_AUDIT_HISTORY_LIMIT,
    MAX_CREDENTIALS_LENGTH,
    MAX_REASON_LENGTH,
)
from reward_vault.config.settings import Settings
from reward_vault.models.enums import AuditAction, RewardCategory, RewardStatus
from reward_vault.models.reward_account import RewardAccount
from reward_vault.models.reward_audit_log import RewardAuditLog
from reward_vault.repositories.reward_account_repository import RewardAccountRepository
from reward_vault.repositories.submission_repository import SubmissionRepository
from reward_vault.schemas.reward_account import (
    AssignableReward,
    AssignmentValidation,
    BulkCreateResult,
    BulkFailure,
    BulkOperationResult,
    CreateRewardAccountInput,
    CredentialAccess,
    CredentialIntegrity,
    Page,
    Pagination,
    RewardAccountFilters,
    RewardAccountView,
    SortOptions,
    UpdateRewardAccountInput,
    to_assignable,
    to_view,
)
from reward_vault.services.audit_trail_service import AuditTrailService
from reward_vault.services.base_service import BaseService, log_operation, transaction
from reward_vault.services.expiry_policy import ExpiryPolicy
from reward_vault.utils.datetime_utils import utc_now
from reward_vault.utils.encryption import SecretCipher
from reward_vault.utils.exceptions import (
    BadRequestError,
    ConflictError,
    DecryptionError,
    NotFoundError,
    RewardVaultError,
)


# Allowed source states per transition
DEACTIVATABLE = (RewardStatus.AVAILABLE, RewardStatus.EXPIRED, RewardStatus.DEACTIVATED)
REACTIVATABLE = (RewardStatus.DEACTIVATED, RewardStatus.EXPIRED)

REDACTED = "***"


def _validation_message(error: ValidationError) -> str:
    """Summarize pydantic errors without echoing input values."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "input"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def _redact(data: Any) -> Any:
    """Copy of a bulk input that is safe to return and log."""
    if isinstance(data, CreateRewardAccountInput):
        return {**data.model_dump(exclude={"credentials"}), "credentials": REDACTED}
    if isinstance(data, Mapping):
        return {key: (REDACTED if key == "credentials" else value) for key, value in data.items()}
    return REDACTED


class RewardDistributionService(BaseService):
    """
    Service for distributing reward accounts to winning submissions.

    Lifecycle:
    - AVAILABLE -> ASSIGNED (assign), ASSIGNED -> AVAILABLE (unassign)
    - AVAILABLE/EXPIRED/DEACTIVATED -> DEACTIVATED (deactivate)
    - DEACTIVATED/EXPIRED -> AVAILABLE (reactivate)
    - AVAILABLE -> EXPIRED (mark_expired sweep)

    One instance per session (request). The service keeps no locks of its
    own; mutual exclusion comes from the conditional writes in
    RewardAccountRepository and SubmissionRepository.
    """

    def __init__(
        self,
        session: AsyncSession,
        cipher: SecretCipher,
        expiry_policy: ExpiryPolicy | None = None,
        audit_retry_attempts: int = 3,
        audit_retry_delay: float = 0.2,
    ) -> None:
        """
        Initialize distribution service.

        Args:
            session: Async database session
            cipher: Credential cipher built at process start
            expiry_policy: Criterion for the expiry sweep
            audit_retry_attempts: Post-commit retries for deferred audit entries
            audit_retry_delay: Base backoff delay for audit retries
        """
        super().__init__(session)
        self.cipher = cipher
        self.expiry_policy = expiry_policy or ExpiryPolicy()
        self.account_repo = RewardAccountRepository(session)
        self.submission_repo = SubmissionRepository(session)
        self.audit = AuditTrailService(
            session,
            max_attempts=audit_retry_attempts,
            retry_delay=audit_retry_delay,
        )

    async def rollback(self) -> None:
        """Roll back and forget audit entries deferred for the discarded work."""
        await super().rollback()
        self.audit.discard_pending()

    async def after_commit(self) -> None:
        """Retry audit entries deferred during the committed transaction."""
        if self.audit.pending_count:
            await self.audit.flush_pending()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _require_account(self, account_id: int) -> RewardAccount:
        account = await self.account_repo.get_by_id(account_id, fresh=True)
        if account is None:
            raise NotFoundError(
                f"Reward account with ID {account_id} not found",
                reward_account_id=account_id,
            )
        return account

    async def _raise_transition_failed(
        self,
        account_id: int,
        requested: RewardStatus,
        action: str,
    ) -> None:
        """Explain why a conditional write matched zero rows."""
        current = await self.account_repo.get_status(account_id)
        if current is None:
            raise NotFoundError(
                f"Reward account with ID {account_id} not found",
                reward_account_id=account_id,
            )
        raise ConflictError(
            f"Cannot {action} reward account {account_id}: "
            f"current status is {current.value}, requested {requested.value}",
            current_status=current.value,
            requested_status=requested.value,
            reward_account_id=account_id,
        )

    @staticmethod
    def _parse_create(data: CreateRewardAccountInput | Mapping[str, Any]) -> CreateRewardAccountInput:
        if isinstance(data, CreateRewardAccountInput):
            return data
        try:
            return CreateRewardAccountInput.model_validate(data)
        except ValidationError as e:
            raise BadRequestError(
                f"Invalid reward account input: {_validation_message(e)}"
            ) from e

    @staticmethod
    def _require_text(value: str | None, name: str, max_length: int) -> str:
        text = (value or "").strip()
        if not text:
            raise BadRequestError(f"{name} is required")
        if len(text) > max_length:
            raise BadRequestError(f"{name} must be at most {max_length} characters")
        return text

    # ------------------------------------------------------------------
    # Creation and editing
    # ------------------------------------------------------------------

    @transaction
    @log_operation
    async def create(self, data: CreateRewardAccountInput | Mapping[str, Any]) -> RewardAccountView:
        """
        Create a reward account with encrypted credentials.

        Args:
            data: Validated input or raw mapping

        Returns:
            Created account without credentials

        Raises:
            BadRequestError: If input is invalid
            EncryptionError: If credentials cannot be encrypted
        """
        payload = self._parse_create(data)
        encrypted_credentials = self.cipher.encrypt(payload.credentials)
        now = utc_now()

        account = await self.account_repo.create(
            service_name=payload.service_name,
            account_type=payload.account_type,
            category=payload.category,
            encrypted_credentials=encrypted_credentials,
            subscription_duration=payload.subscription_duration,
            description=payload.description,
            status=RewardStatus.AVAILABLE,
            created_by=payload.created_by,
            created_at=now,
            updated_at=now,
        )

        await self.audit.record(account.id, AuditAction.CREATED, payload.created_by)

        self.logger.info(
            f"Created reward account {account.id} "
            f"({payload.service_name}/{payload.account_type}, {payload.category.value}) "
            f"by admin {payload.created_by}"
        )
        return to_view(account)

    async def bulk_create(
        self,
        inputs: Sequence[CreateRewardAccountInput | Mapping[str, Any]],
    ) -> BulkCreateResult:
        """
        Create many reward accounts; each item commits or fails on its own.

        Args:
            inputs: Items to create

        Returns:
            Successful views, failures with their errors, and a summary
        """
        result = BulkCreateResult()

        for index, item in enumerate(inputs):
            try:
                result.successful.append(await self.create(item))
            except RewardVaultError as e:
                result.failed.append(
                    BulkFailure(index=index, input=_redact(item), error=e.message, error_code=e.code)
                )
            except SQLAlchemyError as e:
                result.failed.append(
                    BulkFailure(
                        index=index,
                        input=_redact(item),
                        error=f"Database error: {type(e).__name__}",
                        error_code=RewardVaultError.code,
                    )
                )

        summary = result.summary
        self.logger.info(
            f"Bulk create finished: {summary.successful}/{summary.total} created, "
            f"{summary.failed} failed"
        )
        return result

    @transaction
    async def update(
        self,
        account_id: int,
        data: UpdateRewardAccountInput | Mapping[str, Any],
    ) -> RewardAccountView:
        """
        Edit descriptor fields of a reward account.

        Status is not editable here; use the lifecycle operations.

        Raises:
            BadRequestError: If input is invalid or empty
            NotFoundError: If account does not exist
        """
        if not isinstance(data, UpdateRewardAccountInput):
            try:
                data = UpdateRewardAccountInput.model_validate(data)
            except ValidationError as e:
                raise BadRequestError(
                    f"Invalid reward account update: {_validation_message(e)}"
                ) from e

        changes = data.changes()
        for required in ("service_name", "account_type", "category"):
            if required in changes and changes[required] is None:
                raise BadRequestError(f"{required} cannot be cleared")
        if not changes:
            raise BadRequestError("No fields to update")

        updated = await self.account_repo.update_fields(account_id, utc_now(), **changes)
        if not updated:
            raise NotFoundError(
                f"Reward account with ID {account_id} not found",
                reward_account_id=account_id,
            )

        self.logger.info(f"Updated reward account {account_id}: {sorted(changes)}")
        return to_view(await self._require_account(account_id))

    @transaction
    async def rotate_credentials(
        self,
        account_id: int,
        new_credentials: str,
        reason: str,
        rotated_by: int,
    ) -> RewardAccountView:
        """
        Replace stored credentials with a freshly encrypted value.

        Raises:
            BadRequestError: If credentials or reason are missing
            NotFoundError: If account does not exist
        """
        if not new_credentials or len(new_credentials) > MAX_CREDENTIALS_LENGTH:
            raise BadRequestError(
                f"New credentials must be 1-{MAX_CREDENTIALS_LENGTH} characters"
            )
        reason = self._require_text(reason, "Rotation reason", MAX_REASON_LENGTH)

        encrypted_credentials = self.cipher.encrypt(new_credentials)
        updated = await self.account_repo.update_fields(
            account_id,
            utc_now(),
            encrypted_credentials=encrypted_credentials,
        )
        if not updated:
            raise NotFoundError(
                f"Reward account with ID {account_id} not found",
                reward_account_id=account_id,
            )

        await self.audit.record(account_id, AuditAction.ROTATED, rotated_by, reason)

        self.logger.info(f"Rotated credentials of reward account {account_id} (admin {rotated_by})")
        return to_view(await self._require_account(account_id))

    # ------------------------------------------------------------------
    # Assignment
    # ------------------------------------------------------------------

    @transaction
    @log_operation
    async def assign(
        self,
        reward_account_id: int,
        submission_id: int,
        assigned_by: int,
        notes: str | None = None,
    ) -> RewardAccountView:
        """
        Assign an AVAILABLE reward account to a submission.

        The AVAILABLE -> ASSIGNED move is one conditional write; a second
        conditional write on the submission enforces one reward per
        submission. Both happen in one transaction, so any failure leaves
        the account and the submission untouched.

        Args:
            reward_account_id: Reward account ID
            submission_id: Winning submission ID
            assigned_by: Admin performing the assignment
            notes: Optional assignment notes

        Returns:
            Assigned account without credentials

        Raises:
            NotFoundError: If account or submission does not exist
            ConflictError: If account is not AVAILABLE or submission already has a reward
            BadRequestError: If categories do not match
        """
        account = await self._require_account(reward_account_id)
        # Early answer only; the claim below is still the authoritative guard
        if account.status != RewardStatus.AVAILABLE:
            current = RewardStatus(account.status)
            raise ConflictError(
                f"Reward account {reward_account_id} is not available for assignment "
                f"(current status: {current.value})",
                current_status=current.value,
                requested_status=RewardStatus.ASSIGNED.value,
                reward_account_id=reward_account_id,
            )

        submission = await self.submission_repo.get_by_id(submission_id, fresh=True)
        if submission is None:
            raise NotFoundError(
                f"Submission with ID {submission_id} not found",
                submission_id=submission_id,
            )
        if submission.selected_category is not None and submission.selected_category != account.category:
            raise BadRequestError(
                f"Reward account {reward_account_id} is {RewardCategory(account.category).value}, "
                f"submission {submission_id} selected {RewardCategory(submission.selected_category).value}"
            )
        if submission.assigned_reward_account_id is not None:
            raise ConflictError(
                f"Submission {submission_id} already has reward account "
                f"{submission.assigned_reward_account_id}",
                submission_id=submission_id,
            )

        now = utc_now()

        try:
            claimed = await self.account_repo.claim(reward_account_id, submission_id, now)
            if not claimed:
                current = await self.account_repo.get_status(reward_account_id)
                if current is None:
                    raise NotFoundError(
                        f"Reward account with ID {reward_account_id} not found",
                        reward_account_id=reward_account_id,
                    )
                raise ConflictError(
                    f"Reward account {reward_account_id} is not available for assignment "
                    f"(current status: {current.value})",
                    current_status=current.value,
                    requested_status=RewardStatus.ASSIGNED.value,
                    reward_account_id=reward_account_id,
                )

            attached = await self.submission_repo.attach_reward(
                submission_id,
                reward_account_id,
                assigned_by,
                now,
                notes,
            )
        except IntegrityError as e:
            # Unique submission link lost a race with another assignment
            raise ConflictError(
                f"Submission {submission_id} already has a reward account",
                submission_id=submission_id,
            ) from e

        if not attached:
            raise ConflictError(
                f"Submission {submission_id} already has a reward account",
                submission_id=submission_id,
            )

        await self.audit.record(reward_account_id, AuditAction.ASSIGNED, assigned_by, notes)

        self.logger.info(
            f"Assigned reward account {reward_account_id} to submission {submission_id} "
            f"(admin {assigned_by})"
        )
        return to_view(await self._require_account(reward_account_id))

    @transaction
    async def unassign(
        self,
        reward_account_id: int,
        performed_by: int | None = None,
    ) -> RewardAccountView:
        """
        Return an ASSIGNED reward account to AVAILABLE.

        Raises:
            NotFoundError: If account does not exist
            ConflictError: If account is not currently assigned
        """
        previous = await self._require_account(reward_account_id)
        previous_submission_id = previous.assigned_to_submission_id

        released = await self.account_repo.release(reward_account_id, utc_now())
        if not released:
            await self._raise_transition_failed(
                reward_account_id, RewardStatus.AVAILABLE, "unassign"
            )

        await self.submission_repo.detach_reward(reward_account_id)
        await self.audit.record(
            reward_account_id,
            AuditAction.UNASSIGNED,
            performed_by,
            f"Unassigned from submission {previous_submission_id}",
        )

        self.logger.info(
            f"Unassigned reward account {reward_account_id} "
            f"from submission {previous_submission_id}"
        )
        return to_view(await self._require_account(reward_account_id))

    async def validate_assignment(
        self,
        reward_account_id: int,
        submission_id: int,
    ) -> AssignmentValidation:
        """
        Check assignment preconditions without changing anything.

        The result is advisory; assign() re-checks atomically.
        """
        account = await self.account_repo.get_by_id(reward_account_id, fresh=True)
        if account is None:
            return AssignmentValidation(
                is_valid=False,
                error=f"Reward account with ID {reward_account_id} not found",
                error_code=NotFoundError.code,
            )

        view = to_view(account)

        if account.status != RewardStatus.AVAILABLE:
            return AssignmentValidation(
                is_valid=False,
                error=(
                    "Reward account is not available for assignment. "
                    f"Current status: {view.status.value}"
                ),
                error_code=ConflictError.code,
                reward_account=view,
            )

        submission = await self.submission_repo.get_by_id(submission_id, fresh=True)
        if submission is None:
            return AssignmentValidation(
                is_valid=False,
                error=f"Submission with ID {submission_id} not found",
                error_code=NotFoundError.code,
                reward_account=view,
            )

        if submission.assigned_reward_account_id is not None:
            return AssignmentValidation(
                is_valid=False,
                error=(
                    f"Submission {submission_id} already has reward account "
                    f"{submission.assigned_reward_account_id}"
                ),
                error_code=ConflictError.code,
                reward_account=view,
            )

        if submission.selected_category is not None and submission.selected_category != account.category:
            return AssignmentValidation(
                is_valid=False,
                error=(
                    f"Category mismatch: reward is {view.category.value}, "
                    f"submission selected {RewardCategory(submission.selected_category).value}"
                ),
                error_code=BadRequestError.code,
                reward_account=view,
            )

        return AssignmentValidation(is_valid=True, reward_account=view)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @transaction
    async def deactivate(self, account_id: int) -> RewardAccountView:
        """
        Take a reward account out of circulation.

        Raises:
            NotFoundError: If account does not exist
            ConflictError: If account is currently assigned
        """
        moved = await self.account_repo.transition_status(
            account_id, DEACTIVATABLE, RewardStatus.DEACTIVATED, utc_now()
        )
        if not moved:
            await self._raise_transition_failed(account_id, RewardStatus.DEACTIVATED, "deactivate")

        self.logger.info(f"Deactivated reward account {account_id}")
        return to_view(await self._require_account(account_id))

    @transaction
    async def reactivate(self, account_id: int) -> RewardAccountView:
        """
        Return a DEACTIVATED or EXPIRED reward account to AVAILABLE.

        Raises:
            NotFoundError: If account does not exist
            ConflictError: If account is AVAILABLE or ASSIGNED
        """
        moved = await self.account_repo.transition_status(
            account_id,
            REACTIVATABLE,
            RewardStatus.AVAILABLE,
            utc_now(),
            assigned_to_submission_id=None,
            assigned_at=None,
        )
        if not moved:
            await self._raise_transition_failed(account_id, RewardStatus.AVAILABLE, "reactivate")

        self.logger.info(f"Reactivated reward account {account_id}")
        return to_view(await self._require_account(account_id))

    async def bulk_deactivate(self, account_ids: Iterable[int]) -> BulkOperationResult:
        """Deactivate many accounts; each item commits or fails on its own."""
        result = BulkOperationResult()

        for index, account_id in enumerate(account_ids):
            try:
                await self.deactivate(account_id)
                result.succeeded.append(account_id)
            except RewardVaultError as e:
                result.failed.append(
                    BulkFailure(index=index, input=account_id, error=e.message, error_code=e.code)
                )

        summary = result.summary
        self.logger.info(
            f"Bulk deactivate finished: {summary.successful}/{summary.total} deactivated"
        )
        return result

    @transaction
    async def mark_expired(self, now: datetime | None = None) -> int:
        """
        Expire AVAILABLE accounts that meet the expiry policy.

        Each candidate is moved with its own conditional write, so an
        account claimed after the scan keeps its assignment.

        Args:
            now: Reference time (defaults to current UTC time)

        Returns:
            Number of accounts expired
        """
        now = now or utc_now()
        cutoff = self.expiry_policy.cutoff(now)
        candidates = await self.account_repo.find_expiry_candidates(cutoff)

        expired = 0
        for account_id in candidates:
            moved = await self.account_repo.transition_status(
                account_id,
                (RewardStatus.AVAILABLE,),
                RewardStatus.EXPIRED,
                now,
            )
            if moved:
                expired += 1

        skipped = len(candidates) - expired
        self.logger.info(
            f"Marked {expired} reward accounts as expired "
            f"(cutoff {cutoff.isoformat()}, skipped {skipped})"
        )
        return expired

    @transaction
    async def delete(self, account_id: int, performed_by: int | None = None) -> None:
        """
        Hard delete a reward account that is not assigned.

        Raises:
            NotFoundError: If account does not exist
            BadRequestError: If account is currently assigned
        """
        deleted = await self.account_repo.delete_unless_assigned(account_id)
        if not deleted:
            current = await self.account_repo.get_status(account_id)
            if current is None:
                raise NotFoundError(
                    f"Reward account with ID {account_id} not found",
                    reward_account_id=account_id,
                )
            raise BadRequestError(
                f"Cannot delete reward account {account_id} while it is assigned to a submission",
                current_status=current.value,
                reward_account_id=account_id,
            )

        await self.audit.record(account_id, AuditAction.DELETED, performed_by)
        self.logger.info(f"Deleted reward account {account_id}")

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    @transaction
    async def get_with_credentials(
        self,
        account_id: int,
        access_reason: str,
        requested_by: int,
    ) -> CredentialAccess:
        """
        Decrypt credentials for an authorized caller.

        Always records one ACCESSED audit entry before returning.

        Raises:
            BadRequestError: If no access reason is given
            NotFoundError: If account does not exist
            DecryptionError: If stored credentials fail authentication
        """
        reason = self._require_text(access_reason, "Access reason", MAX_REASON_LENGTH)
        account = await self._require_account(account_id)

        try:
            plaintext = self.cipher.decrypt(account.encrypted_credentials)
        except DecryptionError as e:
            self.logger.critical(
                f"Stored credentials of reward account {account_id} failed to decrypt; "
                "ciphertext tampered or encryption secret changed"
            )
            raise DecryptionError(
                f"Failed to decrypt credentials for reward account {account_id}",
                reward_account_id=account_id,
            ) from e

        entry = await self.audit.record(account_id, AuditAction.ACCESSED, requested_by, reason)

        self.logger.info(f"Credentials of reward account {account_id} accessed by admin {requested_by}")
        return CredentialAccess(
            reward_account_id=account.id,
            service_name=account.service_name,
            account_type=account.account_type,
            decrypted_credentials=plaintext,
            accessed_at=entry.performed_at if entry else utc_now(),
            accessed_by=requested_by,
            access_reason=reason,
            audit_log_id=entry.id if entry else None,
            audit_warning=CREDENTIAL_ACCESS_WARNING,
        )

    async def verify_credential_integrity(self, account_ids: Iterable[int]) -> list[CredentialIntegrity]:
        """
        Check that stored credentials still decrypt under the current key.

        Plaintext is discarded immediately and never returned.
        """
        ids = list(account_ids)
        accounts = {account.id: account for account in await self.account_repo.find_by_ids(ids)}

        results = []
        for account_id in ids:
            account = accounts.get(account_id)
            if account is None:
                results.append(
                    CredentialIntegrity(account_id, integrity_check_passed=False, error_code=NotFoundError.code)
                )
                continue
            try:
                self.cipher.decrypt(account.encrypted_credentials)
            except DecryptionError as e:
                results.append(
                    CredentialIntegrity(account_id, integrity_check_passed=False, error_code=e.code)
                )
            else:
                results.append(CredentialIntegrity(account_id, integrity_check_passed=True))

        failures = sum(1 for item in results if not item.integrity_check_passed)
        if failures:
            self.logger.warning(f"Credential integrity check: {failures}/{len(results)} failed")
        return results

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get(self, account_id: int) -> RewardAccountView:
        """Get one reward account without credentials."""
        return to_view(await self._require_account(account_id))

    async def get_accounts(
        self,
        filters: RewardAccountFilters | None = None,
        pagination: Pagination | None = None,
        sort: SortOptions | None = None,
    ) -> Page[RewardAccountView]:
        """List reward accounts with filters, pagination and sorting."""
        pagination = pagination or Pagination()
        items, total = await self.account_repo.find_with_filters(
            filters or RewardAccountFilters(),
            pagination,
            sort or SortOptions(),
        )
        return Page(
            data=[to_view(item) for item in items],
            total=total,
            page=pagination.page,
            limit=pagination.limit,
        )

    async def get_assignable_rewards(self, category: RewardCategory | None = None) -> list[AssignableReward]:
        """AVAILABLE accounts for selection, oldest first."""
        accounts = await self.account_repo.find_available(category)
        return [to_assignable(account) for account in accounts]

    async def get_assigned_to_submission(self, submission_id: int) -> list[RewardAccountView]:
        """Accounts currently assigned to a submission."""
        accounts = await self.account_repo.find_assigned_to_submission(submission_id)
        return [to_view(account) for account in accounts]

    async def get_by_creator(self, created_by: int) -> list[RewardAccountView]:
        """Accounts created by an admin."""
        accounts = await self.account_repo.find_by_creator(created_by)
        return [to_view(account) for account in accounts]

    async def get_audit_history(
        self,
        account_id: int,
        action: AuditAction | None = None,
        limit: int = DEFAULT_AUDIT_HISTORY_LIMIT,
    ) -> list[RewardAuditLog]:
        """Audit entries of one account, newest first."""
        return await self.audit.history(reward_account_id=account_id, action=action, limit=limit)


def create_distribution_service(
    session: AsyncSession,
    cipher: SecretCipher,
    config: Settings,
) -> RewardDistributionService:
    """Build a distribution service wired from settings."""
    return RewardDistributionService(
        session,
        cipher,
        expiry_policy=ExpiryPolicy.from_days(config.reward_expiry_days),
        audit_retry_attempts=config.audit_retry_attempts,
        audit_retry_delay=config.audit_retry_delay_seconds,
    )
