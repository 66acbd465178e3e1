"""Integration tests for audit trail failure handling."""

import pytest
from sqlalchemy.exc import OperationalError

from reward_vault.models import AuditAction, RewardStatus
from reward_vault.services.audit_trail_service import AuditTrailService


def failing_append(audit_repo, failures: int):
    """Wrap repository append so the first calls raise a database error."""
    original = audit_repo.append
    calls = {"count": 0}

    async def append(**data):
        calls["count"] += 1
        if calls["count"] <= failures:
            raise OperationalError("INSERT INTO reward_audit_logs", {}, Exception("database is locked"))
        return await original(**data)

    return append, calls


class TestAuditTrail:
    """Tests for deferred and retried audit writes."""

    @pytest.mark.asyncio
    async def test_record_and_history(self, session):
        """Entries are readable newest first with filters."""
        audit = AuditTrailService(session)

        await audit.record(1, AuditAction.CREATED, 10)
        await audit.record(1, AuditAction.ACCESSED, 11, "Delivery")
        await audit.record(2, AuditAction.CREATED, 10)
        await session.commit()

        history = await audit.history(reward_account_id=1)
        assert [entry.action for entry in history] == [AuditAction.ACCESSED, AuditAction.CREATED]
        assert await audit.count(action=AuditAction.CREATED) == 2
        assert len(await audit.history(performed_by=11)) == 1

    @pytest.mark.asyncio
    async def test_failed_audit_does_not_roll_back_mutation(self, service, valid_account_data):
        """Audit failure defers the entry; the account is still created and audited after commit."""
        append, calls = failing_append(service.audit.audit_repo, failures=1)
        service.audit.audit_repo.append = append

        view = await service.create(valid_account_data())

        assert view.status == RewardStatus.AVAILABLE
        assert (await service.get(view.id)).status == RewardStatus.AVAILABLE
        assert service.audit.pending_count == 0
        assert calls["count"] == 2
        assert await service.audit.count(view.id, AuditAction.CREATED) == 1

    @pytest.mark.asyncio
    async def test_retry_gives_up_after_max_attempts(self, service, valid_account_data):
        """Entries still failing after every retry are dropped, state is kept."""
        append, calls = failing_append(service.audit.audit_repo, failures=100)
        service.audit.audit_repo.append = append

        view = await service.create(valid_account_data())

        # One savepoint attempt plus three post-commit retries
        assert calls["count"] == 1 + service.audit.max_attempts
        assert service.audit.pending_count == 0
        assert (await service.get(view.id)).status == RewardStatus.AVAILABLE
        assert await service.audit.count(view.id) == 0

    @pytest.mark.asyncio
    async def test_deferred_access_has_no_log_id(self, service, valid_account_data):
        """Credential access still succeeds when its audit entry is deferred."""
        view = await service.create(valid_account_data(credentials="carol:pw"))
        append, _ = failing_append(service.audit.audit_repo, failures=1)
        service.audit.audit_repo.append = append

        access = await service.get_with_credentials(view.id, "Delivery", 3)

        assert access.decrypted_credentials == "carol:pw"
        assert access.audit_log_id is None
        assert await service.audit.count(view.id, AuditAction.ACCESSED) == 1

    @pytest.mark.asyncio
    async def test_rollback_discards_deferred_entries(self, service, valid_account_data):
        """A rolled-back operation leaves no deferred entry behind for a later commit."""
        view = await service.create(valid_account_data(credentials="dave:old"))
        append, _ = failing_append(service.audit.audit_repo, failures=1)
        service.audit.audit_repo.append = append

        original_commit = service.commit

        async def failing_commit():
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        service.commit = failing_commit
        with pytest.raises(OperationalError):
            await service.rotate_credentials(view.id, "dave:new", "Leaked", 2)
        service.commit = original_commit

        assert service.audit.pending_count == 0

        await service.deactivate(view.id)

        assert await service.audit.count(view.id, AuditAction.ROTATED) == 0
        access = await service.get_with_credentials(view.id, "Check", 2)
        assert access.decrypted_credentials == "dave:old"
