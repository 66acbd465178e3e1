"""Unit tests for service transaction helpers."""

import pytest

from reward_vault.services.base_service import BaseService, log_operation, transaction
from reward_vault.utils.exceptions import ConflictError


class DummyService(BaseService):
    """Service used to exercise the decorators."""

    def __init__(self, session):
        super().__init__(session)
        self.after_commit_calls = 0

    async def after_commit(self) -> None:
        self.after_commit_calls += 1

    @transaction
    @log_operation
    async def succeed(self, value):
        return value * 2

    @transaction
    async def conflict(self):
        raise ConflictError("taken")

    @transaction
    async def crash(self):
        raise RuntimeError("boom")


class TestTransaction:
    """Tests for the @transaction decorator."""

    @pytest.mark.asyncio
    async def test_commit_on_success(self, mock_session):
        """Successful call commits and runs the post-commit hook."""
        service = DummyService(mock_session)

        assert await service.succeed(21) == 42
        mock_session.commit.assert_awaited_once()
        mock_session.rollback.assert_not_awaited()
        assert service.after_commit_calls == 1

    @pytest.mark.asyncio
    async def test_rollback_on_domain_error(self, mock_session):
        """Domain errors roll back and propagate unchanged."""
        service = DummyService(mock_session)

        with pytest.raises(ConflictError):
            await service.conflict()

        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_awaited()
        assert service.after_commit_calls == 0

    @pytest.mark.asyncio
    async def test_rollback_on_unexpected_error(self, mock_session):
        """Unexpected errors roll back and propagate."""
        service = DummyService(mock_session)

        with pytest.raises(RuntimeError):
            await service.crash()

        mock_session.rollback.assert_awaited_once()
        assert service.after_commit_calls == 0

    @pytest.mark.asyncio
    async def test_wrapped_name_preserved(self, mock_session):
        """Decorators keep the method name for logging."""
        assert DummyService.succeed.__name__ == "succeed"
