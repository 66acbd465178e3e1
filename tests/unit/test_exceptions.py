"""Unit tests for the error hierarchy."""

from reward_vault.utils.exceptions import (
    BadRequestError,
    ConflictError,
    DecryptionError,
    EncryptionError,
    NotFoundError,
    RewardVaultError,
    is_fatal,
    is_retryable_elsewhere,
)


class TestExceptions:
    """Tests for error codes and categories."""

    def test_codes(self):
        """Every error carries a stable code."""
        assert RewardVaultError("x").code == "INTERNAL_ERROR"
        assert NotFoundError("x").code == "NOT_FOUND"
        assert ConflictError("x").code == "CONFLICT"
        assert BadRequestError("x").code == "BAD_REQUEST"
        assert EncryptionError("x").code == "ENCRYPTION_FAILED"
        assert DecryptionError("x").code == "DECRYPTION_FAILED"

    def test_crypto_errors_are_bad_requests(self):
        """Encryption failures are a kind of bad request."""
        assert isinstance(EncryptionError("x"), BadRequestError)
        assert isinstance(DecryptionError("x"), BadRequestError)

    def test_conflict_carries_statuses(self):
        """Transition conflicts report current and requested status."""
        error = ConflictError(
            "Cannot deactivate",
            current_status="ASSIGNED",
            requested_status="DEACTIVATED",
            reward_account_id=3,
        )

        assert error.current_status == "ASSIGNED"
        assert error.to_dict() == {
            "code": "CONFLICT",
            "message": "Cannot deactivate",
            "current_status": "ASSIGNED",
            "requested_status": "DEACTIVATED",
            "reward_account_id": 3,
        }

    def test_categories(self):
        """Conflicts are retryable on another account; decryption is fatal."""
        assert is_retryable_elsewhere(ConflictError("x")) is True
        assert is_retryable_elsewhere(NotFoundError("x")) is False
        assert is_fatal(DecryptionError("x")) is True
        assert is_fatal(BadRequestError("x")) is False
