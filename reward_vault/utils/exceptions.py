"""
Exception handling utilities.

Defines categorized exception types for proper error handling.
Every exception carries a stable ``code`` that calling layers map to
user-facing messages. Messages never include decrypted credentials.
"""

from typing import Any


class RewardVaultError(Exception):
    """Base error for all reward vault failures."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Serialize error for transport layers."""
        return {"code": self.code, "message": self.message, **self.details}


class NotFoundError(RewardVaultError):
    """Referenced reward account or submission does not exist."""

    code = "NOT_FOUND"


class ConflictError(RewardVaultError):
    """State-machine guard violated or assignment invariant broken."""

    code = "CONFLICT"

    def __init__(
        self,
        message: str,
        current_status: str | None = None,
        requested_status: str | None = None,
        **details: Any,
    ) -> None:
        if current_status is not None:
            details["current_status"] = current_status
        if requested_status is not None:
            details["requested_status"] = requested_status
        super().__init__(message, **details)
        self.current_status = current_status
        self.requested_status = requested_status


class BadRequestError(RewardVaultError):
    """Invalid input or input combination."""

    code = "BAD_REQUEST"


class EncryptionError(BadRequestError):
    """Raised when credentials cannot be encrypted."""

    code = "ENCRYPTION_FAILED"


class DecryptionError(BadRequestError):
    """
    Raised when a ciphertext blob is malformed or fails authentication.

    Always fatal: it signals tampering or a changed encryption secret and
    must never be retried automatically.
    """

    code = "DECRYPTION_FAILED"


# Exception categories based on handling strategy

# Caller may retry against a different reward account
RETRYABLE_ELSEWHERE = (
    ConflictError,
)

# Operator attention required
FATAL = (
    DecryptionError,
)


def is_retryable_elsewhere(exc: Exception) -> bool:
    """
    Check if the caller can retry the operation on another account.

    Args:
        exc: Exception to check

    Returns:
        True if exception is a conflict on the targeted account
    """
    return isinstance(exc, RETRYABLE_ELSEWHERE)


def is_fatal(exc: Exception) -> bool:
    """
    Check if exception requires operator attention.

    Args:
        exc: Exception to check

    Returns:
        True if exception must not be retried
    """
    return isinstance(exc, FATAL)
