"""Encryption utilities for reward account credentials."""

import base64
import binascii
import hashlib
import secrets

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt
from loguru import logger

from reward_vault.config.constants import (
    ENCRYPTION_AAD,
    ENCRYPTION_IV_LENGTH,
    ENCRYPTION_KEY_LENGTH,
    ENCRYPTION_TAG_LENGTH,
    SCRYPT_N,
    SCRYPT_P,
    SCRYPT_R,
)
from reward_vault.utils.exceptions import DecryptionError, EncryptionError


class SecretCipher:
    """
    Authenticated encryption for credential strings.

    Uses AES-256-GCM with a key derived once from the configured secret
    via scrypt. Blob layout is ``base64(IV || TAG || CIPHERTEXT)`` with a
    fresh random 128-bit IV per call.

    Instances hold only the derived key and are safe for concurrent use.
    Build one at process start and pass it to the services that need it.
    """

    def __init__(self, secret: str, salt: str = "salt") -> None:
        """
        Initialize cipher.

        Args:
            secret: Process-wide encryption secret
            salt: Fixed key-derivation salt
        """
        if not secret:
            raise EncryptionError("Encryption secret must not be empty")

        kdf = Scrypt(
            salt=salt.encode(),
            length=ENCRYPTION_KEY_LENGTH,
            n=SCRYPT_N,
            r=SCRYPT_R,
            p=SCRYPT_P,
        )
        self._aesgcm = AESGCM(kdf.derive(secret.encode()))

    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt plaintext.

        Args:
            plaintext: Text to encrypt

        Returns:
            Encrypted blob (base64)

        Raises:
            EncryptionError: If encryption fails
        """
        try:
            iv = secrets.token_bytes(ENCRYPTION_IV_LENGTH)
            sealed = self._aesgcm.encrypt(iv, plaintext.encode("utf-8"), ENCRYPTION_AAD)
        except (TypeError, ValueError, UnicodeEncodeError) as e:
            logger.error(f"Encryption error: {type(e).__name__}")
            raise EncryptionError("Encryption failed") from e

        # AESGCM appends the tag; the stored layout keeps it next to the IV
        ciphertext, tag = sealed[:-ENCRYPTION_TAG_LENGTH], sealed[-ENCRYPTION_TAG_LENGTH:]
        return base64.b64encode(iv + tag + ciphertext).decode("ascii")

    def decrypt(self, blob: str) -> str:
        """
        Decrypt ciphertext blob.

        Args:
            blob: Encrypted blob (base64)

        Returns:
            Decrypted text

        Raises:
            DecryptionError: If blob is malformed, too short or tampered with
        """
        try:
            combined = base64.b64decode(blob.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError, AttributeError) as e:
            logger.error("Decryption error: malformed blob")
            raise DecryptionError("Decryption failed: malformed ciphertext") from e

        header_length = ENCRYPTION_IV_LENGTH + ENCRYPTION_TAG_LENGTH
        if len(combined) < header_length:
            logger.error("Decryption error: blob too short")
            raise DecryptionError("Decryption failed: ciphertext too short")

        iv = combined[:ENCRYPTION_IV_LENGTH]
        tag = combined[ENCRYPTION_IV_LENGTH:header_length]
        ciphertext = combined[header_length:]

        try:
            plaintext = self._aesgcm.decrypt(iv, ciphertext + tag, ENCRYPTION_AAD)
            return plaintext.decode("utf-8")
        except InvalidTag as e:
            logger.error("Decryption error: authentication tag mismatch")
            raise DecryptionError("Decryption failed: authentication failed") from e
        except UnicodeDecodeError as e:
            logger.error("Decryption error: plaintext is not valid UTF-8")
            raise DecryptionError("Decryption failed: invalid plaintext encoding") from e

    @staticmethod
    def hash(text: str) -> str:
        """
        One-way SHA-256 fingerprint.

        Not used for credential storage.
        """
        return hashlib.sha256(text.encode("utf-8")).hexdigest()

    @staticmethod
    def secure_random(byte_length: int = 32) -> str:
        """Generate a cryptographically secure random hex string."""
        if byte_length <= 0:
            raise ValueError("byte_length must be positive")
        return secrets.token_hex(byte_length)


def create_cipher(secret: str, salt: str) -> SecretCipher:
    """Build the process-wide cipher from configuration."""
    cipher = SecretCipher(secret, salt)
    logger.info("Credential cipher initialized (AES-256-GCM, scrypt-derived key)")
    return cipher
