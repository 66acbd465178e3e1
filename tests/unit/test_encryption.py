"""Unit tests for credential encryption."""

import base64

import pytest

from reward_vault.config.settings import settings
from reward_vault.utils.encryption import SecretCipher
from reward_vault.utils.exceptions import DecryptionError, EncryptionError


class TestSecretCipher:
    """Tests for encryption/decryption of credential strings."""

    def test_encrypt_decrypt_roundtrip(self, cipher):
        """Encryption and decryption should be reversible."""
        original_data = "user@example.com:s3cret!"
        encrypted = cipher.encrypt(original_data)
        decrypted = cipher.decrypt(encrypted)

        assert decrypted == original_data
        assert encrypted != original_data
        assert original_data not in encrypted

    def test_encrypt_produces_different_output(self, cipher):
        """Same input encrypted twice should produce different outputs."""
        encrypted1 = cipher.encrypt("test_data")
        encrypted2 = cipher.encrypt("test_data")

        # Fresh IV per call
        assert encrypted1 != encrypted2
        assert cipher.decrypt(encrypted1) == "test_data"
        assert cipher.decrypt(encrypted2) == "test_data"

    def test_blob_layout(self, cipher):
        """Blob is base64 of IV(16) + TAG(16) + ciphertext."""
        plaintext = "abcdef"
        combined = base64.b64decode(cipher.encrypt(plaintext))

        assert len(combined) == 16 + 16 + len(plaintext.encode())

    def test_empty_string_encryption(self, cipher):
        """Empty string should be encryptable."""
        encrypted = cipher.encrypt("")

        assert len(base64.b64decode(encrypted)) == 32
        assert cipher.decrypt(encrypted) == ""

    def test_unicode_encryption(self, cipher):
        """Unicode strings should be properly encrypted."""
        original = "Привет мир! 🌍 パスワード"
        assert cipher.decrypt(cipher.encrypt(original)) == original

    def test_same_secret_derives_same_key(self, cipher):
        """A second cipher with the same secret reads existing blobs."""
        other = SecretCipher(settings.encryption_secret, settings.encryption_salt)
        assert other.decrypt(cipher.encrypt("shared")) == "shared"

    def test_wrong_secret_fails(self, cipher):
        """Blob encrypted under another secret must not decrypt."""
        other = SecretCipher("a-completely-different-secret-value")

        with pytest.raises(DecryptionError):
            other.decrypt(cipher.encrypt("secret"))

    def test_any_modified_byte_is_detected(self, cipher):
        """Flipping any byte of IV, tag or ciphertext fails authentication."""
        combined = base64.b64decode(cipher.encrypt("credentials"))

        for position in range(len(combined)):
            tampered = bytearray(combined)
            tampered[position] ^= 0x01
            blob = base64.b64encode(bytes(tampered)).decode()

            with pytest.raises(DecryptionError):
                cipher.decrypt(blob)

    def test_truncated_blob_fails(self, cipher):
        """Blob shorter than IV + tag is rejected."""
        short = base64.b64encode(b"\x00" * 31).decode()

        with pytest.raises(DecryptionError, match="too short"):
            cipher.decrypt(short)

    def test_invalid_base64_fails(self, cipher):
        """Non-base64 input is rejected, never returned as None."""
        with pytest.raises(DecryptionError, match="malformed"):
            cipher.decrypt("invalid_encrypted_data!!")

    def test_error_message_has_no_plaintext(self, cipher):
        """Decryption errors never echo credential material."""
        other = SecretCipher("another-secret-for-error-message")

        with pytest.raises(DecryptionError) as exc_info:
            other.decrypt(cipher.encrypt("hunter2"))

        assert "hunter2" not in str(exc_info.value)
        assert exc_info.value.code == "DECRYPTION_FAILED"

    def test_empty_secret_rejected(self):
        """Cipher cannot be built without a secret."""
        with pytest.raises(EncryptionError):
            SecretCipher("")


class TestCipherHelpers:
    """Tests for hashing and random generation."""

    def test_hash_is_deterministic_sha256(self):
        """Hash returns a stable 64-char hex digest."""
        digest = SecretCipher.hash("value")

        assert digest == SecretCipher.hash("value")
        assert len(digest) == 64
        assert digest != SecretCipher.hash("other")

    def test_secure_random_length(self):
        """Random hex has two characters per byte."""
        assert len(SecretCipher.secure_random()) == 64
        assert len(SecretCipher.secure_random(8)) == 16
        assert SecretCipher.secure_random() != SecretCipher.secure_random()

    def test_secure_random_rejects_non_positive(self):
        """Zero or negative lengths are invalid."""
        with pytest.raises(ValueError):
            SecretCipher.secure_random(0)
