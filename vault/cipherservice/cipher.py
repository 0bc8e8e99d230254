"""
Symmetric encryption of sensitive item fields.

The server-wide secret is stretched with PBKDF2-HMAC-SHA256 into a 32-byte
Fernet key (AES-128-CBC + HMAC-SHA256, authenticated). Ciphertext is the
URL-safe base64 Fernet token as text, so it can sit in a plain string column.

Never log plaintext or ciphertext values.
"""
from __future__ import annotations

import base64
import logging

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from vault.core.errors import ConfigurationError, DecryptionError
from .config import CipherSettings

logger = logging.getLogger("cipherservice")

KEY_LENGTH = 32
_KDF_SALT = b"vault-field-cipher"  # static so every process derives the same key


def derive_key(secret: str, iterations: int = 100_000) -> bytes:
    """Derive a urlsafe-base64 Fernet key from the configured secret."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=_KDF_SALT,
        iterations=iterations,
    )
    return base64.urlsafe_b64encode(kdf.derive(secret.encode("utf-8")))


class SymmetricCipher:
    """Reversible encrypt/decrypt keyed by a single server secret. Read-only after construction."""

    def __init__(self, secret: str, *, iterations: int = 100_000):
        if not secret:
            raise ConfigurationError("Encryption secret is not configured")
        self._fernet = Fernet(derive_key(secret, iterations))
        logger.info("cipher.init kdf_iterations=%s", iterations)

    @classmethod
    def from_settings(cls, settings: CipherSettings) -> "SymmetricCipher":
        return cls(settings.CRYPTR_SECRET, iterations=settings.CIPHER_KDF_ITERATIONS)

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        try:
            data = self._fernet.decrypt(ciphertext.encode("utf-8"))
        except (InvalidToken, TypeError, ValueError) as ex:
            logger.warning("cipher.decrypt failed reason=%s", type(ex).__name__)
            raise DecryptionError() from ex
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as ex:
            raise DecryptionError() from ex
