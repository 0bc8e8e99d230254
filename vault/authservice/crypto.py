from __future__ import annotations
from typing import Any, Dict, List, Optional

import bcrypt
import jwt

from vault.core.errors import ValidationError
from .contracts import TokenSignerPort

BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """
    bcrypt hasher. Each hash embeds its own salt and cost factor,
    so verification needs nothing but the stored string.
    """
    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        raw = password.encode("utf-8")
        if len(raw) > BCRYPT_MAX_BYTES:
            raise ValidationError(f"Password longer than {BCRYPT_MAX_BYTES} bytes")
        return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, password: str, encoded: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), encoded.encode("utf-8"))
        except ValueError:
            # malformed stored hash or over-long candidate
            return False


class HS256TokenSigner(TokenSignerPort):
    """
    Thin adapter over PyJWT for HMAC-signed tokens.
    """
    def __init__(self, secret: str, alg: str = "HS256"):
        if not secret:
            raise ValueError("HS256TokenSigner requires non-empty secret")
        self._secret = secret
        self._alg = alg

    def sign(self, claims: Dict[str, Any]) -> str:
        return jwt.encode(claims, self._secret, algorithm=self._alg)

    def verify(self, token: str, *, issuer: Optional[str] = None, audience: Optional[str] = None) -> Dict[str, Any]:
        """Raises jwt.InvalidTokenError (or a subclass) on any failed check."""
        required: List[str] = ["exp", "sub"]
        if issuer is not None:
            required.append("iss")
        if audience is not None:
            required.append("aud")
        return jwt.decode(
            token,
            self._secret,
            algorithms=[self._alg],
            issuer=issuer,
            audience=audience,
            options={"require": required},
        )
