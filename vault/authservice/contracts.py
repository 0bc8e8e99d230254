from __future__ import annotations
import re
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional, Protocol
from pydantic import BaseModel, EmailStr, Field, TypeAdapter, constr, field_validator

# ---------- Domain Models ----------
class UserSummary(BaseModel):
    """Outward view of a user. Never carries the password hash."""
    id: int
    email: str

class AuthenticatedUser(BaseModel):
    """Identity resolved from a bearer token, threaded into request handlers."""
    id: int
    email: str

class TokenClaims(BaseModel):
    subject: int
    issuer: str
    audience: str
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "TokenClaims":
        sub = payload.get("sub")
        if not isinstance(sub, str) or not sub.isdigit():
            raise ValueError("Token subject is not a user id")
        aud = payload.get("aud")
        if isinstance(aud, list):
            aud = aud[0] if len(aud) == 1 else None
        if not isinstance(aud, str):
            raise ValueError("Token audience is malformed")
        return cls(
            subject=int(sub),
            issuer=payload["iss"],
            audience=aud,
            issued_at=datetime.fromtimestamp(int(payload.get("iat", payload["exp"])), tz=timezone.utc),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
        )

class IssuedToken(BaseModel):
    token: str
    token_type: Literal["Bearer"] = "Bearer"

# ---------- Ports (Contracts) ----------
class TokenSignerPort(Protocol):
    """
    Contract for JWT signing/verification.
    Implementation can be HS256/RS256/etc.
    """
    def sign(self, claims: Dict[str, Any]) -> str: ...
    def verify(self, token: str, *, issuer: Optional[str] = None, audience: Optional[str] = None) -> Dict[str, Any]: ...

class ClockPort(Protocol):
    def now_utc_ts(self) -> int: ...

# ---------- Service I/O ----------
_SYMBOL = re.compile(r"[^A-Za-z0-9]")
_EMAIL = TypeAdapter(EmailStr)

class _CredentialsBody(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        # validate but store exactly as typed; uniqueness is case-sensitive
        try:
            _EMAIL.validate_python(v)
        except ValueError:
            raise ValueError("value is not a valid email address") from None
        return v

class SignUpRequest(_CredentialsBody):
    password: constr(min_length=10, max_length=72)

    @field_validator("password")
    @classmethod
    def strong_password(cls, v: str) -> str:
        missing = []
        if not any(c.islower() for c in v):
            missing.append("lowercase letter")
        if not any(c.isupper() for c in v):
            missing.append("uppercase letter")
        if not any(c.isdigit() for c in v):
            missing.append("number")
        if not _SYMBOL.search(v):
            missing.append("symbol")
        if missing:
            raise ValueError("password needs at least one " + ", ".join(missing))
        return v

class SignInRequest(_CredentialsBody):
    password: constr(min_length=1)

class EraseRequest(BaseModel):
    password: constr(min_length=1)

class EraseResult(BaseModel):
    erased: bool = Field(default=True)
