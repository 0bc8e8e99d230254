from __future__ import annotations
import logging
import time
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from vault.core.errors import InvalidTokenError, NotFoundError, UnauthorizedError, ConflictError
from vault.recordstore.ports import VaultStorePort
from .config import AuthSettings
from .contracts import (
    ClockPort, TokenSignerPort, TokenClaims, IssuedToken,
    SignInRequest, SignUpRequest, UserSummary,
)
from .crypto import PasswordHasher

log = logging.getLogger("authservice")

BAD_CREDENTIALS_MESSAGE = "Email or password invalid"


class SystemClock(ClockPort):
    def now_utc_ts(self) -> int:
        return int(time.time())


class TokenService:
    """Issues and verifies stateless bearer tokens carrying the user id as subject."""

    def __init__(
        self,
        *,
        signer: TokenSignerPort,
        issuer: str,
        audience: str,
        ttl_seconds: int,
        clock: Optional[ClockPort] = None,
    ):
        self.signer = signer
        self.issuer = issuer
        self.audience = audience
        self.ttl_seconds = ttl_seconds
        self.clock = clock or SystemClock()

    @classmethod
    def from_settings(cls, settings: AuthSettings, signer: TokenSignerPort, clock: Optional[ClockPort] = None) -> "TokenService":
        return cls(
            signer=signer,
            issuer=settings.AUTH_ISSUER,
            audience=settings.AUTH_AUDIENCE,
            ttl_seconds=settings.ACCESS_TTL_SECONDS,
            clock=clock,
        )

    def issue(self, user_id: int) -> IssuedToken:
        now = self.clock.now_utc_ts()
        claims = {
            "sub": str(user_id),
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "exp": now + self.ttl_seconds,
        }
        return IssuedToken(token=self.signer.sign(claims))

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = self.signer.verify(token, issuer=self.issuer, audience=self.audience)
        except jwt.InvalidTokenError as ex:
            log.info("token.verify rejected reason=%s", type(ex).__name__)
            raise InvalidTokenError() from ex
        try:
            return TokenClaims.from_payload(payload)
        except (KeyError, ValueError, PydanticValidationError) as ex:
            log.info("token.verify rejected reason=bad_claims")
            raise InvalidTokenError() from ex


class AccountService:
    """
    Orchestrates: sign-up (uniqueness -> hash -> persist),
    sign-in (lookup -> verify -> issue) and account erasure.
    """

    def __init__(
        self,
        *,
        store: VaultStorePort,
        hasher: PasswordHasher,
        tokens: TokenService,
    ):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        # compared against when the email is unknown, so both failure paths pay one bcrypt check
        self._dummy_hash = hasher.hash("unknown-user-placeholder")

    # --------- Core operations ----------
    async def sign_up(self, req: SignUpRequest) -> UserSummary:
        if await self.store.get_user_by_email(req.email) is not None:
            raise ConflictError("Email already registered")
        password_hash = self.hasher.hash(req.password)
        # the store re-checks uniqueness for concurrent sign-ups
        user = await self.store.create_user(email=req.email, password_hash=password_hash)
        log.info("auth.sign_up ok user=%s", user.id)
        return UserSummary(id=user.id, email=user.email)

    async def sign_in(self, req: SignInRequest) -> IssuedToken:
        user = await self.store.get_user_by_email(req.email)
        if user is None:
            self.hasher.verify(req.password, self._dummy_hash)
        if user is None or not self.hasher.verify(req.password, user.password_hash):
            log.info("auth.sign_in rejected")
            raise UnauthorizedError(BAD_CREDENTIALS_MESSAGE)
        log.info("auth.sign_in ok user=%s", user.id)
        return self.tokens.issue(user.id)

    async def erase_account(self, user_id: int, password: str) -> None:
        user = await self.store.get_user_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        if not self.hasher.verify(password, user.password_hash):
            log.info("auth.erase rejected user=%s", user_id)
            raise UnauthorizedError("Wrong password")
        await self.store.erase_user(user_id)
        log.info("auth.erase ok user=%s", user_id)
