from __future__ import annotations
import logging
from typing import Optional

from fastapi import Depends, Header, Request

from vault.core.errors import UnauthorizedError
from vault.recordstore.ports import VaultStorePort
from .contracts import AuthenticatedUser
from .service import AccountService, TokenService

log = logging.getLogger("authservice")

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from 'Bearer <token>' or None when absent or malformed."""
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token or " " in token:
        return None
    return token


class IdentityResolver:
    """
    Gate in front of every protected handler. Either returns the caller's
    identity or raises UnauthorizedError; there is no anonymous fallthrough.
    """
    def __init__(self, *, tokens: TokenService, store: VaultStorePort):
        self.tokens = tokens
        self.store = store

    async def resolve(self, authorization: Optional[str]) -> AuthenticatedUser:
        token = extract_bearer_token(authorization)
        if token is None:
            raise UnauthorizedError("Missing or invalid Authorization header")

        claims = self.tokens.verify(token)

        user = await self.store.get_user_by_id(claims.subject)
        if user is None:
            # token outlived its user
            log.info("identity.resolve rejected reason=unknown_user user=%s", claims.subject)
            raise UnauthorizedError()
        return AuthenticatedUser(id=user.id, email=user.email)


# ---------- FastAPI wiring ----------
# Components are attached to app.state by the app factory; handlers receive them per request.

def get_authorization_header(authorization: Optional[str] = Header(default=None, alias="Authorization")) -> Optional[str]:
    return authorization


def get_account_service(request: Request) -> AccountService:
    return request.app.state.account_service


def get_identity_resolver(request: Request) -> IdentityResolver:
    return request.app.state.identity_resolver


async def get_current_user(
    resolver: IdentityResolver = Depends(get_identity_resolver),
    authorization: Optional[str] = Depends(get_authorization_header),
) -> AuthenticatedUser:
    return await resolver.resolve(authorization)
