from __future__ import annotations
import logging
from typing import Optional

from fastapi import FastAPI
from pydantic import ValidationError as SettingsValidationError

from vault.authservice import (
    AccountService, AuthSettings, HS256TokenSigner, IdentityResolver,
    PasswordHasher, TokenService, auth_router, erase_router,
)
from vault.authservice.contracts import ClockPort
from vault.cipherservice import (
    CARD_SECRET_FIELDS, CREDENTIAL_SECRET_FIELDS, NOTE_SECRET_FIELDS,
    CipherSettings, SecretFieldCodec, SymmetricCipher,
)
from vault.core.errors import ConfigurationError
from vault.itemservice import (
    CardsService, CredentialsService, NotesService,
    cards_router, credentials_router, notes_router,
)
from vault.recordstore import InMemoryVaultStore, ItemKind, VaultStorePort
from .errors import install_error_handlers
from .observability import install_request_context
from .routers import health
from .settings import APP_NAME, APP_VERSION

logger = logging.getLogger("apigateway")


def load_settings() -> tuple[AuthSettings, CipherSettings]:
    """Read both secrets from env/.env. A missing secret is fatal at startup."""
    try:
        return AuthSettings(), CipherSettings()
    except SettingsValidationError as ex:
        missing = sorted({str(e["loc"][0]) for e in ex.errors() if e.get("loc")})
        raise ConfigurationError(f"Missing or invalid settings: {', '.join(missing)}") from ex


def create_app(
    *,
    auth_settings: Optional[AuthSettings] = None,
    cipher_settings: Optional[CipherSettings] = None,
    store: Optional[VaultStorePort] = None,
    clock: Optional[ClockPort] = None,
) -> FastAPI:
    if auth_settings is None or cipher_settings is None:
        env_auth, env_cipher = load_settings()
        auth_settings = auth_settings or env_auth
        cipher_settings = cipher_settings or env_cipher

    store = store or InMemoryVaultStore()
    cipher = SymmetricCipher.from_settings(cipher_settings)
    signer = HS256TokenSigner(auth_settings.JWT_SECRET, alg=auth_settings.JWT_ALG)
    tokens = TokenService.from_settings(auth_settings, signer, clock=clock)

    app = FastAPI(title=APP_NAME, version=APP_VERSION)
    install_request_context(app)
    install_error_handlers(app)

    # Read-only after startup; handlers reach them through dependencies.
    app.state.store = store
    app.state.account_service = AccountService(
        store=store,
        hasher=PasswordHasher(rounds=auth_settings.BCRYPT_ROUNDS),
        tokens=tokens,
    )
    app.state.identity_resolver = IdentityResolver(tokens=tokens, store=store)
    app.state.item_services = {
        ItemKind.NOTE: NotesService(store, SecretFieldCodec(cipher, NOTE_SECRET_FIELDS)),
        ItemKind.CARD: CardsService(store, SecretFieldCodec(cipher, CARD_SECRET_FIELDS)),
        ItemKind.CREDENTIAL: CredentialsService(store, SecretFieldCodec(cipher, CREDENTIAL_SECRET_FIELDS)),
    }

    # Routers
    app.include_router(health.router)
    app.include_router(auth_router)
    app.include_router(erase_router)
    app.include_router(notes_router)
    app.include_router(cards_router)
    app.include_router(credentials_router)

    logger.info("app.ready name=%s version=%s", APP_NAME, APP_VERSION)
    return app
