from .service import AccountService, TokenService, SystemClock
from .crypto import HS256TokenSigner, PasswordHasher
from .config import AuthSettings
from .deps import IdentityResolver, extract_bearer_token, get_current_user
from .routes import router as auth_router, erase_router

__all__ = [
    "AccountService",
    "TokenService",
    "SystemClock",
    "HS256TokenSigner",
    "PasswordHasher",
    "AuthSettings",
    "IdentityResolver",
    "extract_bearer_token",
    "get_current_user",
    "auth_router",
    "erase_router",
]
