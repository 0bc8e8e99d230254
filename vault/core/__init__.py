from .contracts import ErrorPayload, MetaPayload, UWFResponse
from .errors import (
    VaultError,
    ValidationError,
    UnauthorizedError,
    InvalidTokenError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    DecryptionError,
    ConfigurationError,
)

__all__ = [
    "ErrorPayload",
    "MetaPayload",
    "UWFResponse",
    "VaultError",
    "ValidationError",
    "UnauthorizedError",
    "InvalidTokenError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "DecryptionError",
    "ConfigurationError",
]
