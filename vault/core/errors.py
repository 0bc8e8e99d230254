from __future__ import annotations
from typing import Any, Dict, Optional


class VaultError(Exception):
    """Base for every domain error raised by the vault components."""
    type: str = "INTERNAL"
    code: str = "internal_error"
    message: str = "Internal server error"
    status_code: int = 500

    def __init__(self, message: Optional[str] = None, *, details: Optional[Dict[str, Any]] = None):
        if message is not None:
            self.message = message
        self.details = details
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "code": self.code,
            "message": self.message,
            "details": self.details or {},
        }


class ValidationError(VaultError):
    type = "VALIDATION"
    code = "validation_error"
    message = "Validation error"
    status_code = 400


class UnauthorizedError(VaultError):
    type = "AUTH_ERROR"
    code = "unauthorized"
    message = "Unauthorized"
    status_code = 401


class InvalidTokenError(UnauthorizedError):
    code = "invalid_token"
    message = "Invalid token"


class ForbiddenError(VaultError):
    type = "AUTH_ERROR"
    code = "forbidden"
    message = "Forbidden"
    status_code = 403


class NotFoundError(VaultError):
    type = "NOT_FOUND"
    code = "not_found"
    message = "Resource not found"
    status_code = 404


class ConflictError(VaultError):
    type = "CONFLICT"
    code = "conflict"
    message = "Resource already exists"
    status_code = 409


class DecryptionError(VaultError):
    code = "decryption_failed"
    message = "Stored value could not be decrypted"


class ConfigurationError(VaultError):
    """Missing or unusable startup configuration. Fatal to the process."""
    type = "CONFIG"
    code = "config_error"
    message = "Invalid configuration"
