from __future__ import annotations
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from vault.core.contracts import ErrorPayload, MetaPayload, UWFResponse
from vault.core.errors import DecryptionError, ValidationError, VaultError

logger = logging.getLogger("apigateway")


def _envelope(request: Request, status_code: int, payload: dict) -> JSONResponse:
    meta = MetaPayload(request_id=getattr(request.state, "request_id", None))
    body = UWFResponse(ok=False, error=ErrorPayload(**payload), meta=meta)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def vault_error_handler(request: Request, exc: VaultError) -> JSONResponse:
    if isinstance(exc, DecryptionError):
        # stored data is unreadable under the active key; keep details server-side
        logger.error("request.decryption_failed path=%s", request.url.path)
        return _envelope(request, exc.status_code, DecryptionError().to_payload())
    return _envelope(request, exc.status_code, exc.to_payload())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = ValidationError(details={"errors": [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()
    ]})
    return _envelope(request, err.status_code, err.to_payload())


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(VaultError, vault_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
