from __future__ import annotations
import logging
import re
import time
import uuid

from fastapi import FastAPI, Request

logger = logging.getLogger("apigateway")

# caller-supplied ids are echoed into logs, so only short opaque tokens are trusted
_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{8,64}$")

# responses may carry decrypted card and credential fields
NO_STORE_HEADERS = {
    "Cache-Control": "no-store",
    "Pragma": "no-cache",
}


def request_id_for(request: Request) -> str:
    supplied = request.headers.get("x-request-id", "")
    return supplied if _REQUEST_ID.match(supplied) else uuid.uuid4().hex


def install_request_context(app: FastAPI) -> None:
    """
    Tags each request with an id, forbids caching of the response and logs one
    line per request. Headers and bodies are never logged.
    """

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        start = time.perf_counter()
        request_id = request_id_for(request)
        request.state.request_id = request_id
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.failed id=%s method=%s path=%s", request_id, request.method, request.url.path,
            )
            raise
        response.headers["x-request-id"] = request_id
        response.headers.update(NO_STORE_HEADERS)
        logger.info(
            "request id=%s method=%s path=%s status=%s duration_ms=%d",
            request_id, request.method, request.url.path, response.status_code,
            int((time.perf_counter() - start) * 1000),
        )
        return response
