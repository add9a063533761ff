"""
Per-request access log.

Every request gets a request id (the caller's ``X-Request-ID`` or a fresh
one) bound into structlog's contextvars, so service events logged while
handling it carry the same id. One ``request_completed`` line is written
per response with the caller's profile id and role once the auth gate has
resolved them; 5xx responses are logged at warning level.
"""

from __future__ import annotations

import time
import uuid
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

REQUEST_ID_HEADER = "X-Request-ID"

logger = structlog.get_logger(__name__)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 1)


def _caller(request: Request) -> dict[str, Any]:
    # set by the auth gate; absent on /health and rejected requests
    user = getattr(request.state, "user", None)
    if user is None:
        return {}
    return {"user_id": user.user_id, "role": user.role}


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("request_failed", duration_ms=_elapsed_ms(started), **_caller(request))
            raise

        emit = logger.warning if response.status_code >= 500 else logger.info
        emit(
            "request_completed",
            status=response.status_code,
            duration_ms=_elapsed_ms(started),
            client=request.client.host if request.client else None,
            **_caller(request),
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
