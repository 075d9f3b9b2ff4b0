"""Per-request id and timing.

Every request is tagged with an ``X-Request-ID`` (the caller's, when it sends
one) and produces one log line. Polling clients hit the store every few
seconds, so routine successful GETs log at DEBUG; slow or failed requests are
raised to WARNING.
"""
from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from lostfound_chat.config import settings
from lostfound_chat.request_id import HEADER, correlation_id_ctx

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        cid = request.headers.get(HEADER) or uuid.uuid4().hex
        token = correlation_id_ctx.set(cid)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            correlation_id_ctx.reset(token)

        response.headers[HEADER] = cid
        response.headers["Server-Timing"] = f"app;dur={elapsed_ms:.1f}"
        logger.log(
            _level_for(request.method, response.status_code, elapsed_ms),
            "[%s] %s %s %s %.1fms",
            cid,
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


def _level_for(method: str, status_code: int, elapsed_ms: float) -> int:
    if status_code >= 500 or elapsed_ms >= settings.SLOW_REQUEST_MS:
        return logging.WARNING
    if method == "GET" and status_code < 400:
        return logging.DEBUG
    return logging.INFO
