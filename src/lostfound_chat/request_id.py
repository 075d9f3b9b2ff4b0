"""Request id shared by the store middleware and the store clients."""
from __future__ import annotations

import uuid
from contextvars import ContextVar

HEADER = "X-Request-ID"

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def current_request_id() -> str:
    """Id of the request being handled, or a fresh one outside a request."""
    return correlation_id_ctx.get() or uuid.uuid4().hex
