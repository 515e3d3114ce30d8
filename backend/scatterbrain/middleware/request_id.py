"""
ScatterBrain Backend - Request ID Middleware
============================================

What:  Assigns a correlation id to each request and returns it in the
       X-Request-ID response header.
How:   Uses the client-supplied X-Request-ID if present and at most 64
       characters, otherwise 8 hex characters of a fresh UUID. The value is
       stored in a ContextVar for loggers and exception handlers, and on
       request.state for route handlers.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

# Longer client ids are replaced; they are echoed into logs and error bodies.
MAX_REQUEST_ID_LENGTH = 64


def resolve_request_id(supplied: Optional[str]) -> str:
    """Client id when present and short enough, otherwise a fresh 8-char id."""
    if supplied and len(supplied) <= MAX_REQUEST_ID_LENGTH:
        return supplied
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
