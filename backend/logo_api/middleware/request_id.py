"""
Logo Designer Backend — Request ID Middleware
===============================================

What:  Tags each request with a short correlation id and echoes it back in
       the `X-Request-ID` response header.
Why:   Mobile crash reports include the header, so support can find the
       matching server log lines (access log and assembler errors alike).
How:   Reuses a client-supplied `X-Request-ID`, otherwise generates one.
       The id is kept in a ContextVar for loggers and in `request.state` for
       handlers.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests share a thread but not this value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


def new_request_id() -> str:
    # 8 hex chars are enough to correlate log lines
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns the request id before any other processing sees the request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
