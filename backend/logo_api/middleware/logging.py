"""
Logo Designer Backend — Request Logging Middleware
====================================================

What:  One access-log line per request: method, path, status, duration,
       request id, language and client IP.
Why:   The mobile endpoints are read-heavy; duration per request plus the
       request id is what support needs to chase a slow or failing screen.
How:   Measures from middleware entry to response return, then logs at a
       level chosen from the status code (5xx ERROR, 4xx WARNING, else INFO).

Privacy:
    Logged:     method, path, status, duration, IP, request id, language
    Not logged: query strings, request bodies, headers
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from logo_api.middleware.localization import language_var
from logo_api.middleware.request_id import request_id_var

logger = logging.getLogger("logo_api.access")

# Probed every few seconds by the load balancer
QUIET_PATHS = {"/health"}


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log with request-id correlation and timing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get()
        lang = language_var.get()
        status = response.status_code

        logger.log(
            _level_for(status),
            "%s %s %d %.1fms [%s] lang=%s from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            lang,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "language": lang,
                "client_ip": client_ip,
            },
        )
        return response
