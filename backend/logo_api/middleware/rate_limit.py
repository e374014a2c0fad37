"""
Logo Designer Backend — Rate Limiting Middleware
==================================================

What:  Per-IP sliding window rate limiter.
Why:   The mobile list endpoints assemble many documents per call; a
       misbehaving client polling them must not starve everyone else.
How:   Keeps each IP's request timestamps of the last RATE_LIMIT_WINDOW
       seconds in a deque. A request arriving when the deque already holds
       RATE_LIMIT_REQUESTS entries gets a localized 429 failure envelope.

Algorithm: Sliding Window Log
    1. Drop timestamps older than the window from the left of the deque
    2. len(deque) >= limit  → reject, Retry-After = until the oldest expires
    3. otherwise            → append now, let the request through

    Single-process only: each worker keeps its own counters.
"""

import logging
import time
from collections import defaultdict, deque
from typing import Deque, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from logo_api.config import settings
from logo_api.exceptions import RateLimitExceededError
from logo_api.schemas.envelope import failure
from logo_api.services.localizer import resolve_request_language

logger = logging.getLogger(__name__)

# IPs with no request inside the window are dropped every this many requests
_CLEANUP_EVERY = 1000


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Excluded paths: /health and the OpenAPI docs, which must stay reachable.
    Runs before the localization middleware, so it resolves the language of
    its own 429 response.
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._requests: Dict[str, Deque[float]] = defaultdict(deque)
        self._seen = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        window_start = now - settings.rate_limit_window

        timestamps = self._requests[client_ip]
        while timestamps and timestamps[0] <= window_start:
            timestamps.popleft()

        if len(timestamps) >= settings.rate_limit_requests:
            retry_after = int(timestamps[0] + settings.rate_limit_window - now) + 1
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(timestamps),
                settings.rate_limit_window,
            )
            return self._rejection(request, RateLimitExceededError(retry_after=retry_after))

        timestamps.append(now)

        self._seen += 1
        if self._seen % _CLEANUP_EVERY == 0:
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    @staticmethod
    def _rejection(request: Request, exc: RateLimitExceededError) -> JSONResponse:
        lang = resolve_request_language(
            request.query_params.get("lang"), request.headers.get("accept-language")
        )
        body = failure(lang, exc.message_key, retry_after=exc.retry_after)
        return JSONResponse(
            status_code=exc.status_code,
            content=body.model_dump(exclude_none=True),
            headers={"Retry-After": str(exc.retry_after), "Content-Language": lang},
        )

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]
        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
