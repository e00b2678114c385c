"""
Course Information Service — Rate Limiting Middleware
=======================================================

What:  Per-IP sliding window rate limiter.
How:   Keeps the timestamps of each client's recent requests in memory. On each
       request, timestamps older than the window are dropped; if the remaining
       count has reached the limit the request is answered with 429 and a
       Retry-After header, otherwise it is recorded and passed on.

Algorithm: Sliding Window Log
    time:  O(k) per request, k = requests from that IP inside the window
    space: O(n × k), n = active client IPs

Order:
    Registered inside RequestIDMiddleware so rejected requests still carry
    an X-Request-ID header and a request_id in the body.

Scope:
    State is per process. Multi-worker deployments get one window per worker.
"""

import logging
import time
from collections import defaultdict
from typing import Callable, Dict, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from course_information.config import settings
from course_information.exceptions import RateLimitExceededError
from course_information.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

# Sweep idle IPs after this many recorded requests
_CLEANUP_EVERY = 1000


def rate_limit_response(exc: RateLimitExceededError, request_id: str) -> JSONResponse:
    """429 error envelope with Retry-After; shared with the app's exception handler."""
    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": exc.message,
            "details": exc.context,
            "request_id": request_id,
        },
        headers={"Retry-After": str(exc.retry_after)},
    )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Args (all default to settings):
        max_requests: Max requests per window per client IP
        window_seconds: Window duration in seconds
        enabled: When False every request passes through untouched
        clock: Time source, replaceable in tests

    Excluded paths:
        /health and the API documentation pages.
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    def __init__(
        self,
        app,
        max_requests: Optional[int] = None,
        window_seconds: Optional[int] = None,
        enabled: Optional[bool] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(app)
        self.max_requests = max_requests if max_requests is not None else settings.rate_limit_requests
        self.window_seconds = window_seconds if window_seconds is not None else settings.rate_limit_window
        self.enabled = enabled if enabled is not None else settings.rate_limit_enabled
        self._clock = clock
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._recorded = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self.enabled or request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = self._clock()
        window_start = now - self.window_seconds

        # ── Drop timestamps outside the window ────────────────────────────
        recent = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = recent

        if len(recent) >= self.max_requests:
            retry_after = int(recent[0] + self.window_seconds - now) + 1
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(recent),
                self.window_seconds,
            )
            return rate_limit_response(
                RateLimitExceededError(retry_after=retry_after),
                request_id_var.get(""),
            )

        recent.append(now)
        self._recorded += 1
        if self._recorded % _CLEANUP_EVERY == 0:
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        """Remove IPs that have no requests within the current window."""
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
