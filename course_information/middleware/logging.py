"""
Course Information Service — Request Logging Middleware
=========================================================

What:  One access log line per request with status and duration.
How:   Times the downstream call and logs at a level chosen by status class:
       5xx → ERROR, 4xx → WARNING, otherwise INFO.
When:  Runs inside RequestIDMiddleware so the request id is available.

Logged fields: method, path, query keys, status, duration_ms, request_id,
client_ip. Query values are not logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from course_information.middleware.request_id import request_id_var

logger = logging.getLogger("course_information.access")

# Probes hit these every few seconds
UNLOGGED_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs structured information about each HTTP request and response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in UNLOGGED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "query_keys": sorted(request.query_params.keys()),
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
