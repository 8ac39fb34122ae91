"""
Field Manager Backend: Access Log Middleware
============================================

What:  Writes one line to the "fieldmanager.access" logger per request.
Who:   Wrapped by RequestIDMiddleware, so request_id_var is already set.

Line format:
    PUT /api/fields/3 409 4.2ms [5c1f0a9e] from 127.0.0.1

    The same values are attached to the record as `extra` attributes
    (request_id, method, path, status, duration_ms, client_ip) for
    formatters that emit structured output.

Level by outcome:
    5xx → ERROR, 4xx → WARNING, otherwise INFO

Bodies are never logged: user payloads carry phone numbers and emails.
"""

import logging
import time
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from fieldmanager.middleware.request_id import request_id_var

access_logger = logging.getLogger("fieldmanager.access")


def level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access logging; paths in `quiet_paths` (load balancer probes) are not logged."""

    def __init__(self, app: ASGIApp, quiet_paths: Iterable[str] = ("/health",)):
        super().__init__(app)
        self.quiet_paths = frozenset(quiet_paths)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.quiet_paths:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        entry = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": elapsed_ms,
            "client_ip": request.client.host if request.client else "unknown",
        }
        access_logger.log(
            level_for_status(response.status_code),
            "%(method)s %(path)s %(status)d %(duration_ms).1fms [%(request_id)s] from %(client_ip)s",
            entry,
            extra=entry,
        )
        return response
