"""
Field Manager Backend: Request ID Middleware
============================================

What:  Tags every request with a correlation ID and returns it in the
       X-Request-ID response header.
How:   A client-supplied X-Request-ID is reused when it looks like an ID
       (letters, digits, '-', '_', '.', at most 64 chars); anything else is
       replaced by a fresh 8-character hex ID. The ID lives in
       request_id_var for loggers and error handlers, and in
       request.state.request_id for route code.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Header values end up verbatim in log lines
_ACCEPTED_ID = re.compile(r"^[A-Za-z0-9._\-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(header_value: Optional[str]) -> str:
    """The client's ID if it is well formed, otherwise a generated one."""
    if header_value and _ACCEPTED_ID.match(header_value):
        return header_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
