"""
Movie Store — Request ID Middleware
====================================

What:  Assigns an ID to each incoming request and echoes it in the response.
Why:   The access log line and any error body of one request share the ID.
How:   Reuses the client's X-Request-ID header when it is a short token,
       otherwise generates one, stores it in a ContextVar and
       request.state, and returns it as a header.

Client-supplied IDs end up verbatim in log lines and JSON error bodies, so
only letters, digits, '.', '_' and '-' are accepted, up to 64 characters.
Anything else is replaced by a generated ID.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")

# Coroutine-local: concurrent requests on the same thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    """First 8 hex characters of a UUID4."""
    return uuid.uuid4().hex[:8]


def resolve_request_id(supplied: Optional[str]) -> str:
    """The client's ID if it is an acceptable token, else a fresh one."""
    if supplied and _VALID_REQUEST_ID.fullmatch(supplied):
        return supplied
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags every request and response with a correlation ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
