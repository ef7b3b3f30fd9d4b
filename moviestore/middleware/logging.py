"""
Movie Store — Request Logging Middleware
=========================================

What:  One access log line for every movie API request.
How:   Measures the time spent downstream and logs method, path, status,
       response size, duration, request ID and client address on the
       `moviestore.access` logger. Request bodies are never logged.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Empty responses:
    A miss on GET/PUT /movies/{id} and every DELETE answer 200 with no
    body, so the status alone cannot tell a hit from a miss. The line says
    "empty" instead of a byte count for those, and carries the movie ID
    from the path as a structured field.

Example lines:
    2026-01-15T12:00:00 [INFO] moviestore.access: GET /movies/1 200 97B 0.4ms [1a2b3c4d] from 127.0.0.1
    2026-01-15T12:00:01 [INFO] moviestore.access: GET /movies/999 200 empty 0.2ms [5e6f7a8b] from 127.0.0.1
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from moviestore.middleware.request_id import request_id_var

logger = logging.getLogger("moviestore.access")

MOVIE_PATH_PREFIX = "/movies/"


def movie_id_from_path(path: str) -> Optional[str]:
    """The `{id}` segment of /movies/{id}, or None for any other path."""
    if not path.startswith(MOVIE_PATH_PREFIX):
        return None
    movie_id = path[len(MOVIE_PATH_PREFIX):]
    if not movie_id or "/" in movie_id:
        return None
    return movie_id


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request.

    Level by status class: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
    Health checks and API docs are skipped.
    """

    SKIPPED_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        length = response.headers.get("content-length")
        size = "empty" if length == "0" else f"{length}B" if length else "streamed"
        rid = request_id_var.get("")
        client_ip = request.client.host if request.client else "unknown"

        logger.log(
            log_level,
            "%s %s %d %s %.1fms [%s] from %s",
            request.method,
            path,
            status,
            size,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "movie_id": movie_id_from_path(path),
                "status": status,
                "empty_body": length == "0",
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
