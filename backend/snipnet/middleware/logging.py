"""
Snipnet Backend — Request Logging Middleware
==============================================

What:  One access log line per HTTP request.
How:   Once the response is ready, logs the snippet operation that handled the
       request (the endpoint function name), the caller's user id when the
       request was authenticated, status, duration and request id.
When:  After RequestIDMiddleware (uses request ID for correlation).

Example:
    POST /api/snippets op=create_snippet user=u1 -> 201 4.2ms [3f2a...]
    DELETE /api/snippets/9b1e op=delete_snippet user=u2 -> 401 1.3ms [77c0...]

Request bodies are never logged: snippet code may contain secrets.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from snipnet.middleware.request_id import request_id_var

logger = logging.getLogger("snipnet.access")


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs which snippet operation ran, for whom, and how it ended.

    The router stores the matched endpoint in the ASGI scope and get_session
    stores the user id on request.state; both live in the scope this
    middleware shares with the route. Unmatched routes log op=-, anonymous
    requests log user=-. Health checks are not logged.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path == "/health":
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        endpoint = request.scope.get("endpoint")
        operation = getattr(endpoint, "__name__", "-")
        user_id = getattr(request.state, "user_id", "-")
        rid = request_id_var.get("")

        logger.log(
            _level_for(response.status_code),
            "%s %s op=%s user=%s -> %d %.1fms [%s]",
            request.method,
            request.url.path,
            operation,
            user_id,
            response.status_code,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "operation": operation,
                "user_id": user_id,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
