"""
Perks API — Access Log Middleware
==================================

What:  One line per HTTP request on the `perks.access` logger.
How:   Times the rest of the stack and logs
           GET /api/perks?title=Gym 200 3.2ms rid=a1b2c3d4
       at INFO for 2xx/3xx, WARNING for 4xx and ERROR for 5xx. A request
       that escapes every handler is logged as 500 before the exception
       continues outward. Request bodies are never logged.

/health is not logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from perks_api.middleware.request_id import request_id_var

logger = logging.getLogger("perks.access")

UNLOGGED_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request.method, target, 500, start)
            raise

        self._log(request.method, target, response.status_code, start)
        return response

    @staticmethod
    def _log(method: str, target: str, status: int, start: float) -> None:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms rid=%s",
            method,
            target,
            status,
            elapsed_ms,
            request_id_var.get(""),
        )
