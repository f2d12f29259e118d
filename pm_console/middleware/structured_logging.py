# pm_console/middleware/structured_logging.py
from __future__ import annotations

import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

log = logging.getLogger("pm_console.request")


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    One log line per screen/dashboard request: method, path, query,
    status_code, latency_ms. The request id is attached by the JSON
    formatter from the context var, so this must run inside RequestIdMiddleware.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        t0 = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            log.info(
                "http_request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "query": str(request.url.query) if request.url.query else "",
                    "status_code": status_code,
                    "latency_ms": int((time.perf_counter() - t0) * 1000),
                },
            )
