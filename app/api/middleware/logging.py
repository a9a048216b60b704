"""
Logging middleware.
Owns: One access log line per request.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from shared.logging import hash_ip

logger = logging.getLogger(__name__)

# Probed by load balancers; logged at DEBUG only
QUIET_PATHS = frozenset({"/health"})


def access_log_level(path: str, status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if path in QUIET_PATHS:
        return logging.DEBUG
    return logging.INFO


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        latency_ms = round((time.perf_counter() - started) * 1000, 2)

        path = request.url.path
        logger.log(
            access_log_level(path, response.status_code),
            "%s %s -> %d",
            request.method,
            path,
            response.status_code,
            extra={
                "correlation_id": getattr(request.state, "correlation_id", None),
                "client_ip_hash": hash_ip(request.client.host if request.client else ""),
                "http_method": request.method,
                "http_path": path,
                "http_status": response.status_code,
                "latency_ms": latency_ms,
            },
        )
        return response
