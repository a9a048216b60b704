"""
Rate limiting middleware.
Owns: Per-client request caps over a rolling window.
"""

import logging
import math
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from app.api.errors import RateLimitedException
from shared.logging import hash_ip

logger = logging.getLogger(__name__)

DEFAULT_MAX_REQUESTS = 100
DEFAULT_WINDOW_SECONDS = 900  # 15 minutes


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    retry_after: int


class SlidingWindowRateLimiter:
    """
    Rolling-window request counter keyed by client.

    Each key keeps the timestamps of its requests inside the window;
    a request is allowed while fewer than ``max_requests`` remain.
    """

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = clock()

    def _evict(self, hits: deque[float], now: float) -> None:
        cutoff = now - self.window_seconds
        while hits and hits[0] <= cutoff:
            hits.popleft()

    def _sweep(self, now: float) -> None:
        """Drop keys whose requests have all left the window."""
        for key in list(self._hits):
            self._evict(self._hits[key], now)
            if not self._hits[key]:
                del self._hits[key]
        self._last_sweep = now

    def hit(self, key: str) -> RateLimitDecision:
        now = self._clock()
        if now - self._last_sweep >= self.window_seconds:
            self._sweep(now)

        hits = self._hits.setdefault(key, deque())
        self._evict(hits, now)

        if len(hits) >= self.max_requests:
            retry_after = math.ceil(hits[0] + self.window_seconds - now)
            return RateLimitDecision(False, self.max_requests, 0, max(retry_after, 1))

        hits.append(now)
        return RateLimitDecision(True, self.max_requests, self.max_requests - len(hits), 0)

    def reset(self) -> None:
        self._hits.clear()


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, limiter: SlidingWindowRateLimiter):
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        client_ip = request.client.host if request.client else "unknown"
        decision = self.limiter.hit(client_ip)

        if not decision.allowed:
            logger.warning(
                "Rate limit exceeded",
                extra={
                    "client_ip_hash": hash_ip(client_ip),
                    "http_path": request.url.path,
                    "correlation_id": getattr(request.state, "correlation_id", None),
                },
            )
            error = RateLimitedException("Too many requests, please try again later.")
            return JSONResponse(
                status_code=error.status_code,
                content=error.to_dict(),
                headers={
                    "Retry-After": str(decision.retry_after),
                    "RateLimit-Limit": str(decision.limit),
                    "RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["RateLimit-Limit"] = str(decision.limit)
        response.headers["RateLimit-Remaining"] = str(decision.remaining)
        return response
