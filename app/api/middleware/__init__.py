from .correlation import CORRELATION_HEADER, CorrelationMiddleware, resolve_correlation_id
from .logging import LoggingMiddleware, access_log_level
from .rate_limit import RateLimitMiddleware, SlidingWindowRateLimiter
from .security_headers import SecurityHeadersMiddleware

__all__ = [
    "CORRELATION_HEADER",
    "CorrelationMiddleware",
    "LoggingMiddleware",
    "RateLimitMiddleware",
    "SecurityHeadersMiddleware",
    "SlidingWindowRateLimiter",
    "access_log_level",
    "resolve_correlation_id",
]
