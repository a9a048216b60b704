"""
Correlation ID middleware.
Owns: Per-request trace id, accepted from the caller or minted here.
"""

import re
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

CORRELATION_HEADER = "X-Correlation-ID"

# Caller-supplied ids are written into log lines
_SAFE_CORRELATION_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def resolve_correlation_id(supplied: str | None) -> str:
    """Keep a well-formed caller id, otherwise mint a UUID4."""
    if supplied and _SAFE_CORRELATION_ID.match(supplied):
        return supplied
    return str(uuid.uuid4())


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Stores the id on ``request.state`` and echoes it on every response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.correlation_id = resolve_correlation_id(
            request.headers.get(CORRELATION_HEADER)
        )
        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = request.state.correlation_id
        return response
