"""
Exception handlers.
Owns: Mapping exceptions to HTTP responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .exceptions import AppException, ValidationException

logger = logging.getLogger(__name__)


def format_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """
    Flatten pydantic error dicts into ``{field, reason}`` pairs.

    The leading ``body``/``query``/``path`` location segment is dropped so
    callers see the payload field name only.
    """
    violations = []
    for e in errors:
        loc = [str(part) for part in e.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        violations.append({"field": ".".join(loc) or "body", "reason": e.get("msg", "invalid")})
    return violations


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    correlation_id = getattr(request.state, "correlation_id", None)
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Application error",
        extra={
            "error_code": exc.error_code,
            "reason": exc.message,
            "correlation_id": correlation_id,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    correlation_id = getattr(request.state, "correlation_id", None)
    violations = format_validation_errors(list(exc.errors()))
    logger.warning(
        "Validation error",
        extra={
            "errors": violations,
            "correlation_id": correlation_id,
        },
    )
    error = ValidationException("Request validation failed", details={"errors": violations})
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict(),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    correlation_id = getattr(request.state, "correlation_id", None)
    logger.exception(
        "Unhandled exception",
        extra={"correlation_id": correlation_id},
    )
    return JSONResponse(
        status_code=500,
        content={
            "error_code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "retryable": True,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
