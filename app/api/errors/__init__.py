from .exceptions import (
    AppException,
    ForbiddenException,
    HashingException,
    InternalException,
    NotFoundException,
    RateLimitedException,
    StoreException,
    UnauthorizedException,
    ValidationException,
)
from .handlers import format_validation_errors, register_exception_handlers

__all__ = [
    "AppException",
    "ForbiddenException",
    "HashingException",
    "InternalException",
    "NotFoundException",
    "RateLimitedException",
    "StoreException",
    "UnauthorizedException",
    "ValidationException",
    "format_validation_errors",
    "register_exception_handlers",
]
