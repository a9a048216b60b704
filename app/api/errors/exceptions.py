"""
Exception definitions.
Owns: Application-specific exception classes.
"""

from typing import Any


class AppException(Exception):
    error_code: str = "INTERNAL_ERROR"
    status_code: int = 500
    retryable: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "retryable": self.retryable,
            **self.details,
        }


class ValidationException(AppException):
    """Raised when a payload violates its schema; details carry the field list."""
    error_code = "VALIDATION_ERROR"
    status_code = 422
    retryable = False


class UnauthorizedException(AppException):
    """No credential was supplied."""
    error_code = "UNAUTHORIZED"
    status_code = 401
    retryable = False


class ForbiddenException(AppException):
    """A credential was supplied but is malformed, tampered or expired."""
    error_code = "FORBIDDEN"
    status_code = 403
    retryable = False


class NotFoundException(AppException):
    error_code = "NOT_FOUND"
    status_code = 404
    retryable = False


class RateLimitedException(AppException):
    error_code = "RATE_LIMITED"
    status_code = 429
    retryable = True


class HashingException(AppException):
    """Raised when the password hashing backend fails."""
    error_code = "HASHING_ERROR"
    status_code = 500
    retryable = False


class StoreException(AppException):
    """Raised when a record store call fails."""
    error_code = "STORE_ERROR"
    status_code = 500
    retryable = True


class InternalException(AppException):
    error_code = "INTERNAL_ERROR"
    status_code = 500
    retryable = True
