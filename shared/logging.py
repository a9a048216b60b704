"""
Unified structured logging for the Todo API.

Every module logs through the standard ``logging.getLogger(__name__)``;
the formatter installed here turns each record into one JSON object.

Usage:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Todo created", extra={
        "todo_id": todo_id,
        "correlation_id": correlation_id,
        "user_id_hash": hash_user_id(user_id),
    })

PII BLOCKLIST - NEVER LOG:
- Passwords or password hashes
- Tokens or the signing secret
- User email addresses
- Raw client IP addresses (use hash_ip())
- Raw user_id (use hash_user_id())
"""

from __future__ import annotations

import hashlib
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict


def hash_user_id(user_id: str) -> str:
    """
    Create anonymized user identifier.

    Returns first 16 characters of SHA-256 hash.
    Sufficient for correlation without exposing raw ID.
    """
    if not user_id:
        return "unknown"
    return hashlib.sha256(str(user_id).encode()).hexdigest()[:16]


def hash_ip(ip_address: str) -> str:
    """Hash a client IP address for rate-limit correlation."""
    if not ip_address:
        return "unknown"
    return hashlib.sha256(ip_address.encode()).hexdigest()[:16]


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for the Todo API log schema.

    Produces logs in format:
    {
        "timestamp": "2026-01-30T14:23:45.123Z",
        "level": "INFO",
        "service": "api",
        "logger": "app.api.routes.todos",
        "message": "Todo created",
        ...optional fields...
    }
    """

    # Fields that are allowed in log output
    ALLOWED_EXTRA_FIELDS = frozenset([
        "correlation_id",
        "user_id_hash",
        "client_ip_hash",
        "todo_id",
        "collection",
        "latency_ms",
        "error_code",
        "reason",
        "http_method",
        "http_path",
        "http_status",
        "store_backend",
        "port",
        "errors",
        "error",
        "extra",
    ])

    # Fields that must NEVER appear (safety check)
    BLOCKED_FIELDS = frozenset([
        "user_id",  # Use user_id_hash instead
        "email",
        "ip_address",
        "password",
        "password_hash",
        "secret",
        "secret_key",
        "token",
        "authorization",
    ])

    def __init__(self, service: str):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string."""
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in self.ALLOWED_EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value

        # Replace with warning, don't expose the value
        for field in self.BLOCKED_FIELDS:
            if hasattr(record, field):
                log_entry["_pii_warning"] = f"Blocked field '{field}' was stripped"

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, separators=(",", ":"), ensure_ascii=False, default=str)


def configure_root_logger(service: str, level: str = "INFO") -> None:
    """
    Configure the root logger with structured formatting.

    Call this once at application startup.

    Args:
        service: Service identifier
        level: Log level string (DEBUG, INFO, WARN, ERROR)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter(service))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(numeric_level)

    # Suppress noisy libraries
    for lib in ["httpx", "httpcore", "hpack", "urllib3", "asyncio"]:
        logging.getLogger(lib).setLevel(logging.WARNING)
