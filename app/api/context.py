"""
Application context.
Owns: The per-process collaborators handed to every request handler.
"""

from dataclasses import dataclass

from fastapi import Request

from app.api.auth.passwords import PasswordHasher
from app.api.auth.tokens import TokenService
from app.api.config import Settings
from app.api.db import RecordStore, create_record_store


@dataclass(frozen=True)
class AppContext:
    settings: Settings
    store: RecordStore
    hasher: PasswordHasher
    tokens: TokenService


def build_context(settings: Settings, store: RecordStore | None = None) -> AppContext:
    """Construct the context once at startup. ``store`` overrides the configured backend."""
    return AppContext(
        settings=settings,
        store=store or create_record_store(settings),
        hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
        tokens=TokenService(settings.secret_key, ttl_seconds=settings.token_ttl_seconds),
    )


def get_context(request: Request) -> AppContext:
    return request.app.state.context
