"""
FastAPI Application Entry Point.
Owns: App factory, router mounting, middleware setup, startup checks.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.config import Settings, get_settings
from app.api.context import build_context
from app.api.db import RecordStore
from app.api.errors import register_exception_handlers
from app.api.middleware import (
    CORRELATION_HEADER,
    CorrelationMiddleware,
    LoggingMiddleware,
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
    SlidingWindowRateLimiter,
)
from app.api.routes import index_router, todos_router, users_router
from shared.logging import configure_root_logger

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    configure_root_logger("api", settings.log_level)


def create_app(settings: Settings | None = None, store: RecordStore | None = None) -> FastAPI:
    """
    Build the API.

    Usage:
        uvicorn app.api.main:create_app --factory

    ``store`` replaces the configured record store backend.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Never serve traffic without a reachable store
        try:
            context = build_context(settings, store=store)
            context.store.ping()
        except Exception:
            logger.critical(
                "Record store unreachable, aborting startup",
                extra={"store_backend": settings.store_backend},
            )
            raise

        app.state.context = context
        logger.info(
            "Todo API ready",
            extra={"store_backend": settings.store_backend, "port": settings.api_port},
        )
        yield

    app = FastAPI(
        title="Todo API",
        version="1.0.0",
        docs_url="/docs" if settings.service_env != "prod" else None,
        redoc_url="/redoc" if settings.service_env != "prod" else None,
        openapi_url="/openapi.json" if settings.service_env != "prod" else None,
        lifespan=lifespan,
    )

    rate_limiter = SlidingWindowRateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.state.rate_limiter = rate_limiter

    # Middleware (order matters: last added = outermost)
    app.add_middleware(RateLimitMiddleware, limiter=rate_limiter)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[CORRELATION_HEADER],
    )
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Exception handlers
    register_exception_handlers(app)

    # Routers
    app.include_router(index_router)
    app.include_router(users_router)
    app.include_router(todos_router)

    return app
