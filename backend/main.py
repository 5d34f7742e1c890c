"""
Application factory for FastAPI.

This module provides a factory function for creating FastAPI application instances.
The factory pattern allows for:
- Easy testing with custom settings
- Multiple app instances with different configurations
- Clear separation of app creation from route definitions

Each app owns one TTLCache (``app.state.cache``) shared by every request;
its background sweeper runs for the lifetime of the app.

Usage:
    from backend.main import create_app
    from backend.settings import Settings

    # Default app (uses get_settings())
    app = create_app()

    # Test app with custom settings
    test_settings = Settings(environment="test", _env_file=None)
    test_app = create_app(settings=test_settings)
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.core.cache import TTLCache
from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings)

    # Initialize Sentry for error tracking
    _init_sentry(settings)

    cache = TTLCache(
        default_ttl_seconds=settings.session_cache_ttl_seconds,
        max_entries=settings.cache_max_entries,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cache.start_sweeper(settings.cache_sweep_interval_seconds)
        logger.info("Cache sweeper started (every %ss)", settings.cache_sweep_interval_seconds)
        try:
            yield
        finally:
            await cache.stop_sweeper()

    # Create FastAPI app
    app = FastAPI(
        title="Training Progression API",
        description="Session progression and training analytics API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.cache = cache

    # Configure CORS middleware
    _configure_cors(app, settings)

    # Include API routers
    _include_routers(app)

    return app


def _configure_logging(settings: Settings) -> None:
    """Set the root log level from settings."""
    logging.basicConfig(level=settings.log_level)
    logging.getLogger().setLevel(settings.log_level)


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
            profiles_sample_rate=0.1,
        )
        logger.info("Sentry initialized for training-api")


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware for the application."""
    trusted_origins = [
        "http://localhost:3000",
        "http://localhost:3001",
    ]
    trusted_origins.extend(settings.cors_origins_list)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=trusted_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        analytics_router,
        completions_router,
        health_router,
        progression_router,
    )

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    # Domain routers (with prefixes defined in each router)
    app.include_router(progression_router)
    app.include_router(completions_router)
    app.include_router(analytics_router)


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
