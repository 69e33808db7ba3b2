"""Cruder API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map CruderError → structured JSON responses
    - Every request passes the API key gate unless its path is ignored
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_application() factory: tests build apps with their own Settings
    - Middleware order: logging added last so it wraps the API key gate
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from cruder.api.error_handlers import register_error_handlers
from cruder.api.middleware import ApiKeyMiddleware, RequestLoggingMiddleware
from cruder.api.routes import health, users
from cruder.config import Settings, get_settings
from cruder.infrastructure.database import close_db, init_db
from cruder.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    if not settings.x_api_key:
        logger.warning("X_API_KEY is not set; every gated request will be rejected")
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Cruder API started")
    yield
    await close_db()
    logger.info("Cruder API shutting down")


def create_application(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    application = FastAPI(
        title="Users API",
        version="1.0.0",
        description="CRUD API for users.",
        lifespan=lifespan,
    )
    application.state.settings = settings

    application.add_middleware(
        ApiKeyMiddleware,
        api_key=settings.x_api_key,
        ignored_paths=settings.api_key_ignored_paths,
    )
    application.add_middleware(RequestLoggingMiddleware)

    # Routes — explicit registration (ExMA: no convention-over-config)
    application.include_router(health.router)
    application.include_router(users.router)

    register_error_handlers(application)
    return application


app = create_application()
