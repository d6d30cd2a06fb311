"""
Application entry point.

Creates the FastAPI application and wires together:
- The process-wide AppContext (built from settings unless injected)
- Routers (one per bounded context)
- Error handlers (centralized domain-to-HTTP mapping)
- Logging configuration

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from pocketvest.application.context import AppContext, build_context
from pocketvest.core.config import Settings, settings as default_settings
from pocketvest.interfaces.health import router as health_router
from pocketvest.interfaces.identity.router import router as identity_router
from pocketvest.interfaces.news.router import router as news_router
from pocketvest.interfaces.watchlist.router import router as watchlist_router
from pocketvest.shared.errors.handlers import register_error_handlers
from pocketvest.shared.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(
    context: Optional[AppContext] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers and error handlers, and attaches the AppContext.
    This is the composition root of the application.

    Args:
        context: Pre-built context, mainly for tests. When omitted the
            context is built from settings at startup.
        settings: Settings to use instead of the module-level instance.

    Returns:
        A fully configured FastAPI application instance.
    """
    cfg = settings or default_settings
    configure_logging(level=cfg.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the context on startup if needed and release it on shutdown."""
        owns_context = getattr(app.state, "context", None) is None
        if owns_context:
            app.state.context = build_context(cfg)

        yield

        if owns_context:
            await app.state.context.aclose()
            logger.info("Application context closed.")

    app = FastAPI(
        title=cfg.project_name,
        version=cfg.version,
        docs_url="/docs" if cfg.debug else None,
        redoc_url="/redoc" if cfg.debug else None,
        lifespan=lifespan,
    )
    app.state.context = context

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(identity_router, prefix="/api/v1")
    app.include_router(watchlist_router, prefix="/api/v1")
    app.include_router(news_router, prefix="/api/v1")

    return app
