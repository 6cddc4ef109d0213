"""
FastAPI application entry point for the portfolio dashboard backend.

On startup the refresh scheduler publishes a first snapshot and, when
enabled, starts auto-refresh at the configured interval.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware

from .api.dependencies.portfolio_deps import build_refresh_scheduler
from .api.dependencies.rate_limit import limiter
from .api.error_handlers import register_exception_handlers
from .api.health import VERSION
from .api.health import router as health_router
from .api.portfolio import router as portfolio_router
from .core.config import get_settings
from .core.exceptions import AppError

logging.basicConfig(level=get_settings().log_level)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the refresh scheduler, publish a first snapshot, start the timer."""
    settings = get_settings()

    logger.info("Starting portfolio dashboard backend", environment=settings.environment)

    scheduler = build_refresh_scheduler(settings)
    app.state.refresh_scheduler = scheduler

    try:
        await scheduler.initialize()
    except AppError as e:
        # Serve anyway: endpoints answer 503 until a refresh succeeds
        logger.warning("Initial portfolio load failed", error=e.message)

    if settings.auto_refresh_enabled:
        scheduler.start(settings.refresh_interval_ms)

    try:
        yield
    finally:
        await scheduler.shutdown()
        logger.info("Portfolio refresh scheduler stopped")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Portfolio Dashboard API",
        description="Holdings enriched with market quotes, refreshed on a timer",
        version=VERSION,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.state.limiter = limiter
    # Per-route limits apply regardless; default limits need the middleware
    if settings.environment != "test":
        app.add_middleware(SlowAPIMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router, prefix="/api", tags=["health"])
    app.include_router(portfolio_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint for basic connectivity check."""
        return {
            "message": "Portfolio Dashboard API",
            "version": VERSION,
            "environment": settings.environment,
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "portfolio_dashboard.main:app",
        host="0.0.0.0",  # nosec B104 - Required for Docker container
        port=8000,
        reload=settings.is_development,
        log_config=None,
    )
