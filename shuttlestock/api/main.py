"""
FastAPI application factory.

Creates and configures the main application instance.
"""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shuttlestock import __version__
from shuttlestock.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from shuttlestock.api.middleware.error_handler import setup_exception_handlers
from shuttlestock.api.routes import (
    health_router,
    inventory_router,
    pickups_router,
    settlement_router,
)
from shuttlestock.application.dto.responses import HealthResponse
from shuttlestock.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)

_start_time = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Initializes resources on startup and cleans up on shutdown.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    try:
        from shuttlestock.infrastructure.storage.sqlite import get_database
        from shuttlestock.infrastructure.storage.sqlite.migrations.migrator import (
            run_migrations,
        )

        results = await run_migrations()
        failed = [r.version for r in results if not r.success]
        if failed:
            raise RuntimeError(f"Migrations failed: {', '.join(failed)}")
        logger.info("database_initialized", applied=len(results))

        await get_database()
        logger.info("database_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    try:
        from shuttlestock.infrastructure.storage.sqlite import close_database

        await close_database()

    except Exception as e:
        logger.warning("database_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="ShuttleStock API",
        description="Shuttlecock inventory and FIFO cost settlement for badminton groups",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(inventory_router)
    app.include_router(pickups_router)
    app.include_router(settlement_router)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def root_health() -> HealthResponse:
        """Liveness check."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            uptime_seconds=time.time() - _start_time,
        )

    return app


app = create_app()
