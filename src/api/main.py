"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from src.api.middleware.error_handler import setup_exception_handlers
from src.api.routes import (
    appointments_router,
    events_router,
    health_router,
    notifications_router,
    reset_router,
    tasks_router,
)
from src.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Startup: migrate and open the database, start the notification
    scheduler, register the background rescan (which also runs once now
    when start_on_boot is set). Shutdown reverses it.
    """
    configure_logging()
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    # Initialize database
    try:
        from src.infrastructure.storage.sqlite import get_pool
        from src.infrastructure.storage.sqlite.migrations.migrator import run_migrations

        await run_migrations()
        logger.info("database_initialized")

        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    # Start notification scheduler and background task
    from src.application.background import get_background_runner, register_background_task
    from src.application.services import get_scheduler
    from src.infrastructure.notifications import start_jobstore_polling

    scheduler = get_scheduler()
    scheduler.start()
    start_jobstore_polling(scheduler)
    register_background_task(scheduler, get_background_runner())
    logger.info("scheduler_started")

    logger.info("application_started")

    yield

    # Shutdown
    logger.info("application_stopping")

    from src.application.background import reset_background_runner
    from src.application.services import reset_services

    reset_services()
    reset_background_runner()

    try:
        from src.infrastructure.storage.sqlite import close_pool, reset_stores

        await close_pool()
        reset_stores()
        logger.info("connection_pool_closed")

    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Tasks, events and appointments with local reminder scheduling",
        version=settings.app_version,
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

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(tasks_router)
    app.include_router(events_router)
    app.include_router(appointments_router)
    app.include_router(notifications_router)
    app.include_router(reset_router)

    return app


# Create app instance
app = create_app()


# Root health endpoint (for supervisor health checks)
@app.get("/health")
async def root_health() -> dict[str, str]:
    """Simple health check at root level."""
    return {
        "status": "healthy",
        "version": get_settings().app_version,
    }


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "src.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
