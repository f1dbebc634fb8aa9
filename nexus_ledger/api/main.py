"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nexus_ledger import __version__
from nexus_ledger.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from nexus_ledger.api.middleware.error_handler import setup_exception_handlers
from nexus_ledger.api.routes import (
    catalog_router,
    clients_router,
    financial_router,
    health_router,
    inventory_router,
    vendors_router,
)
from nexus_ledger.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Loads the ledger on startup, flushes and closes it on shutdown.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        storage_backend=settings.storage.backend,
    )

    try:
        from nexus_ledger.application.services import get_ledger_store

        await get_ledger_store()
    except Exception as e:
        logger.error("ledger_load_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    from nexus_ledger.application.services import close_ledger_store

    await close_ledger_store()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="Nexus Ledger API",
        description="Perpetual inventory with weighted average costing, "
        "vendor/client balances and receivables aging",
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
    app.include_router(catalog_router)
    app.include_router(vendors_router)
    app.include_router(clients_router)
    app.include_router(financial_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """API info."""
        return {
            "name": settings.app_name,
            "version": __version__,
            "docs": "/docs",
        }

    # Root health endpoint (for container health checks)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        return {"status": "healthy", "version": __version__}

    return app


# Create app instance
app = create_app()
