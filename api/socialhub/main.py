"""Main FastAPI application for SocialHub."""

import logging
from contextlib import asynccontextmanager
from typing import Dict, Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .auth.middleware import AuthenticationMiddleware
from .config import get_settings
from .db.connection import db_manager, get_db_pool
from .errors import register_exception_handlers
from .errors.problem_details import ServiceUnavailableError
from .listings import build_listings
from .platforms import PlatformRegistry
from .routes import (
    feed_router,
    notifications_router,
    platforms_router,
    search_router,
    users_router
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=get_settings().log_format
)
logger = logging.getLogger(__name__)

# Paths reachable without a bearer token
PUBLIC_PATHS = ["/health", "/ready", "/live", "/", "/docs", "/redoc", "/openapi.json"]


async def _check_database(failure_detail: str) -> None:
    """Run `SELECT 1` on a pooled connection.

    Any failure becomes a 503 carrying only ``failure_detail``; the cause is
    logged by type so no DSN or driver message leaves the process.
    """
    timeout = get_settings().db_command_timeout
    try:
        pool = await get_db_pool()
        async with pool.acquire(timeout=timeout) as conn:
            await conn.execute("SELECT 1", timeout=timeout)
    except Exception as e:
        logger.error(f"Database check failed: {type(e).__name__}")
        raise ServiceUnavailableError(detail=failure_detail)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting SocialHub API")
    settings = get_settings()

    # Configure logging level from settings
    logging.getLogger().setLevel(getattr(logging, settings.log_level))

    try:
        await db_manager.initialize()
        logger.info("Database connection pool initialized")

        pool = await get_db_pool()
        async with pool.acquire(timeout=settings.db_command_timeout) as conn:
            await conn.execute("SELECT 1", timeout=settings.db_command_timeout)
        logger.info("Database connectivity verified")

    except Exception as e:
        logger.error(f"Failed to initialize database: {type(e).__name__}")
        raise

    yield

    # Shutdown
    logger.info("Shutting down SocialHub API")
    await db_manager.close()
    logger.info("Database connections closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Cursor-paginated feed, notification and search API for aggregated social accounts",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    # Built once and shared by reference with everything that needs lookups
    registry = PlatformRegistry.from_settings(settings)
    app.state.platform_registry = registry
    app.state.listings = build_listings(registry, settings.db_command_timeout)

    app.add_middleware(AuthenticationMiddleware, skip_paths=PUBLIC_PATHS)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        expose_headers=["Link"],
    )

    register_exception_handlers(app)

    # Register API routes with version prefix
    app.include_router(feed_router, prefix="/v1")
    app.include_router(notifications_router, prefix="/v1")
    app.include_router(search_router, prefix="/v1")
    app.include_router(platforms_router, prefix="/v1")
    app.include_router(users_router, prefix="/v1")

    @app.get("/health", tags=["Health"])
    async def health_check() -> Dict[str, Any]:
        """Health check endpoint with database connectivity test."""
        await _check_database("Database connection failed")

        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": __version__,
            "database": "connected"
        }

    @app.get("/ready", tags=["Health"])
    async def ready_check() -> Dict[str, Any]:
        """Readiness check: storage reachable and platforms configured."""
        await _check_database("Service not ready")

        return {
            "status": "ready",
            "service": settings.app_name,
            "platforms": [p.value for p in registry.platforms()]
        }

    @app.get("/live", tags=["Health"])
    async def liveness_check() -> Dict[str, str]:
        """Liveness check endpoint."""
        return {
            "status": "alive",
            "service": settings.app_name
        }

    @app.get("/", tags=["Root"])
    async def root() -> Dict[str, str]:
        """Root endpoint with API information."""
        return {
            "service": settings.app_name,
            "version": __version__,
            "docs": "/docs",
            "health": "/health"
        }

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()

    uvicorn.run(
        "socialhub.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
