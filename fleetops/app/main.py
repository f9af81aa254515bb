"""
FastAPI Application Entry Point.

This is the main application file for the Fleet Operations Backend.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fleetops.app.core.config import settings
from fleetops.app.core.logging_config import setup_logging
from fleetops.app.core.observability import ObservabilityMiddleware
from fleetops.app.core.redis_client import get_redis, ping_redis
from fleetops.app.api.v1.router import router as api_v1_router
from fleetops.app.db.session import engine, Base
from fleetops.app.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)

# Import models to ensure they are registered with Base
from fleetops.app.models.vehicle import Vehicle
from fleetops.app.models.driver import Driver
from fleetops.app.models.trip import Trip
from fleetops.app.models.maintenance_log import MaintenanceLog
from fleetops.app.models.expense import Expense
from fleetops.app.models.audit_log import AuditLog

logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup/shutdown.

    1. Creates database tables on startup.
    2. Disposes of the connection pool on shutdown.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Fleet Operations Backend started", extra={"version": settings.api_version})
    yield
    await engine.dispose()


# Initialize FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug,
    description="Fleet registry, dispatch, maintenance and expense tracking",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)

# Register global exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


@app.get("/health", tags=["Health"])
async def health_check(redis_client=Depends(get_redis)):
    """
    Health check endpoint.

    Reports the revocation store separately; the API keeps serving when it
    is down.

    Returns:
        dict: Status and application information
    """
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.api_version,
        "redis": "ok" if await ping_redis(redis_client) else "unavailable",
    }


# Include API v1 router
app.include_router(api_v1_router, prefix=f"/{settings.api_version}")


@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint.

    Returns:
        dict: Welcome message and API documentation links
    """
    return {
        "message": "Welcome to Fleet Operations Backend API",
        "docs": "/docs",
        "health": "/health",
    }
