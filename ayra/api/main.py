"""FastAPI application setup and configuration."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from ayra.api.middleware.error_handler import (
    domain_exception_handler,
    generic_exception_handler,
    permission_exception_handler,
    validation_exception_handler,
)
from ayra.api.middleware.logging import LoggingMiddleware, setup_logging
from ayra.api.routes import alerts, auth, health, map_markers, users
from ayra.config import get_settings
from ayra.services.database import initialize_database, shutdown_database
from ayra.services.exceptions import AyraError

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()

    # Startup
    setup_logging(log_level=settings.log_level, log_format=settings.log_format)

    db_manager = initialize_database(settings.database_url)
    await db_manager.initialize_async()
    if settings.create_tables_on_startup:
        await db_manager.create_tables()

    logger.info("application_started", version=settings.app_version)

    yield

    # Shutdown
    await shutdown_database()


settings = get_settings()

# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Flood alert map markers, alerts with safety guidance, and user accounts",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# ========== CORS Configuration ==========

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["Authorization", "Content-Type"],
)

# ========== Custom Middleware ==========

# Logging middleware (must be first to log all requests)
app.add_middleware(LoggingMiddleware)

# ========== Exception Handlers ==========

app.add_exception_handler(AyraError, domain_exception_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(PermissionError, permission_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# ========== Route Registration ==========

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(map_markers.router)
app.include_router(users.router)
app.include_router(alerts.router)

# ========== Root Endpoint ==========


@app.get(
    "/",
    tags=["root"],
    summary="API root",
    description="Returns API information and available endpoints",
)
async def root() -> dict:
    """API root endpoint.

    Returns:
        API information and version
    """
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "description": "Report flood areas on a map and share alerts with safety guidance",
        "documentation": {
            "openapi": "/openapi.json",
            "swagger": "/docs",
            "redoc": "/redoc",
        },
        "health": {
            "liveness": "/v1/liveness",
            "readiness": "/v1/readiness",
            "health": "/v1/health",
        },
    }


# ========== Development Server ==========

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ayra.api.main:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
        log_level="info",
    )
