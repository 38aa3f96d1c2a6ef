"""Health check endpoints for readiness and liveness probes."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from ayra.config import get_settings
from ayra.services.database import get_db_manager

router = APIRouter(tags=["health"])


async def _database_status() -> str:
    db_manager = get_db_manager()
    if db_manager is None:
        return "not_initialized"
    return "healthy" if await db_manager.health_check() else "unhealthy"


@router.get(
    "/v1/readiness",
    summary="Readiness probe",
    description="Check if the service is ready to accept requests",
    status_code=status.HTTP_200_OK,
)
async def readiness() -> JSONResponse:
    """Readiness probe endpoint.

    Returns 200 when the database answers, 503 otherwise.
    """
    checks = {"database": await _database_status()}
    all_healthy = all(value == "healthy" for value in checks.values())

    return JSONResponse(
        status_code=status.HTTP_200_OK if all_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if all_healthy else "not_ready",
            "checks": checks,
        },
    )


@router.get(
    "/v1/liveness",
    summary="Liveness probe",
    description="Check if the service is alive",
    status_code=status.HTTP_200_OK,
)
async def liveness() -> dict:
    """Liveness probe endpoint."""
    return {
        "status": "alive",
    }


@router.get(
    "/v1/health",
    summary="General health check",
    description="Comprehensive health check with detailed status",
    status_code=status.HTTP_200_OK,
)
async def health() -> dict:
    """Comprehensive health check endpoint.

    Returns:
        Service version and per-dependency status
    """
    settings = get_settings()
    db_manager = get_db_manager()

    checks = {
        "database": {
            "status": await _database_status(),
            "type": db_manager.dialect_name if db_manager is not None else None,
        }
    }

    all_healthy = all(check["status"] == "healthy" for check in checks.values())

    return {
        "status": "healthy" if all_healthy else "degraded",
        "version": settings.app_version,
        "service": "ayra-flood-alert-api",
        "checks": checks,
    }
