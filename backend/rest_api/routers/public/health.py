"""
Health check endpoints for the REST API.
Basic, detailed (database probe), readiness and liveness.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from shared.config.settings import settings
from shared.infrastructure.db import SessionLocal, engine
from shared.utils.health import (
    HealthStatus,
    aggregate_health_checks,
    health_check_with_timeout,
)
from rest_api.models import utcnow


router = APIRouter(prefix="/api", tags=["health"])

SERVICE_NAME = "gym-api"


@router.get("/health")
def health_check():
    """
    Basic health check endpoint.
    Returns service status without checking dependencies.
    """
    return {
        "status": HealthStatus.HEALTHY.value,
        "service": SERVICE_NAME,
        "environment": settings.environment,
    }


@health_check_with_timeout(timeout=3.0, component="database")
async def check_database_health() -> dict:
    """Check database connectivity."""
    with SessionLocal() as db:
        db.execute(text("SELECT 1"))
    return {"dialect": engine.dialect.name}


@router.get("/health/detailed")
async def detailed_health_check():
    """
    Health check that verifies connectivity to the database.

    Returns 503 Service Unavailable if the database is down.
    """
    report = await aggregate_health_checks([check_database_health()])
    checks = {
        "service": SERVICE_NAME,
        "environment": settings.environment,
        "status": report["status"],
        "timestamp": utcnow().isoformat(),
        "dependencies": report["components"],
    }

    if report["status"] != HealthStatus.HEALTHY.value:
        return JSONResponse(content=checks, status_code=503)

    return checks


@router.get("/ready")
async def readiness_check():
    """
    Readiness probe: the API can serve traffic once the database answers.
    """
    result = await check_database_health()
    if not result.healthy:
        return JSONResponse(
            content={"status": "not_ready", "database": result.to_dict()},
            status_code=503,
        )
    return {"status": "ready"}


@router.get("/alive")
def liveness_check():
    """Liveness probe: the process is up."""
    return {"status": "alive"}
