"""Observability API endpoints.

Provides the liveness probe, readiness probe and Prometheus metrics.
"""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy.orm import Session

from database import get_db
from .health import HealthStatus, check_database_health

router = APIRouter(tags=["Observability"])


@router.get(
    "/metrics",
    summary="Prometheus metrics endpoint",
    include_in_schema=False,
)
def metrics():
    """Expose Prometheus metrics in text exposition format."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


@router.get(
    "/health",
    summary="Liveness probe",
    description="Static status payload; touches no dependencies",
)
def health_check():
    return {"status": "ok"}


@router.get(
    "/ready",
    summary="Readiness probe",
    description="Returns readiness status based on database connectivity",
)
def readiness_check(db: Session = Depends(get_db)):
    """Check if the application can serve traffic.

    Returns 503 while the database is unreachable.
    """
    db_health = check_database_health(db)

    if db_health.status == HealthStatus.HEALTHY:
        return {
            "status": "ready",
            "message": "Application is ready to serve traffic",
            "latency_ms": db_health.latency_ms,
        }
    return JSONResponse(
        content={
            "status": "not_ready",
            "message": db_health.message
        },
        status_code=503
    )
