"""Health, readiness and liveness endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from catalog_api.core.config import get_settings
from catalog_api.core.database import check_db_connected, get_db
from catalog_api.schemas.common import MessageResponse
from catalog_api.schemas.health import HealthResponse

router = APIRouter()


def _now() -> str:
    return datetime.now(UTC).isoformat(timespec="seconds")


@router.get("/", response_model=HealthResponse, responses={503: {"model": HealthResponse}})
def get_health(db: Session = Depends(get_db)):
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring; 503 when the database is unreachable.
    """
    db_ok = check_db_connected(db)
    body = HealthResponse(
        status="healthy" if db_ok else "unhealthy",
        environment=get_settings().APP_ENV,
        timestamp=_now(),
        services={"api": "healthy", "database": "healthy" if db_ok else "unhealthy"},
    )
    if not db_ok:
        return JSONResponse(status_code=503, content=body.model_dump())
    return body


@router.get("/ready", response_model=MessageResponse)
def get_ready(db: Session = Depends(get_db)):
    """Ready when the database answers."""
    if not check_db_connected(db):
        return JSONResponse(status_code=503, content={"detail": "Database is not ready"})
    return MessageResponse(message="Service is ready")


@router.get("/live", response_model=MessageResponse)
def get_live() -> MessageResponse:
    return MessageResponse(message="Service is alive")


# Unversioned paths for load balancers and container health checks.
root_router = APIRouter()
root_router.add_api_route(
    "/health",
    get_health,
    methods=["GET"],
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
root_router.add_api_route("/ready", get_ready, methods=["GET"], response_model=MessageResponse)
root_router.add_api_route("/live", get_live, methods=["GET"], response_model=MessageResponse)
