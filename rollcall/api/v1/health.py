"""Health check endpoint with database connectivity and session count."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rollcall.core.config import settings
from rollcall.core.database import check_db_connected, get_db
from rollcall.schemas.health import HealthResponse
from rollcall.services.session import SessionRegistry, get_session_registry

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    db: Session = Depends(get_db),
    registry: SessionRegistry = Depends(get_session_registry),
) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Unauthenticated; reports only counts.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
        active_sessions=len(registry),
    )
