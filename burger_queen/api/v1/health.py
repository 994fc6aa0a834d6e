"""Health check endpoint with database connectivity check."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from burger_queen.core.config import APP_VERSION, settings
from burger_queen.core.database import check_db_connected, get_db
from burger_queen.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        version=APP_VERSION,
        environment=settings.APP_ENV,
        database=db_status,
    )
