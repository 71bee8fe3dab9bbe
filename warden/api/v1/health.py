"""Health check endpoint with optional database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from warden.core.context import AppContext, get_context
from warden.core.database import check_db_connected, get_db
from warden.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    context: Annotated[AppContext, Depends(get_context)],
    db: Annotated[Session, Depends(get_db)],
) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=context.settings.APP_ENV,
        database=db_status,
    )
