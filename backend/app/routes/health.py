# backend/app/routes/health.py
"""
Health check endpoints for the application.
"""

from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.orm import Session

from ..api.dependencies.database import get_db
from ..core.config import settings
from ..core.constants import API_VERSION, BRAND_NAME

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


class LiveHealthResponse(BaseModel):
    ok: bool


class HealthCheckResponse(BaseModel):
    status: str
    service: str
    version: str
    environment: str
    database: bool
    timestamp: str


@router.get("/live", response_model=LiveHealthResponse)
def live_check(response: Response) -> LiveHealthResponse:
    """Liveness check that avoids touching external dependencies."""

    response.headers["Cache-Control"] = "no-store"
    return LiveHealthResponse(ok=True)


@router.get("/health", response_model=HealthCheckResponse)
def health_check(db: Session = Depends(get_db)) -> HealthCheckResponse:
    """Service status including database connectivity."""
    try:
        db.execute(text("SELECT 1"))
        db_status = True
        status = "healthy"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        db_status = False
        status = "degraded"

    return HealthCheckResponse(
        status=status,
        service=f"{BRAND_NAME.lower()}-api",
        version=API_VERSION,
        environment=settings.environment,
        database=db_status,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )
