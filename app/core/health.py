"""Liveness and readiness endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_db
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: Literal["ok", "unhealthy"]
    app: str
    database: Literal["connected", "disconnected"] | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report that the process is up."""
    logger.debug("health.check_started")
    return HealthResponse(status="ok", app=get_settings().app_name)


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check(
    db: AsyncSession = Depends(get_db),
) -> HealthResponse:
    """Readiness check including store connectivity.

    A failing store is reported in the body, never raised.

    Args:
        db: Database session dependency.

    Returns:
        Health status with database state.
    """
    app_name = get_settings().app_name

    try:
        await db.execute(text("SELECT 1"))
        logger.info("health.database_connected")
        return HealthResponse(status="ok", app=app_name, database="connected")
    except Exception as e:
        logger.error(
            "health.database_disconnected",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        return HealthResponse(status="unhealthy", app=app_name, database="disconnected")
