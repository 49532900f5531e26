"""Health check endpoints for liveness and readiness probes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from noticeboard.core.config import get_settings
from noticeboard.infrastructure.persistence.database import get_db, translate_store_errors
from noticeboard.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Data store unavailable"}},
)
async def readiness_check(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReadinessResponse:
    """Return 200 when the data store answers; 503 STORE_UNAVAILABLE otherwise."""
    async with translate_store_errors():
        await db.execute(text("SELECT 1"))
    return ReadinessResponse()
