"""Job endpoints triggered by the external scheduler."""

from typing import Annotated

from fastapi import APIRouter, Depends

from noticeboard.api.v1.dependencies import get_archive_expired_use_case, verify_job_caller
from noticeboard.application.use_cases.announcements import ArchiveExpiredAnnouncementsUseCase
from noticeboard.schemas.sweep import ArchivedAnnouncementItem, SweepResponse
from noticeboard.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("/archive-expired", response_model=SweepResponse)
async def archive_expired_announcements(
    caller: Annotated[str, Depends(verify_job_caller)],
    use_case: Annotated[
        ArchiveExpiredAnnouncementsUseCase, Depends(get_archive_expired_use_case)
    ],
):
    """Archive every active announcement whose deadline has passed. Safe to retry."""
    logger.info("Expiry sweep requested by %s", caller)
    result = await use_case.run()
    return SweepResponse(
        archived_count=result.archived_count,
        archived=[ArchivedAnnouncementItem.model_validate(a) for a in result.archived],
        swept_at=result.swept_at,
    )
