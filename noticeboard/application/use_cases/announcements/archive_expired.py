"""Archive announcements whose deadline has passed."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from noticeboard.application.dtos.sweep import SweepResult
from noticeboard.shared.telemetry.logging import get_logger
from noticeboard.shared.telemetry.tracing import add_span_attributes, traced
from noticeboard.shared.utils.datetime import ensure_utc, utc_now

if TYPE_CHECKING:
    from noticeboard.application.interfaces.repositories import IAnnouncementRepository

logger = get_logger(__name__)


class ArchiveExpiredAnnouncementsUseCase:
    """Moves every active announcement with deadline < now to ARCHIVED.

    Selects candidates, then archives them in one guarded batch update that
    re-checks archived = false, so overlapping runs converge and each row is
    reported by exactly one run. Runs inside the caller's transaction; any
    error propagates and the batch rolls back.
    """

    def __init__(self, announcement_repo: IAnnouncementRepository) -> None:
        self._announcement_repo = announcement_repo

    @traced("expiry_sweeper.run")
    async def run(self, now: datetime | None = None) -> SweepResult:
        """Run one sweep. now defaults to the current UTC time."""
        swept_at = ensure_utc(now) if now is not None else utc_now()
        expired = await self._announcement_repo.find_expired(swept_at)
        if not expired:
            logger.info("Expiry sweep found nothing to archive")
            return SweepResult(swept_at=swept_at)

        archived = await self._announcement_repo.archive_by_ids(
            [a.id for a in expired], swept_at
        )
        add_span_attributes(archived_count=len(archived))
        logger.info(
            "Expiry sweep archived %d announcement(s): %s",
            len(archived),
            ", ".join(a.id for a in archived),
        )
        return SweepResult(swept_at=swept_at, archived=archived)
