"""Archive announcements whose deadline has passed (cron entry point).

Usage:
    python -m scripts.archive_expired_announcements
Runs one sweep in a single transaction and prints the result as JSON.
Exits 1 when the data store is unavailable so the scheduler retries later.
"""

import asyncio
import json
import sys

from noticeboard.application.use_cases.announcements import ArchiveExpiredAnnouncementsUseCase
from noticeboard.domain.exceptions import StoreUnavailableException
from noticeboard.infrastructure.persistence.database import dispose_engine, session_scope
from noticeboard.infrastructure.persistence.repositories import AnnouncementRepository
from noticeboard.shared.telemetry.logging import get_logger, setup_logging

logger = get_logger(__name__)


async def main() -> int:
    """Run one sweep; return the process exit code."""
    setup_logging()
    try:
        async with session_scope() as session:
            use_case = ArchiveExpiredAnnouncementsUseCase(AnnouncementRepository(session))
            result = await use_case.run()
    except StoreUnavailableException as e:
        logger.error("Expiry sweep aborted: %s", e.message)
        return 1
    finally:
        await dispose_engine()

    print(
        json.dumps(
            {
                "archived_count": result.archived_count,
                "archived": [
                    {"id": a.id, "title": a.title, "deadline": a.deadline.isoformat()}
                    for a in result.archived
                ],
                "swept_at": result.swept_at.isoformat(),
            }
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
