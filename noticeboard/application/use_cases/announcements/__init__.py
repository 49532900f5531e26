"""Announcement use cases."""

from noticeboard.application.use_cases.announcements.announcement_operations import (
    AnnouncementAuthoringService,
    AnnouncementDraft,
    AnnouncementQueryService,
)
from noticeboard.application.use_cases.announcements.archive_expired import (
    ArchiveExpiredAnnouncementsUseCase,
)

__all__ = [
    "AnnouncementAuthoringService",
    "AnnouncementDraft",
    "AnnouncementQueryService",
    "ArchiveExpiredAnnouncementsUseCase",
]
