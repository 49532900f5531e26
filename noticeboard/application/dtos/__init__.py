"""Application DTOs (no ORM dependency)."""

from noticeboard.application.dtos.analysis import AnnouncementAnalysis
from noticeboard.application.dtos.announcement import (
    AnnouncementCreate,
    AnnouncementFilter,
    AnnouncementResult,
    AnnouncementStats,
    AnnouncementUpdate,
    CreatedAnnouncement,
)
from noticeboard.application.dtos.role import RoleAssignmentResult, RoleVerificationResult
from noticeboard.application.dtos.sweep import ArchivedAnnouncement, SweepResult
from noticeboard.application.dtos.user import (
    Identity,
    ProfileResult,
    ProfileUpdate,
    UserWithRole,
)

__all__ = [
    "AnnouncementAnalysis",
    "AnnouncementCreate",
    "AnnouncementFilter",
    "AnnouncementResult",
    "AnnouncementStats",
    "AnnouncementUpdate",
    "ArchivedAnnouncement",
    "CreatedAnnouncement",
    "Identity",
    "ProfileResult",
    "ProfileUpdate",
    "RoleAssignmentResult",
    "RoleVerificationResult",
    "SweepResult",
    "UserWithRole",
]
