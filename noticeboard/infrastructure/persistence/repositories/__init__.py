"""SQLAlchemy repositories returning application DTOs."""

from noticeboard.infrastructure.persistence.repositories.announcement_repo import (
    AnnouncementRepository,
)
from noticeboard.infrastructure.persistence.repositories.profile_repo import ProfileRepository
from noticeboard.infrastructure.persistence.repositories.role_store import SqlRoleStore

__all__ = ["AnnouncementRepository", "ProfileRepository", "SqlRoleStore"]
