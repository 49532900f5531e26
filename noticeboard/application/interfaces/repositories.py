"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain types only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from noticeboard.domain.enums import Role

if TYPE_CHECKING:
    from noticeboard.application.dtos.announcement import (
        AnnouncementCreate,
        AnnouncementFilter,
        AnnouncementResult,
        AnnouncementStats,
        AnnouncementUpdate,
    )
    from noticeboard.application.dtos.role import RoleAssignmentResult
    from noticeboard.application.dtos.sweep import ArchivedAnnouncement
    from noticeboard.application.dtos.user import ProfileResult, ProfileUpdate


# Role store interface
class IRoleStore(Protocol):
    """Protocol for the durable identity -> role mapping (at most one row per identity)."""

    async def get_role(self, identity_id: str) -> Role | None:
        """Return the stored role, or None when the identity has none."""

    async def set_role(self, identity_id: str, role: Role) -> RoleAssignmentResult:
        """Replace any existing role for the identity in one atomic statement."""

    async def list_assignments(self) -> dict[str, Role]:
        """Return every stored assignment as identity_id -> role."""


# Profile repository interface
class IProfileRepository(Protocol):
    """Protocol for profile persistence."""

    async def get(self, identity_id: str) -> ProfileResult | None:
        """Return profile for identity, or None."""

    async def ensure_profile(
        self, identity_id: str, email: str | None, full_name: str | None
    ) -> ProfileResult:
        """Create the profile if missing; leave an existing one untouched."""

    async def update_profile(self, identity_id: str, data: ProfileUpdate) -> ProfileResult | None:
        """Apply changes to an existing profile; None when it does not exist."""

    async def list_profiles(self, skip: int = 0, limit: int = 100) -> list[ProfileResult]:
        """Return profiles newest first."""


# Announcement repository interface
class IAnnouncementRepository(Protocol):
    """Protocol for announcement persistence."""

    async def create(self, data: AnnouncementCreate) -> AnnouncementResult:
        """Insert an active announcement."""

    async def get_by_id(self, announcement_id: str) -> AnnouncementResult | None:
        """Return announcement by ID (with author name), or None."""

    async def list_announcements(
        self, archived: bool, filters: AnnouncementFilter
    ) -> list[AnnouncementResult]:
        """Return active or archived announcements, newest first."""

    async def update(
        self, announcement_id: str, data: AnnouncementUpdate
    ) -> AnnouncementResult | None:
        """Update an active announcement; None when missing or archived."""

    async def mark_archived(self, announcement_id: str, now: datetime) -> bool:
        """Archive one announcement. Returns False when it was already archived or missing."""

    async def find_expired(self, now: datetime) -> list[ArchivedAnnouncement]:
        """Return active announcements with a deadline strictly before now."""

    async def archive_by_ids(
        self, announcement_ids: list[str], now: datetime
    ) -> list[ArchivedAnnouncement]:
        """Archive the given IDs that are still active; return the rows actually changed."""

    async def stats(self) -> AnnouncementStats:
        """Return dashboard counts."""
