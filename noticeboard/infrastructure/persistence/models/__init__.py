"""ORM models. Importing this package registers every table on Base.metadata."""

from noticeboard.infrastructure.persistence.models.announcement import Announcement
from noticeboard.infrastructure.persistence.models.profile import Profile
from noticeboard.infrastructure.persistence.models.user_role import UserRole

__all__ = ["Announcement", "Profile", "UserRole"]
