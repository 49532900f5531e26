"""Domain enumerations for the noticeboard.

Enums represent fixed sets of domain values (roles, capabilities,
announcement priority and lifecycle status).
"""

from enum import Enum


class Role(str, Enum):
    """Role held by an identity.

    UNASSIGNED is an explicit variant for identities that have not completed
    role selection yet; it is never persisted.
    """

    MASTER = "master"
    ADMIN = "admin"
    USER = "user"
    UNASSIGNED = "unassigned"

    @classmethod
    def assignable(cls) -> list["Role"]:
        """Roles that can be stored in the role store (everything but UNASSIGNED)."""
        return [r for r in cls if r is not cls.UNASSIGNED]

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid role values as strings."""
        return [role.value for role in cls]


class Capability(str, Enum):
    """Named permission checked against a role by the access policy."""

    PUBLISH = "publish"
    VIEW_USERS = "viewUsers"
    VIEW_ANNOUNCEMENTS = "viewAnnouncements"
    ARCHIVE_ANNOUNCEMENTS = "archiveAnnouncements"
    MANAGE_OWN_PROFILE = "manageOwnProfile"
    COMPLETE_ROLE_SELECTION = "completeRoleSelection"


class Priority(str, Enum):
    """Announcement priority (urgency and impact)."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid priority values as strings."""
        return [p.value for p in cls]


class AnnouncementStatus(str, Enum):
    """Announcement lifecycle. ACTIVE -> ARCHIVED is the only transition."""

    ACTIVE = "active"
    ARCHIVED = "archived"


class AnnouncementCategory(str, Enum):
    """Categories the AI gateway chooses from."""

    POLICY_UPDATES = "Policy Updates"
    GENERAL_INFO = "General Info"
    EVENTS = "Events"
    TECHNICAL = "Technical"
    HR_UPDATES = "HR Updates"
    OPERATIONS = "Operations"

    @classmethod
    def values(cls) -> list[str]:
        """Return all category names."""
        return [c.value for c in cls]
