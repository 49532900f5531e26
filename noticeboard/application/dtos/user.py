"""DTOs for identity and profile use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from noticeboard.domain.enums import Role


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as reported by the identity provider."""

    id: str
    email: str | None = None
    display_name: str | None = None


@dataclass(frozen=True)
class ProfileResult:
    """Profile read-model."""

    id: str
    email: str | None
    full_name: str | None
    avatar_url: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ProfileUpdate:
    """Fields a user may change on their own profile. None leaves a field unchanged."""

    full_name: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True)
class UserWithRole:
    """Directory row: profile joined with the stored role (None when never assigned)."""

    profile: ProfileResult
    role: Role | None
