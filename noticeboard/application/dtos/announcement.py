"""DTOs for announcement use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from noticeboard.domain.enums import Priority
from noticeboard.domain.value_objects import Attachment


@dataclass(frozen=True)
class AnnouncementCreate:
    """Validated data for inserting an announcement."""

    id: str
    author_id: str
    title: str
    content: str
    summary: str
    category: str
    priority: Priority
    department: str = ""
    deadline: datetime | None = None
    attachments: list[Attachment] = field(default_factory=list)


@dataclass(frozen=True)
class AnnouncementUpdate:
    """Partial update of an active announcement. None leaves a field unchanged."""

    title: str | None = None
    content: str | None = None
    summary: str | None = None
    category: str | None = None
    priority: Priority | None = None
    department: str | None = None
    deadline: datetime | None = None
    clear_deadline: bool = False
    attachments: list[Attachment] | None = None


@dataclass(frozen=True)
class AnnouncementResult:
    """Announcement read-model (result of create, get, list)."""

    id: str
    author_id: str
    author_name: str | None
    title: str
    content: str
    summary: str
    category: str
    priority: Priority
    department: str
    deadline: datetime | None
    archived: bool
    archived_at: datetime | None
    attachments: list[Attachment]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class AnnouncementFilter:
    """Filters for listing announcements. Text search matches title or summary."""

    q: str | None = None
    category: str | None = None
    priority: Priority | None = None
    department: str | None = None
    skip: int = 0
    limit: int = 50


@dataclass(frozen=True)
class AnnouncementStats:
    """Counts for the dashboard."""

    active: int
    archived: int
    high_priority_active: int
    by_category: dict[str, int]
    by_priority: dict[str, int]


@dataclass(frozen=True)
class CreatedAnnouncement:
    """Result of create: the stored row plus the analysis failure it degraded from, if any."""

    announcement: AnnouncementResult
    analysis_error: str | None = None
