"""Announcement domain entity.

Represents the business concept of an announcement, independent of
persistence. The lifecycle is a two-state machine (ACTIVE, ARCHIVED) with a
single one-way transition.
"""

from dataclasses import dataclass, field
from datetime import datetime

from noticeboard.domain.enums import AnnouncementStatus, Priority
from noticeboard.domain.exceptions import (
    AnnouncementArchivedException,
    ValidationException,
)
from noticeboard.domain.value_objects import Attachment

TITLE_MAX_LENGTH = 200
DEPARTMENT_MAX_LENGTH = 100
CATEGORY_MAX_LENGTH = 64


@dataclass
class AnnouncementEntity:
    """Domain entity for an announcement.

    Encapsulates the archival lifecycle and content rules. Validation runs
    on construction. Nothing on this entity moves ARCHIVED back to ACTIVE.
    """

    id: str
    author_id: str
    title: str
    content: str
    summary: str
    category: str
    priority: Priority
    department: str = ""
    deadline: datetime | None = None
    status: AnnouncementStatus = AnnouncementStatus.ACTIVE
    archived_at: datetime | None = None
    attachments: list[Attachment] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate announcement business rules. Raises ValidationException if invalid."""
        if not self.author_id:
            raise ValidationException("Author is required", field="author_id")
        if not self.title or not self.title.strip():
            raise ValidationException("Title is required", field="title")
        if len(self.title) > TITLE_MAX_LENGTH:
            raise ValidationException(
                f"Title must not exceed {TITLE_MAX_LENGTH} characters", field="title"
            )
        if not self.content or not self.content.strip():
            raise ValidationException("Content is required", field="content")
        if len(self.department) > DEPARTMENT_MAX_LENGTH:
            raise ValidationException(
                f"Department must not exceed {DEPARTMENT_MAX_LENGTH} characters",
                field="department",
            )
        if not self.category or len(self.category) > CATEGORY_MAX_LENGTH:
            raise ValidationException(
                f"Category must be 1-{CATEGORY_MAX_LENGTH} characters", field="category"
            )
        if self.deadline is not None and self.deadline.tzinfo is None:
            raise ValidationException("Deadline must be timezone-aware", field="deadline")

    @property
    def archived(self) -> bool:
        return self.status == AnnouncementStatus.ARCHIVED

    def archive(self, now: datetime) -> bool:
        """Move to ARCHIVED. Idempotent.

        Returns:
            True if the status changed, False if it was already archived.
        """
        if self.status == AnnouncementStatus.ARCHIVED:
            return False
        self.status = AnnouncementStatus.ARCHIVED
        self.archived_at = now
        return True

    def ensure_editable(self) -> None:
        """Raise AnnouncementArchivedException if archived (archived rows are immutable)."""
        if self.archived:
            raise AnnouncementArchivedException(self.id)
