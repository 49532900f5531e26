"""DTOs for the expiry sweeper."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ArchivedAnnouncement:
    """Announcement archived by a sweep run."""

    id: str
    title: str
    deadline: datetime


@dataclass(frozen=True)
class SweepResult:
    """Result of one sweep run: the rows this run actually archived."""

    swept_at: datetime
    archived: list[ArchivedAnnouncement] = field(default_factory=list)

    @property
    def archived_count(self) -> int:
        return len(self.archived)
