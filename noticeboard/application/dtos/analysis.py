"""DTOs for AI analysis of announcement content."""

from dataclasses import dataclass

from noticeboard.domain.enums import Priority


@dataclass(frozen=True)
class AnnouncementAnalysis:
    """Summary, category and priority proposed for a draft announcement."""

    summary: str
    category: str
    priority: Priority
