"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from noticeboard.domain.entities.announcement import AnnouncementEntity

__all__ = ["AnnouncementEntity"]
