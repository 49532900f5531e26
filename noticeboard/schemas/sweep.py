"""Expiry sweep API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ArchivedAnnouncementItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    deadline: datetime


class SweepResponse(BaseModel):
    """Result of POST /jobs/archive-expired."""

    archived_count: int
    archived: list[ArchivedAnnouncementItem]
    swept_at: datetime
