"""Announcement API schemas."""

from datetime import datetime

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from noticeboard.domain.enums import Priority


class AttachmentSchema(BaseModel):
    """Stored attachment descriptor (as returned by POST /announcements/attachments)."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=2048)
    size: int = Field(..., ge=0)
    type: str = Field(..., min_length=1, max_length=255)


class AnalyzeRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)


class AnalyzeResponse(BaseModel):
    summary: str
    category: str
    priority: Priority


class AnnouncementCreateRequest(BaseModel):
    """Request body for POST /announcements.

    summary and category together skip AI analysis; any of summary, category
    and priority otherwise act as the fallback if analysis fails.
    """

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    department: str = Field(default="", max_length=100)
    deadline: AwareDatetime | None = None
    attachments: list[AttachmentSchema] = Field(default_factory=list, max_length=20)
    summary: str | None = None
    category: str | None = Field(default=None, max_length=64)
    priority: Priority | None = None


class AnnouncementUpdateRequest(BaseModel):
    """Request body for PATCH /announcements/{id}. Omitted fields are left unchanged;
    an explicit null deadline clears it."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)
    summary: str | None = None
    category: str | None = Field(default=None, min_length=1, max_length=64)
    priority: Priority | None = None
    department: str | None = Field(default=None, max_length=100)
    deadline: AwareDatetime | None = None
    attachments: list[AttachmentSchema] | None = Field(default=None, max_length=20)


class AnnouncementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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
    attachments: list[AttachmentSchema]
    created_at: datetime
    updated_at: datetime


class AnnouncementCreateResponse(AnnouncementResponse):
    """Created announcement; analysis_error names the failure the summary fell back from."""

    analysis_error: str | None = None


class AnnouncementStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    active: int
    archived: int
    high_priority_active: int
    by_category: dict[str, int]
    by_priority: dict[str, int]
