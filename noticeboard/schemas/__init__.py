"""Pydantic request/response schemas for the API."""

from noticeboard.schemas.announcement import (
    AnalyzeRequest,
    AnalyzeResponse,
    AnnouncementCreateRequest,
    AnnouncementCreateResponse,
    AnnouncementResponse,
    AnnouncementStatsResponse,
    AnnouncementUpdateRequest,
    AttachmentSchema,
)
from noticeboard.schemas.health import HealthResponse, ReadinessResponse
from noticeboard.schemas.role import MyRoleResponse, RoleVerifyRequest, RoleVerifyResponse
from noticeboard.schemas.sweep import ArchivedAnnouncementItem, SweepResponse
from noticeboard.schemas.user import ProfileResponse, ProfileUpdateRequest, UserWithRoleResponse

__all__ = [
    "AnalyzeRequest",
    "AnalyzeResponse",
    "AnnouncementCreateRequest",
    "AnnouncementCreateResponse",
    "AnnouncementResponse",
    "AnnouncementStatsResponse",
    "AnnouncementUpdateRequest",
    "ArchivedAnnouncementItem",
    "AttachmentSchema",
    "HealthResponse",
    "MyRoleResponse",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "ReadinessResponse",
    "RoleVerifyRequest",
    "RoleVerifyResponse",
    "SweepResponse",
    "UserWithRoleResponse",
]
