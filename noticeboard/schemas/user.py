"""User directory and profile API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProfileUpdateRequest(BaseModel):
    """Request body for PUT /users/me/profile. Omitted fields are left unchanged."""

    full_name: str | None = Field(default=None, max_length=200)
    avatar_url: str | None = Field(default=None, max_length=2048)


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str | None
    full_name: str | None
    avatar_url: str | None
    created_at: datetime
    updated_at: datetime


class UserWithRoleResponse(ProfileResponse):
    """Directory row: profile plus stored role (null when never assigned)."""

    role: str | None
