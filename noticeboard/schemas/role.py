"""Role selection API schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class RoleVerifyRequest(BaseModel):
    """Request body for POST /roles/verify. credential is ignored for 'user'."""

    requested_role: Literal["master", "admin", "user"]
    credential: str = Field(default="", max_length=128)


class RoleVerifyResponse(BaseModel):
    """Successful role selection."""

    success: bool = True
    role: str


class MyRoleResponse(BaseModel):
    """Response for GET /roles/me: stored role and the capabilities it grants."""

    identity_id: str
    role: str
    capabilities: list[str]
