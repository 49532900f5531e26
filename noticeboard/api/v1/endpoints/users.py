"""User directory API: list users with roles, read and update own profile."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from noticeboard.api.v1.dependencies import (
    Principal,
    get_user_directory,
    get_user_directory_for_write,
    require_capability,
)
from noticeboard.application.dtos.user import ProfileUpdate
from noticeboard.application.use_cases.users import UserDirectoryService
from noticeboard.core.limiter import limit_writes
from noticeboard.domain.enums import Capability
from noticeboard.schemas.user import (
    ProfileResponse,
    ProfileUpdateRequest,
    UserWithRoleResponse,
)

router = APIRouter()


@router.get("", response_model=list[UserWithRoleResponse])
async def list_users(
    principal: Annotated[Principal, Depends(require_capability(Capability.VIEW_USERS))],
    directory: Annotated[UserDirectoryService, Depends(get_user_directory)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """Profiles newest first with their stored role."""
    users = await directory.list_users(principal.role, skip=skip, limit=limit)
    return [
        UserWithRoleResponse(
            **ProfileResponse.model_validate(u.profile).model_dump(),
            role=u.role.value if u.role else None,
        )
        for u in users
    ]


@router.get("/me/profile", response_model=ProfileResponse)
async def get_my_profile(
    principal: Annotated[
        Principal, Depends(require_capability(Capability.MANAGE_OWN_PROFILE))
    ],
    directory: Annotated[UserDirectoryService, Depends(get_user_directory_for_write)],
):
    """Caller's profile (created from identity data on first read)."""
    profile = await directory.get_my_profile(principal.identity, principal.role)
    return ProfileResponse.model_validate(profile)


@router.put("/me/profile", response_model=ProfileResponse)
@limit_writes
async def update_my_profile(
    request: Request,
    body: ProfileUpdateRequest,
    principal: Annotated[
        Principal, Depends(require_capability(Capability.MANAGE_OWN_PROFILE))
    ],
    directory: Annotated[UserDirectoryService, Depends(get_user_directory_for_write)],
):
    """Update full_name and/or avatar_url on the caller's profile."""
    profile = await directory.update_my_profile(
        principal.identity,
        principal.role,
        ProfileUpdate(full_name=body.full_name, avatar_url=body.avatar_url),
    )
    return ProfileResponse.model_validate(profile)
