"""User directory: listing users with their roles, and own-profile management."""

from __future__ import annotations

from typing import TYPE_CHECKING

from noticeboard.application.dtos.user import ProfileResult, ProfileUpdate, UserWithRole
from noticeboard.application.services.access_policy import AccessPolicy, access_policy
from noticeboard.domain.enums import Capability, Role
from noticeboard.domain.exceptions import ValidationException

if TYPE_CHECKING:
    from noticeboard.application.dtos.user import Identity
    from noticeboard.application.interfaces.repositories import (
        IProfileRepository,
        IRoleStore,
    )

FULL_NAME_MAX_LENGTH = 200


class UserDirectoryService:
    """Profiles joined with stored roles; own profile read and update."""

    def __init__(
        self,
        profile_repo: IProfileRepository,
        role_store: IRoleStore,
        policy: AccessPolicy = access_policy,
    ) -> None:
        self.profile_repo = profile_repo
        self.role_store = role_store
        self.policy = policy

    async def list_users(self, role: Role, skip: int = 0, limit: int = 100) -> list[UserWithRole]:
        """Profiles newest first, each with its stored role (None when never assigned)."""
        self.policy.require(role, Capability.VIEW_USERS)
        profiles = await self.profile_repo.list_profiles(skip=skip, limit=limit)
        assignments = await self.role_store.list_assignments()
        return [UserWithRole(profile=p, role=assignments.get(p.id)) for p in profiles]

    async def get_my_profile(self, identity: Identity, role: Role) -> ProfileResult:
        """Return the caller's profile, creating it from identity data if missing."""
        self.policy.require(role, Capability.MANAGE_OWN_PROFILE)
        profile = await self.profile_repo.get(identity.id)
        if profile is not None:
            return profile
        return await self.profile_repo.ensure_profile(
            identity.id, identity.email, identity.display_name
        )

    async def update_my_profile(
        self, identity: Identity, role: Role, data: ProfileUpdate
    ) -> ProfileResult:
        """Upsert full_name and avatar_url on the caller's profile."""
        self.policy.require(role, Capability.MANAGE_OWN_PROFILE)
        if data.full_name is not None and len(data.full_name) > FULL_NAME_MAX_LENGTH:
            raise ValidationException(
                f"Full name must not exceed {FULL_NAME_MAX_LENGTH} characters",
                field="full_name",
            )
        if data.avatar_url and not data.avatar_url.startswith(("http://", "https://")):
            raise ValidationException("Avatar URL must be http(s)", field="avatar_url")
        await self.profile_repo.ensure_profile(identity.id, identity.email, identity.display_name)
        updated = await self.profile_repo.update_profile(identity.id, data)
        if updated is None:
            return await self.profile_repo.ensure_profile(
                identity.id, identity.email, identity.display_name
            )
        return updated
