"""Profile repository: display data for identities."""

from __future__ import annotations

from sqlalchemy import select

from noticeboard.application.dtos.user import ProfileResult, ProfileUpdate
from noticeboard.infrastructure.persistence.models.profile import Profile
from noticeboard.infrastructure.persistence.repositories.base import BaseRepository
from noticeboard.infrastructure.persistence.repositories.upsert import insert_for
from noticeboard.shared.utils.datetime import ensure_utc


def _profile_to_result(p: Profile) -> ProfileResult:
    return ProfileResult(
        id=p.id,
        email=p.email,
        full_name=p.full_name,
        avatar_url=p.avatar_url,
        created_at=ensure_utc(p.created_at),
        updated_at=ensure_utc(p.updated_at),
    )


class ProfileRepository(BaseRepository):
    """Profile table keyed by identity id."""

    async def _get_orm(self, identity_id: str) -> Profile | None:
        result = await self._execute(select(Profile).where(Profile.id == identity_id))
        return result.scalar_one_or_none()

    async def get(self, identity_id: str) -> ProfileResult | None:
        row = await self._get_orm(identity_id)
        return _profile_to_result(row) if row else None

    async def ensure_profile(
        self, identity_id: str, email: str | None, full_name: str | None
    ) -> ProfileResult:
        """Insert the profile if missing (ON CONFLICT DO NOTHING), then return it."""
        stmt = insert_for(self.dialect_name, Profile).values(
            id=identity_id, email=email, full_name=full_name
        )
        await self._execute(stmt.on_conflict_do_nothing(index_elements=[Profile.id]))
        row = await self._get_orm(identity_id)
        if row is None:
            raise RuntimeError(f"Profile missing after insert: {identity_id}")
        return _profile_to_result(row)

    async def update_profile(self, identity_id: str, data: ProfileUpdate) -> ProfileResult | None:
        row = await self._get_orm(identity_id)
        if row is None:
            return None
        if data.full_name is not None:
            row.full_name = data.full_name
        if data.avatar_url is not None:
            row.avatar_url = data.avatar_url or None
        await self._flush()
        await self.db.refresh(row)
        return _profile_to_result(row)

    async def list_profiles(self, skip: int = 0, limit: int = 100) -> list[ProfileResult]:
        """Return profiles newest first."""
        result = await self._execute(
            select(Profile)
            .order_by(Profile.created_at.desc(), Profile.id)
            .offset(skip)
            .limit(limit)
        )
        return [_profile_to_result(p) for p in result.scalars().all()]
