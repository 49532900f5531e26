"""Role store: durable identity -> role mapping (one row per identity)."""

from __future__ import annotations

from sqlalchemy import select

from noticeboard.application.dtos.role import RoleAssignmentResult
from noticeboard.domain.enums import Role
from noticeboard.infrastructure.persistence.models.user_role import UserRole
from noticeboard.infrastructure.persistence.repositories.base import BaseRepository
from noticeboard.infrastructure.persistence.repositories.upsert import insert_for
from noticeboard.shared.utils.datetime import ensure_utc, utc_now


class SqlRoleStore(BaseRepository):
    """UserRole table keyed by user_id. Writes are a single upsert statement,
    so concurrent selections for one identity serialize in the database and
    the last writer wins."""

    async def get_role(self, identity_id: str) -> Role | None:
        result = await self._execute(
            select(UserRole.role).where(UserRole.user_id == identity_id)
        )
        value = result.scalar_one_or_none()
        return Role(value) if value is not None else None

    async def set_role(self, identity_id: str, role: Role) -> RoleAssignmentResult:
        """Replace any existing role for identity_id (INSERT ... ON CONFLICT DO UPDATE)."""
        if role == Role.UNASSIGNED:
            raise ValueError("UNASSIGNED is not a storable role")
        now = utc_now()
        stmt = insert_for(self.dialect_name, UserRole).values(
            user_id=identity_id, role=role.value, assigned_at=now
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[UserRole.user_id],
            set_={"role": stmt.excluded.role, "assigned_at": stmt.excluded.assigned_at},
        )
        await self._execute(stmt)
        return RoleAssignmentResult(identity_id=identity_id, role=role, assigned_at=now)

    async def get_assignment(self, identity_id: str) -> RoleAssignmentResult | None:
        result = await self._execute(select(UserRole).where(UserRole.user_id == identity_id))
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return RoleAssignmentResult(
            identity_id=row.user_id,
            role=Role(row.role),
            assigned_at=ensure_utc(row.assigned_at),
        )

    async def list_assignments(self) -> dict[str, Role]:
        result = await self._execute(select(UserRole.user_id, UserRole.role))
        return {user_id: Role(role) for user_id, role in result.all()}
