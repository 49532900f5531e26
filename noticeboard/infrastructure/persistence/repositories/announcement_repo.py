"""Announcement repository: CRUD, filtered listing, archival and sweep queries."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Select, func, or_, select, update

from noticeboard.application.dtos.announcement import (
    AnnouncementCreate,
    AnnouncementFilter,
    AnnouncementResult,
    AnnouncementStats,
    AnnouncementUpdate,
)
from noticeboard.application.dtos.sweep import ArchivedAnnouncement
from noticeboard.domain.enums import Priority
from noticeboard.domain.value_objects import Attachment
from noticeboard.infrastructure.persistence.models.announcement import Announcement
from noticeboard.infrastructure.persistence.models.profile import Profile
from noticeboard.infrastructure.persistence.repositories.base import BaseRepository
from noticeboard.shared.utils.datetime import ensure_utc


def _orm_to_result(a: Announcement, author_name: str | None) -> AnnouncementResult:
    return AnnouncementResult(
        id=a.id,
        author_id=a.author_id,
        author_name=author_name,
        title=a.title,
        content=a.content,
        summary=a.summary,
        category=a.category,
        priority=Priority(a.priority),
        department=a.department or "",
        deadline=ensure_utc(a.deadline),
        archived=a.archived,
        archived_at=ensure_utc(a.archived_at),
        attachments=[Attachment.from_dict(d) for d in (a.attachments or [])],
        created_at=ensure_utc(a.created_at),
        updated_at=ensure_utc(a.updated_at),
    )


def _with_author() -> Select[Any]:
    return select(Announcement, Profile.full_name).outerjoin(
        Profile, Profile.id == Announcement.author_id
    )


class AnnouncementRepository(BaseRepository):
    """Announcement table. Archival updates always re-check archived = false,
    so a row is flipped at most once."""

    async def create(self, data: AnnouncementCreate) -> AnnouncementResult:
        row = Announcement(
            id=data.id,
            author_id=data.author_id,
            title=data.title,
            content=data.content,
            summary=data.summary,
            category=data.category,
            priority=data.priority.value,
            department=data.department,
            deadline=ensure_utc(data.deadline),
            archived=False,
            attachments=[a.to_dict() for a in data.attachments],
        )
        self.db.add(row)
        await self._flush()
        result = await self.get_by_id(row.id)
        if result is None:
            raise RuntimeError(f"Announcement missing after insert: {row.id}")
        return result

    async def get_by_id(self, announcement_id: str) -> AnnouncementResult | None:
        result = await self._execute(
            _with_author()
            .where(Announcement.id == announcement_id)
            .execution_options(populate_existing=True)
        )
        row = result.one_or_none()
        if row is None:
            return None
        announcement, author_name = row
        return _orm_to_result(announcement, author_name)

    async def list_announcements(
        self, archived: bool, filters: AnnouncementFilter
    ) -> list[AnnouncementResult]:
        """Active or archived announcements, newest first, filtered."""
        stmt = _with_author().where(Announcement.archived.is_(archived))
        if filters.q:
            stmt = stmt.where(
                or_(
                    Announcement.title.icontains(filters.q, autoescape=True),
                    Announcement.summary.icontains(filters.q, autoescape=True),
                )
            )
        if filters.category:
            stmt = stmt.where(Announcement.category == filters.category)
        if filters.priority:
            stmt = stmt.where(Announcement.priority == filters.priority.value)
        if filters.department:
            stmt = stmt.where(Announcement.department == filters.department)
        order = Announcement.archived_at.desc() if archived else Announcement.created_at.desc()
        stmt = (
            stmt.order_by(order, Announcement.created_at.desc(), Announcement.id.desc())
            .offset(filters.skip)
            .limit(filters.limit)
        )
        result = await self._execute(stmt)
        return [_orm_to_result(a, name) for a, name in result.all()]

    async def update(
        self, announcement_id: str, data: AnnouncementUpdate
    ) -> AnnouncementResult | None:
        """Update an active announcement. None when missing or archived."""
        values: dict[str, Any] = {}
        for name in ("title", "content", "summary", "category", "department"):
            value = getattr(data, name)
            if value is not None:
                values[name] = value
        if data.priority is not None:
            values["priority"] = data.priority.value
        if data.clear_deadline:
            values["deadline"] = None
        elif data.deadline is not None:
            values["deadline"] = ensure_utc(data.deadline)
        if data.attachments is not None:
            values["attachments"] = [a.to_dict() for a in data.attachments]
        if values:
            result = await self._execute(
                update(Announcement)
                .where(Announcement.id == announcement_id, Announcement.archived.is_(False))
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                return None
        current = await self.get_by_id(announcement_id)
        if current is None or current.archived:
            return None
        return current

    async def mark_archived(self, announcement_id: str, now: datetime) -> bool:
        result = await self._execute(
            update(Announcement)
            .where(Announcement.id == announcement_id, Announcement.archived.is_(False))
            .values(archived=True, archived_at=ensure_utc(now))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def find_expired(self, now: datetime) -> list[ArchivedAnnouncement]:
        """Active announcements with a deadline strictly before now."""
        result = await self._execute(
            select(Announcement.id, Announcement.title, Announcement.deadline)
            .where(
                Announcement.archived.is_(False),
                Announcement.deadline.is_not(None),
                Announcement.deadline < ensure_utc(now),
            )
            .order_by(Announcement.deadline)
        )
        return [
            ArchivedAnnouncement(id=i, title=t, deadline=ensure_utc(d))
            for i, t, d in result.all()
        ]

    async def archive_by_ids(
        self, announcement_ids: list[str], now: datetime
    ) -> list[ArchivedAnnouncement]:
        """Archive still-active rows among announcement_ids in one statement.

        Returns only the rows this statement changed.
        """
        if not announcement_ids:
            return []
        result = await self._execute(
            update(Announcement)
            .where(
                Announcement.id.in_(announcement_ids),
                Announcement.archived.is_(False),
            )
            .values(archived=True, archived_at=ensure_utc(now))
            .returning(Announcement.id, Announcement.title, Announcement.deadline)
            .execution_options(synchronize_session=False)
        )
        return [
            ArchivedAnnouncement(id=i, title=t, deadline=ensure_utc(d))
            for i, t, d in result.all()
        ]

    async def stats(self) -> AnnouncementStats:
        totals = await self._execute(
            select(Announcement.archived, func.count()).group_by(Announcement.archived)
        )
        by_state = {bool(archived): count for archived, count in totals.all()}
        high = await self._execute(
            select(func.count())
            .select_from(Announcement)
            .where(
                Announcement.archived.is_(False),
                Announcement.priority == Priority.HIGH.value,
            )
        )
        categories = await self._execute(
            select(Announcement.category, func.count())
            .where(Announcement.archived.is_(False))
            .group_by(Announcement.category)
        )
        priorities = await self._execute(
            select(Announcement.priority, func.count())
            .where(Announcement.archived.is_(False))
            .group_by(Announcement.priority)
        )
        return AnnouncementStats(
            active=by_state.get(False, 0),
            archived=by_state.get(True, 0),
            high_priority_active=high.scalar_one(),
            by_category={category: count for category, count in categories.all()},
            by_priority={priority: count for priority, count in priorities.all()},
        )
