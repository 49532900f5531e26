"""Announcement operations: authoring (write) and queries (read) with single responsibilities."""

from __future__ import annotations

import fnmatch
import os
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import TYPE_CHECKING

from noticeboard.application.dtos.analysis import AnnouncementAnalysis
from noticeboard.application.dtos.announcement import (
    AnnouncementCreate,
    AnnouncementFilter,
    AnnouncementResult,
    AnnouncementStats,
    AnnouncementUpdate,
    CreatedAnnouncement,
)
from noticeboard.application.services.access_policy import AccessPolicy, access_policy
from noticeboard.domain.entities import AnnouncementEntity
from noticeboard.domain.enums import (
    AnnouncementCategory,
    AnnouncementStatus,
    Capability,
    Priority,
    Role,
)
from noticeboard.domain.exceptions import (
    AnnouncementArchivedException,
    ExternalServiceException,
    ResourceNotFoundException,
    ValidationException,
)
from noticeboard.domain.value_objects import Attachment
from noticeboard.shared.telemetry.logging import get_logger
from noticeboard.shared.utils.datetime import utc_now
from noticeboard.shared.utils.generators import generate_cuid

if TYPE_CHECKING:
    from noticeboard.application.dtos.user import Identity
    from noticeboard.application.interfaces.repositories import IAnnouncementRepository
    from noticeboard.application.interfaces.services import (
        IAnnouncementAnalyzer,
        IStorageService,
    )

logger = get_logger(__name__)

# Length of the summary derived from content when analysis is unavailable.
FALLBACK_SUMMARY_LENGTH = 200


@dataclass(frozen=True)
class AnnouncementDraft:
    """Author input for a new announcement.

    summary, category and priority are optional: when summary and category
    are both given they are used as-is, otherwise the content is analyzed and
    any of them given here serve as the fallback if analysis fails.
    """

    title: str
    content: str
    department: str = ""
    deadline: datetime | None = None
    attachments: list[Attachment] = field(default_factory=list)
    summary: str | None = None
    category: str | None = None
    priority: Priority | None = None


def _sanitize_filename(filename: str) -> str:
    """Strip path separators and dangerous characters from filename."""
    name = os.path.basename(filename.replace("\\", "/"))
    name = name.replace("\x00", "").strip(". ")
    if not name:
        raise ValidationException("Filename is empty or invalid", field="file")
    return name


def _mime_allowed(content_type: str, allowed: list[str]) -> bool:
    return any(fnmatch.fnmatch(content_type, pattern) for pattern in allowed)


def fallback_analysis(draft: AnnouncementDraft) -> AnnouncementAnalysis:
    """Caller-supplied values where present, otherwise derived from content."""
    return AnnouncementAnalysis(
        summary=draft.summary or draft.content.strip()[:FALLBACK_SUMMARY_LENGTH],
        category=draft.category or AnnouncementCategory.GENERAL_INFO.value,
        priority=draft.priority or Priority.MEDIUM,
    )


def _to_entity(
    announcement_id: str,
    author_id: str,
    draft: AnnouncementDraft,
    analysis: AnnouncementAnalysis,
) -> AnnouncementEntity:
    return AnnouncementEntity(
        id=announcement_id,
        author_id=author_id,
        title=draft.title,
        content=draft.content,
        summary=analysis.summary,
        category=analysis.category,
        priority=analysis.priority,
        department=draft.department,
        deadline=draft.deadline,
        attachments=list(draft.attachments),
    )


def _entity_from_result(current: AnnouncementResult) -> AnnouncementEntity:
    return AnnouncementEntity(
        id=current.id,
        author_id=current.author_id,
        title=current.title,
        content=current.content,
        summary=current.summary,
        category=current.category,
        priority=current.priority,
        department=current.department,
        deadline=current.deadline,
        status=AnnouncementStatus.ARCHIVED if current.archived else AnnouncementStatus.ACTIVE,
        archived_at=current.archived_at,
        attachments=list(current.attachments),
    )


class AnnouncementAuthoringService:
    """Single responsibility: analyze, create, edit, archive and attach files to announcements."""

    def __init__(
        self,
        announcement_repo: IAnnouncementRepository,
        analyzer: IAnnouncementAnalyzer,
        storage_service: IStorageService | None = None,
        policy: AccessPolicy = access_policy,
        max_upload_size: int = 20 * 1024 * 1024,
        allowed_mime_types: list[str] | None = None,
    ) -> None:
        self.announcement_repo = announcement_repo
        self.analyzer = analyzer
        self.storage = storage_service
        self.policy = policy
        self.max_upload_size = max_upload_size
        self.allowed_mime_types = allowed_mime_types or ["*/*"]

    async def analyze(self, role: Role, title: str, content: str) -> AnnouncementAnalysis:
        """Return AI summary, category and priority. Analysis failures propagate."""
        self.policy.require(role, Capability.PUBLISH)
        if not content or not content.strip():
            raise ValidationException("Content is required", field="content")
        return await self.analyzer.analyze(title, content)

    async def create(
        self, identity: Identity, role: Role, draft: AnnouncementDraft
    ) -> CreatedAnnouncement:
        """Validate, analyze (degrading to a fallback on failure) and insert an announcement."""
        self.policy.require(role, Capability.PUBLISH)
        announcement_id = generate_cuid()
        # Validate before contacting the analyzer or writing anything.
        _to_entity(announcement_id, identity.id, draft, fallback_analysis(draft))

        analysis_error: str | None = None
        if draft.summary and draft.category:
            analysis = AnnouncementAnalysis(
                summary=draft.summary,
                category=draft.category,
                priority=draft.priority or Priority.MEDIUM,
            )
        else:
            try:
                analysis = await self.analyzer.analyze(draft.title, draft.content)
            except ExternalServiceException as e:
                logger.warning(
                    "Analysis failed, using fallback: error_code=%s", e.error_code
                )
                analysis = fallback_analysis(draft)
                analysis_error = e.error_code
            else:
                if draft.priority is not None:
                    analysis = replace(analysis, priority=draft.priority)

        entity = _to_entity(announcement_id, identity.id, draft, analysis)
        created = await self.announcement_repo.create(
            AnnouncementCreate(
                id=entity.id,
                author_id=entity.author_id,
                title=entity.title,
                content=entity.content,
                summary=entity.summary,
                category=entity.category,
                priority=entity.priority,
                department=entity.department,
                deadline=entity.deadline,
                attachments=entity.attachments,
            )
        )
        logger.info(
            "Announcement created: id=%s author=%s degraded=%s",
            created.id,
            identity.id,
            analysis_error is not None,
        )
        return CreatedAnnouncement(announcement=created, analysis_error=analysis_error)

    async def update(
        self, role: Role, announcement_id: str, changes: AnnouncementUpdate
    ) -> AnnouncementResult:
        """Apply a partial update to an active announcement."""
        self.policy.require(role, Capability.PUBLISH)
        current = await self.announcement_repo.get_by_id(announcement_id)
        if current is None:
            raise ResourceNotFoundException("announcement", announcement_id)
        entity = _entity_from_result(current)
        entity.ensure_editable()

        deadline = entity.deadline
        if changes.clear_deadline:
            deadline = None
        elif changes.deadline is not None:
            deadline = changes.deadline
        # replace() re-runs validation on the merged fields.
        replace(
            entity,
            title=changes.title if changes.title is not None else entity.title,
            content=changes.content if changes.content is not None else entity.content,
            summary=changes.summary if changes.summary is not None else entity.summary,
            category=changes.category if changes.category is not None else entity.category,
            priority=changes.priority or entity.priority,
            department=(
                changes.department if changes.department is not None else entity.department
            ),
            deadline=deadline,
            attachments=(
                list(changes.attachments)
                if changes.attachments is not None
                else entity.attachments
            ),
        )

        updated = await self.announcement_repo.update(announcement_id, changes)
        if updated is None:
            # Archived between the read and the guarded update.
            raise AnnouncementArchivedException(announcement_id)
        return updated

    async def archive(self, role: Role, announcement_id: str) -> AnnouncementResult:
        """Archive an announcement now. Archiving an archived announcement is a no-op."""
        self.policy.require(role, Capability.ARCHIVE_ANNOUNCEMENTS)
        current = await self.announcement_repo.get_by_id(announcement_id)
        if current is None:
            raise ResourceNotFoundException("announcement", announcement_id)
        now = utc_now()
        if not _entity_from_result(current).archive(now):
            return current
        changed = await self.announcement_repo.mark_archived(announcement_id, now)
        if changed:
            logger.info("Announcement archived: id=%s", announcement_id)
        result = await self.announcement_repo.get_by_id(announcement_id)
        if result is None:
            raise ResourceNotFoundException("announcement", announcement_id)
        return result

    async def upload_attachment(
        self, role: Role, file_data: bytes, filename: str, content_type: str
    ) -> Attachment:
        """Store an attachment and return its descriptor (name, url, size, type)."""
        self.policy.require(role, Capability.PUBLISH)
        if self.storage is None:
            raise ValidationException("Attachment storage is not configured", field="file")
        if len(file_data) > self.max_upload_size:
            raise ValidationException(
                f"File exceeds maximum size of {self.max_upload_size} bytes", field="file"
            )
        if not _mime_allowed(content_type, self.allowed_mime_types):
            raise ValidationException(f"File type not allowed: {content_type}", field="file")

        safe_name = _sanitize_filename(filename)
        storage_ref = f"announcements/{generate_cuid()}/{safe_name}"
        stored = await self.storage.upload(
            file_data=file_data,
            storage_ref=storage_ref,
            content_type=content_type,
            metadata={"original_filename": safe_name},
        )
        return Attachment(
            name=safe_name,
            url=stored["url"],
            size=int(stored["size"]),
            type=content_type,
        )


class AnnouncementQueryService:
    """Single responsibility: announcement listing, lookup and dashboard stats."""

    def __init__(
        self,
        announcement_repo: IAnnouncementRepository,
        policy: AccessPolicy = access_policy,
    ) -> None:
        self.announcement_repo = announcement_repo
        self.policy = policy

    async def list_active(
        self, role: Role, filters: AnnouncementFilter | None = None
    ) -> list[AnnouncementResult]:
        """Active announcements, newest first."""
        self.policy.require(role, Capability.VIEW_ANNOUNCEMENTS)
        return await self.announcement_repo.list_announcements(
            False, filters or AnnouncementFilter()
        )

    async def list_archived(
        self, role: Role, filters: AnnouncementFilter | None = None
    ) -> list[AnnouncementResult]:
        """Archived announcements, newest first."""
        self.policy.require(role, Capability.VIEW_ANNOUNCEMENTS)
        return await self.announcement_repo.list_announcements(
            True, filters or AnnouncementFilter()
        )

    async def get(self, role: Role, announcement_id: str) -> AnnouncementResult:
        self.policy.require(role, Capability.VIEW_ANNOUNCEMENTS)
        result = await self.announcement_repo.get_by_id(announcement_id)
        if result is None:
            raise ResourceNotFoundException("announcement", announcement_id)
        return result

    async def stats(self, role: Role) -> AnnouncementStats:
        self.policy.require(role, Capability.VIEW_ANNOUNCEMENTS)
        return await self.announcement_repo.stats()
