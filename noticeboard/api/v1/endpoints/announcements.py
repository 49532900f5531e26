"""Announcement API: thin routes delegating to AnnouncementAuthoringService and AnnouncementQueryService."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile

from noticeboard.api.v1.dependencies import (
    Principal,
    get_authoring_service,
    get_query_service,
    require_capability,
)
from noticeboard.application.dtos.announcement import AnnouncementFilter, AnnouncementUpdate
from noticeboard.application.use_cases.announcements import (
    AnnouncementAuthoringService,
    AnnouncementDraft,
    AnnouncementQueryService,
)
from noticeboard.core.limiter import limit_upload, limit_writes
from noticeboard.domain.enums import Capability, Priority
from noticeboard.domain.exceptions import ValidationException
from noticeboard.domain.value_objects import Attachment
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

router = APIRouter()

Publisher = Annotated[Principal, Depends(require_capability(Capability.PUBLISH))]
Reader = Annotated[Principal, Depends(require_capability(Capability.VIEW_ANNOUNCEMENTS))]
Archiver = Annotated[Principal, Depends(require_capability(Capability.ARCHIVE_ANNOUNCEMENTS))]


def _to_attachments(items: list[AttachmentSchema]) -> list[Attachment]:
    return [Attachment(name=a.name, url=a.url, size=a.size, type=a.type) for a in items]


def _filters(
    q: str | None = Query(None, max_length=200, description="Matches title or summary"),
    category: str | None = Query(None, max_length=64),
    priority: Priority | None = None,
    department: str | None = Query(None, max_length=100),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
) -> AnnouncementFilter:
    return AnnouncementFilter(
        q=q.strip() if q and q.strip() else None,
        category=category,
        priority=priority,
        department=department,
        skip=skip,
        limit=limit,
    )


@router.post("/analyze", response_model=AnalyzeResponse)
@limit_writes
async def analyze_announcement(
    request: Request,
    body: AnalyzeRequest,
    principal: Publisher,
    service: Annotated[AnnouncementAuthoringService, Depends(get_authoring_service)],
):
    """Summary, category and priority proposed by the AI gateway for a draft."""
    analysis = await service.analyze(principal.role, body.title, body.content)
    return AnalyzeResponse(
        summary=analysis.summary, category=analysis.category, priority=analysis.priority
    )


@router.post("/attachments", response_model=AttachmentSchema, status_code=201)
@limit_upload
async def upload_attachment(
    request: Request,
    principal: Publisher,
    service: Annotated[AnnouncementAuthoringService, Depends(get_authoring_service)],
    file: UploadFile = File(...),
):
    """Store a file in object storage; returns the descriptor to include in a create request."""
    if not file.filename:
        raise ValidationException("Filename required", field="file")
    data = await file.read(service.max_upload_size + 1)
    attachment = await service.upload_attachment(
        principal.role,
        data,
        file.filename,
        file.content_type or "application/octet-stream",
    )
    return AttachmentSchema.model_validate(attachment)


@router.post("", response_model=AnnouncementCreateResponse, status_code=201)
@limit_writes
async def create_announcement(
    request: Request,
    body: AnnouncementCreateRequest,
    principal: Publisher,
    service: Annotated[AnnouncementAuthoringService, Depends(get_authoring_service)],
):
    """Publish an announcement. AI analysis failure degrades to a fallback summary."""
    created = await service.create(
        principal.identity,
        principal.role,
        AnnouncementDraft(
            title=body.title,
            content=body.content,
            department=body.department,
            deadline=body.deadline,
            attachments=_to_attachments(body.attachments),
            summary=body.summary,
            category=body.category,
            priority=body.priority,
        ),
    )
    return AnnouncementCreateResponse(
        **AnnouncementResponse.model_validate(created.announcement).model_dump(),
        analysis_error=created.analysis_error,
    )


@router.get("", response_model=list[AnnouncementResponse])
async def list_active_announcements(
    principal: Reader,
    service: Annotated[AnnouncementQueryService, Depends(get_query_service)],
    filters: Annotated[AnnouncementFilter, Depends(_filters)],
):
    """Active announcements, newest first."""
    items = await service.list_active(principal.role, filters)
    return [AnnouncementResponse.model_validate(i) for i in items]


@router.get("/archived", response_model=list[AnnouncementResponse])
async def list_archived_announcements(
    principal: Reader,
    service: Annotated[AnnouncementQueryService, Depends(get_query_service)],
    filters: Annotated[AnnouncementFilter, Depends(_filters)],
):
    """Archived announcements, most recently archived first."""
    items = await service.list_archived(principal.role, filters)
    return [AnnouncementResponse.model_validate(i) for i in items]


@router.get("/stats", response_model=AnnouncementStatsResponse)
async def announcement_stats(
    principal: Reader,
    service: Annotated[AnnouncementQueryService, Depends(get_query_service)],
):
    """Dashboard counts. Defined before /{announcement_id} for route precedence."""
    stats = await service.stats(principal.role)
    return AnnouncementStatsResponse.model_validate(stats)


@router.get("/{announcement_id}", response_model=AnnouncementResponse)
async def get_announcement(
    announcement_id: str,
    principal: Reader,
    service: Annotated[AnnouncementQueryService, Depends(get_query_service)],
):
    """Single announcement (active or archived)."""
    item = await service.get(principal.role, announcement_id)
    return AnnouncementResponse.model_validate(item)


@router.patch("/{announcement_id}", response_model=AnnouncementResponse)
@limit_writes
async def update_announcement(
    request: Request,
    announcement_id: str,
    body: AnnouncementUpdateRequest,
    principal: Publisher,
    service: Annotated[AnnouncementAuthoringService, Depends(get_authoring_service)],
):
    """Partial update. Archived announcements answer 409 ANNOUNCEMENT_ARCHIVED."""
    clear_deadline = "deadline" in body.model_fields_set and body.deadline is None
    updated = await service.update(
        principal.role,
        announcement_id,
        AnnouncementUpdate(
            title=body.title,
            content=body.content,
            summary=body.summary,
            category=body.category,
            priority=body.priority,
            department=body.department,
            deadline=body.deadline,
            clear_deadline=clear_deadline,
            attachments=(
                _to_attachments(body.attachments) if body.attachments is not None else None
            ),
        ),
    )
    return AnnouncementResponse.model_validate(updated)


@router.post("/{announcement_id}/archive", response_model=AnnouncementResponse)
@limit_writes
async def archive_announcement(
    request: Request,
    announcement_id: str,
    principal: Archiver,
    service: Annotated[AnnouncementAuthoringService, Depends(get_authoring_service)],
):
    """Archive now. Archiving an archived announcement is a no-op."""
    archived = await service.archive(principal.role, announcement_id)
    return AnnouncementResponse.model_validate(archived)
