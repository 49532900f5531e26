"""Tests for AnnouncementAuthoringService and AnnouncementQueryService (mocked repo, analyzer, storage)."""

from dataclasses import replace
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from noticeboard.application.dtos.analysis import AnnouncementAnalysis
from noticeboard.application.dtos.announcement import (
    AnnouncementCreate,
    AnnouncementFilter,
    AnnouncementResult,
    AnnouncementUpdate,
)
from noticeboard.application.dtos.user import Identity
from noticeboard.application.use_cases.announcements import (
    AnnouncementAuthoringService,
    AnnouncementDraft,
    AnnouncementQueryService,
)
from noticeboard.domain.enums import Priority, Role
from noticeboard.domain.exceptions import (
    AnalysisQuotaExceededException,
    AnalysisRateLimitedException,
    AnnouncementArchivedException,
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
AUTHOR = Identity(id="admin-1", email="admin@example.com", display_name="Ada")
AI_RESULT = AnnouncementAnalysis(summary="AI summary.", category="Events", priority=Priority.HIGH)


def _result(**overrides) -> AnnouncementResult:
    fields = {
        "id": "a1",
        "author_id": AUTHOR.id,
        "author_name": "Ada",
        "title": "Town hall",
        "content": "Town hall on Monday in the main hall.",
        "summary": "Town hall Monday.",
        "category": "Events",
        "priority": Priority.MEDIUM,
        "department": "",
        "deadline": None,
        "archived": False,
        "archived_at": None,
        "attachments": [],
        "created_at": NOW,
        "updated_at": NOW,
    }
    fields.update(overrides)
    return AnnouncementResult(**fields)


def _echo_create(data: AnnouncementCreate) -> AnnouncementResult:
    return _result(
        id=data.id,
        title=data.title,
        content=data.content,
        summary=data.summary,
        category=data.category,
        priority=data.priority,
        department=data.department,
        deadline=data.deadline,
        attachments=data.attachments,
    )


@pytest.fixture
def repo() -> AsyncMock:
    mock = AsyncMock()
    mock.create.side_effect = _echo_create
    return mock


@pytest.fixture
def analyzer() -> AsyncMock:
    mock = AsyncMock()
    mock.analyze.return_value = AI_RESULT
    return mock


@pytest.fixture
def storage() -> AsyncMock:
    mock = AsyncMock()

    async def _upload(file_data, storage_ref, content_type, metadata=None):
        return {
            "storage_ref": storage_ref,
            "size": len(file_data),
            "url": f"https://cdn.test/{storage_ref}",
        }

    mock.upload.side_effect = _upload
    return mock


@pytest.fixture
def service(repo: AsyncMock, analyzer: AsyncMock, storage: AsyncMock) -> AnnouncementAuthoringService:
    return AnnouncementAuthoringService(
        announcement_repo=repo,
        analyzer=analyzer,
        storage_service=storage,
        max_upload_size=1024,
        allowed_mime_types=["application/pdf", "image/*"],
    )


DRAFT = AnnouncementDraft(title="Town hall", content="Town hall on Monday in the main hall.")


async def test_create_uses_ai_analysis(service: AnnouncementAuthoringService, repo: AsyncMock) -> None:
    """Successful analysis fills summary, category and priority."""
    created = await service.create(AUTHOR, Role.ADMIN, DRAFT)
    assert created.analysis_error is None
    assert created.announcement.summary == "AI summary."
    assert created.announcement.category == "Events"
    assert created.announcement.priority == Priority.HIGH
    data = repo.create.await_args.args[0]
    assert data.author_id == AUTHOR.id
    assert data.id == created.announcement.id


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (AnalysisRateLimitedException(), "AI_RATE_LIMITED"),
        (AnalysisQuotaExceededException(), "AI_QUOTA_EXCEEDED"),
    ],
)
async def test_create_degrades_when_analysis_fails(
    service: AnnouncementAuthoringService, analyzer: AsyncMock, error: Exception, code: str
) -> None:
    """Analysis failure is never fatal: fallback summary and analysis_error are returned."""
    analyzer.analyze.side_effect = error
    created = await service.create(AUTHOR, Role.ADMIN, DRAFT)
    assert created.analysis_error == code
    assert created.announcement.summary == DRAFT.content
    assert created.announcement.category == "General Info"
    assert created.announcement.priority == Priority.MEDIUM


async def test_fallback_summary_is_truncated(
    service: AnnouncementAuthoringService, analyzer: AsyncMock
) -> None:
    """Fallback summary is the first 200 characters of content."""
    analyzer.analyze.side_effect = AnalysisRateLimitedException()
    created = await service.create(AUTHOR, Role.ADMIN, replace(DRAFT, content="x" * 500))
    assert created.announcement.summary == "x" * 200


async def test_fallback_prefers_caller_values(
    service: AnnouncementAuthoringService, analyzer: AsyncMock
) -> None:
    """Caller-supplied category and priority are used when analysis fails."""
    analyzer.analyze.side_effect = AnalysisRateLimitedException()
    created = await service.create(
        AUTHOR, Role.ADMIN, replace(DRAFT, category="Technical", priority=Priority.LOW)
    )
    assert created.announcement.category == "Technical"
    assert created.announcement.priority == Priority.LOW


async def test_caller_summary_and_category_skip_analysis(
    service: AnnouncementAuthoringService, analyzer: AsyncMock
) -> None:
    """summary and category from the caller are used as-is without calling the gateway."""
    created = await service.create(
        AUTHOR, Role.ADMIN, replace(DRAFT, summary="Mine.", category="Operations")
    )
    analyzer.analyze.assert_not_awaited()
    assert created.announcement.summary == "Mine."
    assert created.announcement.priority == Priority.MEDIUM


async def test_caller_priority_overrides_ai(service: AnnouncementAuthoringService) -> None:
    """Explicit priority wins over the AI's choice."""
    created = await service.create(AUTHOR, Role.ADMIN, replace(DRAFT, priority=Priority.LOW))
    assert created.announcement.priority == Priority.LOW
    assert created.announcement.summary == "AI summary."


async def test_create_requires_publish(
    service: AnnouncementAuthoringService, repo: AsyncMock, analyzer: AsyncMock
) -> None:
    """user and unassigned cannot publish; nothing is analyzed or written."""
    for role in (Role.USER, Role.UNASSIGNED):
        with pytest.raises(AuthorizationException):
            await service.create(AUTHOR, role, DRAFT)
    analyzer.analyze.assert_not_awaited()
    repo.create.assert_not_awaited()


async def test_create_validates_before_analysis(
    service: AnnouncementAuthoringService, analyzer: AsyncMock
) -> None:
    """Invalid input fails before the gateway is contacted."""
    with pytest.raises(ValidationException):
        await service.create(AUTHOR, Role.ADMIN, replace(DRAFT, title="   "))
    analyzer.analyze.assert_not_awaited()


async def test_update_archived_raises(service: AnnouncementAuthoringService, repo: AsyncMock) -> None:
    """Archived announcements are immutable."""
    repo.get_by_id.return_value = _result(archived=True, archived_at=NOW)
    with pytest.raises(AnnouncementArchivedException):
        await service.update(Role.ADMIN, "a1", AnnouncementUpdate(title="New"))
    repo.update.assert_not_awaited()


async def test_update_missing_raises_not_found(
    service: AnnouncementAuthoringService, repo: AsyncMock
) -> None:
    """Unknown id raises ResourceNotFoundException."""
    repo.get_by_id.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await service.update(Role.ADMIN, "nope", AnnouncementUpdate(title="New"))


async def test_update_archived_concurrently_raises(
    service: AnnouncementAuthoringService, repo: AsyncMock
) -> None:
    """Guarded update matching no row (archived in between) raises AnnouncementArchivedException."""
    repo.get_by_id.return_value = _result()
    repo.update.return_value = None
    with pytest.raises(AnnouncementArchivedException):
        await service.update(Role.ADMIN, "a1", AnnouncementUpdate(title="New"))


async def test_update_active(service: AnnouncementAuthoringService, repo: AsyncMock) -> None:
    """Active announcement update returns the repo result."""
    repo.get_by_id.return_value = _result()
    repo.update.return_value = _result(title="New")
    updated = await service.update(Role.ADMIN, "a1", AnnouncementUpdate(title="New"))
    assert updated.title == "New"


async def test_archive_is_idempotent(service: AnnouncementAuthoringService, repo: AsyncMock) -> None:
    """Archiving an archived announcement returns it unchanged."""
    archived = _result(archived=True, archived_at=NOW)
    repo.get_by_id.return_value = archived
    assert await service.archive(Role.ADMIN, "a1") == archived
    repo.mark_archived.assert_not_awaited()


async def test_archive_active(service: AnnouncementAuthoringService, repo: AsyncMock) -> None:
    """Archiving an active announcement flips it via the guarded update."""
    repo.get_by_id.side_effect = [_result(), _result(archived=True, archived_at=NOW)]
    repo.mark_archived.return_value = True
    result = await service.archive(Role.MASTER, "a1")
    assert result.archived is True
    repo.mark_archived.assert_awaited_once()


async def test_update_validates_merged_fields(
    service: AnnouncementAuthoringService, repo: AsyncMock
) -> None:
    """A change that leaves the announcement invalid is rejected before the write."""
    repo.get_by_id.return_value = _result()
    with pytest.raises(ValidationException) as exc_info:
        await service.update(Role.ADMIN, "a1", AnnouncementUpdate(title="   "))
    assert exc_info.value.details["field"] == "title"
    repo.update.assert_not_awaited()


async def test_archive_records_transition_time(
    service: AnnouncementAuthoringService, repo: AsyncMock
) -> None:
    """The guarded write receives the timezone-aware archive time."""
    repo.get_by_id.side_effect = [_result(), _result(archived=True, archived_at=NOW)]
    repo.mark_archived.return_value = True
    await service.archive(Role.ADMIN, "a1")
    announcement_id, archived_at = repo.mark_archived.await_args.args
    assert announcement_id == "a1"
    assert archived_at.tzinfo is not None


async def test_archive_requires_capability(service: AnnouncementAuthoringService) -> None:
    """user cannot archive."""
    with pytest.raises(AuthorizationException):
        await service.archive(Role.USER, "a1")


async def test_upload_sanitizes_filename(
    service: AnnouncementAuthoringService, storage: AsyncMock
) -> None:
    """Path components are stripped and the file lands under announcements/."""
    att = await service.upload_attachment(Role.ADMIN, b"%PDF", "../../etc/agenda.pdf", "application/pdf")
    assert att.name == "agenda.pdf"
    assert att.size == 4
    assert att.type == "application/pdf"
    storage_ref = storage.upload.await_args.kwargs["storage_ref"]
    assert storage_ref.startswith("announcements/")
    assert storage_ref.endswith("/agenda.pdf")
    assert ".." not in storage_ref
    assert att.url == f"https://cdn.test/{storage_ref}"


async def test_upload_rejects_large_file(
    service: AnnouncementAuthoringService, storage: AsyncMock
) -> None:
    """Files above max_upload_size are rejected before storage."""
    with pytest.raises(ValidationException):
        await service.upload_attachment(Role.ADMIN, b"x" * 1025, "big.pdf", "application/pdf")
    storage.upload.assert_not_awaited()


async def test_upload_rejects_disallowed_type(service: AnnouncementAuthoringService) -> None:
    """MIME types outside the allowlist are rejected; wildcards match."""
    with pytest.raises(ValidationException):
        await service.upload_attachment(Role.ADMIN, b"x", "run.sh", "application/x-sh")
    att = await service.upload_attachment(Role.ADMIN, b"x", "photo.png", "image/png")
    assert att.type == "image/png"


async def test_upload_rejects_empty_filename(service: AnnouncementAuthoringService) -> None:
    """A filename made only of path parts is invalid."""
    with pytest.raises(ValidationException):
        await service.upload_attachment(Role.ADMIN, b"x", "../", "application/pdf")


async def test_analyze_propagates_failure(
    service: AnnouncementAuthoringService, analyzer: AsyncMock
) -> None:
    """The standalone analyze operation surfaces gateway errors to the caller."""
    analyzer.analyze.side_effect = AnalysisQuotaExceededException()
    with pytest.raises(AnalysisQuotaExceededException):
        await service.analyze(Role.ADMIN, "t", "c")


async def test_query_service_requires_view(repo: AsyncMock) -> None:
    """Unassigned callers cannot list announcements; users can."""
    queries = AnnouncementQueryService(announcement_repo=repo)
    repo.list_announcements.return_value = [_result()]
    with pytest.raises(AuthorizationException):
        await queries.list_active(Role.UNASSIGNED)
    assert len(await queries.list_active(Role.USER)) == 1
    repo.list_announcements.assert_awaited_once_with(False, AnnouncementFilter())


async def test_query_service_get_missing(repo: AsyncMock) -> None:
    """get() of an unknown id raises ResourceNotFoundException."""
    repo.get_by_id.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await AnnouncementQueryService(announcement_repo=repo).get(Role.USER, "nope")
