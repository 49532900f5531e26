"""Tests for ArchiveExpiredAnnouncementsUseCase (mocked announcement repo)."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from noticeboard.application.dtos.sweep import ArchivedAnnouncement
from noticeboard.application.use_cases.announcements import ArchiveExpiredAnnouncementsUseCase
from noticeboard.domain.exceptions import StoreUnavailableException

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


async def test_nothing_expired() -> None:
    """No candidates: nothing archived and no batch update issued."""
    repo = AsyncMock()
    repo.find_expired.return_value = []
    result = await ArchiveExpiredAnnouncementsUseCase(repo).run(NOW)
    assert result.archived_count == 0
    assert result.swept_at == NOW
    repo.archive_by_ids.assert_not_awaited()


async def test_archives_expired_candidates() -> None:
    """Candidates are archived in one batch and reported."""
    a = ArchivedAnnouncement(id="a", title="A", deadline=NOW - timedelta(days=1))
    repo = AsyncMock()
    repo.find_expired.return_value = [a]
    repo.archive_by_ids.return_value = [a]
    result = await ArchiveExpiredAnnouncementsUseCase(repo).run(NOW)
    assert result.archived == [a]
    repo.find_expired.assert_awaited_once_with(NOW)
    repo.archive_by_ids.assert_awaited_once_with(["a"], NOW)


async def test_reports_only_rows_this_run_flipped() -> None:
    """A row archived concurrently between select and update is not reported."""
    a = ArchivedAnnouncement(id="a", title="A", deadline=NOW - timedelta(days=1))
    b = ArchivedAnnouncement(id="b", title="B", deadline=NOW - timedelta(hours=1))
    repo = AsyncMock()
    repo.find_expired.return_value = [a, b]
    repo.archive_by_ids.return_value = [b]
    result = await ArchiveExpiredAnnouncementsUseCase(repo).run(NOW)
    assert result.archived_count == 1
    assert result.archived == [b]


async def test_default_now_is_utc() -> None:
    """Without now, the sweep uses the current UTC time."""
    repo = AsyncMock()
    repo.find_expired.return_value = []
    result = await ArchiveExpiredAnnouncementsUseCase(repo).run()
    assert result.swept_at.tzinfo is not None
    assert abs(datetime.now(UTC) - result.swept_at) < timedelta(minutes=1)


async def test_read_failure_aborts_before_writing() -> None:
    """A failed candidate query propagates and no batch update is issued."""
    repo = AsyncMock()
    repo.find_expired.side_effect = StoreUnavailableException("OperationalError")
    with pytest.raises(StoreUnavailableException):
        await ArchiveExpiredAnnouncementsUseCase(repo).run(NOW)
    repo.archive_by_ids.assert_not_awaited()


async def test_write_failure_propagates() -> None:
    """A failed batch update propagates so the caller's transaction rolls back."""
    a = ArchivedAnnouncement(id="a", title="A", deadline=NOW - timedelta(days=1))
    repo = AsyncMock()
    repo.find_expired.return_value = [a]
    repo.archive_by_ids.side_effect = StoreUnavailableException("TimeoutError")
    with pytest.raises(StoreUnavailableException) as exc_info:
        await ArchiveExpiredAnnouncementsUseCase(repo).run(NOW)
    assert exc_info.value.retryable is True
