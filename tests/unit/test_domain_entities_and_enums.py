"""Tests for domain entities, value objects and enums."""

from datetime import UTC, datetime, timedelta

import pytest

from noticeboard.domain.entities import AnnouncementEntity
from noticeboard.domain.enums import AnnouncementCategory, AnnouncementStatus, Priority, Role
from noticeboard.domain.exceptions import AnnouncementArchivedException, ValidationException
from noticeboard.domain.value_objects import Attachment

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _entity(**overrides) -> AnnouncementEntity:
    fields = {
        "id": "a1",
        "author_id": "u1",
        "title": "Office closed",
        "content": "The office is closed on Friday.",
        "summary": "Office closed Friday.",
        "category": AnnouncementCategory.GENERAL_INFO.value,
        "priority": Priority.MEDIUM,
    }
    fields.update(overrides)
    return AnnouncementEntity(**fields)


def test_role_assignable_excludes_unassigned() -> None:
    """UNASSIGNED is never storable."""
    assert Role.assignable() == [Role.MASTER, Role.ADMIN, Role.USER]
    assert "unassigned" in Role.values()


def test_priority_and_category_values() -> None:
    """Priority and category enums expose their wire values."""
    assert Priority.values() == ["high", "medium", "low"]
    assert "Policy Updates" in AnnouncementCategory.values()
    assert len(AnnouncementCategory.values()) == 6


def test_entity_defaults_to_active() -> None:
    """A new announcement is ACTIVE with no archived_at."""
    entity = _entity()
    assert entity.status == AnnouncementStatus.ACTIVE
    assert entity.archived is False
    assert entity.archived_at is None


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"title": "  "}, "title"),
        ({"title": "x" * 201}, "title"),
        ({"content": ""}, "content"),
        ({"author_id": ""}, "author_id"),
        ({"department": "d" * 101}, "department"),
        ({"category": ""}, "category"),
        ({"deadline": datetime(2026, 3, 1, 12, 0)}, "deadline"),
    ],
)
def test_entity_validation(overrides: dict, field: str) -> None:
    """Invalid fields raise ValidationException naming the field."""
    with pytest.raises(ValidationException) as exc_info:
        _entity(**overrides)
    assert exc_info.value.details["field"] == field


def test_archive_is_one_way_and_idempotent() -> None:
    """archive() flips once; a second call changes nothing."""
    entity = _entity()
    assert entity.archive(NOW) is True
    assert entity.archived is True
    assert entity.archived_at == NOW
    assert entity.archive(NOW + timedelta(hours=1)) is False
    assert entity.archived_at == NOW


def test_archived_entity_is_not_editable() -> None:
    """ensure_editable raises once archived."""
    entity = _entity()
    entity.ensure_editable()
    entity.archive(NOW)
    with pytest.raises(AnnouncementArchivedException):
        entity.ensure_editable()


def test_attachment_round_trips_its_stored_shape() -> None:
    """Attachment.from_dict reads what to_dict writes."""
    att = Attachment(name="agenda.pdf", url="https://cdn.test/a.pdf", size=10, type="application/pdf")
    assert Attachment.from_dict(att.to_dict()) == att


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "", "url": "https://x.test/a", "size": 1, "type": "text/plain"},
        {"name": "a", "url": "ftp://x.test/a", "size": 1, "type": "text/plain"},
        {"name": "a", "url": "https://x.test/a", "size": -1, "type": "text/plain"},
    ],
)
def test_attachment_validation(kwargs: dict) -> None:
    """Attachment rejects empty names, non-http URLs and negative sizes."""
    with pytest.raises(ValidationException):
        Attachment(**kwargs)
