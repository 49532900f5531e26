"""Announcement ORM model."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from noticeboard.infrastructure.persistence.database import Base
from noticeboard.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Announcement(CuidMixin, TimestampMixin, Base):
    """Announcement row. archived flips false -> true once and never back."""

    __tablename__ = "announcement"
    __table_args__ = (
        CheckConstraint(
            "priority IN ('high', 'medium', 'low')", name="ck_announcement_priority"
        ),
        Index("ix_announcement_archived_deadline", "archived", "deadline"),
        Index("ix_announcement_archived_created_at", "archived", "created_at"),
    )

    author_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    priority: Mapped[str] = mapped_column(String(16), nullable=False)
    department: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    attachments: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
