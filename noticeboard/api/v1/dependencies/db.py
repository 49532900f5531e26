"""Database-backed repository dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from noticeboard.infrastructure.persistence.database import get_db, get_db_transactional
from noticeboard.infrastructure.persistence.repositories import (
    AnnouncementRepository,
    ProfileRepository,
    SqlRoleStore,
)


def get_role_store(db: Annotated[AsyncSession, Depends(get_db)]) -> SqlRoleStore:
    """Role store on a read session."""
    return SqlRoleStore(db)


def get_role_store_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> SqlRoleStore:
    """Role store on a transactional session (commit on success)."""
    return SqlRoleStore(db)


def get_profile_repo(db: Annotated[AsyncSession, Depends(get_db)]) -> ProfileRepository:
    return ProfileRepository(db)


def get_profile_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ProfileRepository:
    return ProfileRepository(db)


def get_announcement_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AnnouncementRepository:
    return AnnouncementRepository(db)


def get_announcement_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> AnnouncementRepository:
    return AnnouncementRepository(db)
