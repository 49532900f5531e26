"""Application service dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

import httpx
from fastapi import Depends

from noticeboard.application.interfaces.services import (
    IAnnouncementAnalyzer,
    IStorageService,
)
from noticeboard.application.services.role_verification_service import (
    RoleSecrets,
    RoleVerificationService,
)
from noticeboard.application.use_cases.announcements import (
    AnnouncementAuthoringService,
    AnnouncementQueryService,
    ArchiveExpiredAnnouncementsUseCase,
)
from noticeboard.application.use_cases.users import UserDirectoryService
from noticeboard.core.config import get_settings
from noticeboard.infrastructure.external.ai import AIGatewayAnalyzer
from noticeboard.infrastructure.external.storage import StorageFactory
from noticeboard.infrastructure.persistence.repositories import (
    AnnouncementRepository,
    ProfileRepository,
    SqlRoleStore,
)

from .auth import get_http_client
from .db import (
    get_announcement_repo,
    get_announcement_repo_for_write,
    get_profile_repo,
    get_profile_repo_for_write,
    get_role_store,
    get_role_store_for_write,
)


def get_role_secrets() -> RoleSecrets:
    """Role PINs from settings."""
    return RoleSecrets.from_settings(get_settings())


def get_role_verification_service(
    role_store: Annotated[SqlRoleStore, Depends(get_role_store_for_write)],
    profile_repo: Annotated[ProfileRepository, Depends(get_profile_repo_for_write)],
    secrets: Annotated[RoleSecrets, Depends(get_role_secrets)],
) -> RoleVerificationService:
    return RoleVerificationService(
        role_store=role_store, secrets=secrets, profile_repo=profile_repo
    )


def get_analyzer(
    http_client: Annotated[httpx.AsyncClient | None, Depends(get_http_client)],
) -> IAnnouncementAnalyzer:
    """AI gateway analyzer with shared HTTP client."""
    settings = get_settings()
    return AIGatewayAnalyzer(
        url=settings.ai_gateway_url,
        api_key=settings.ai_api_key.get_secret_value() if settings.ai_api_key else None,
        model=settings.ai_model,
        timeout=settings.ai_timeout_seconds,
        http_client=http_client,
    )


def get_storage_service() -> IStorageService:
    return StorageFactory.create_storage_service()


def get_authoring_service(
    announcement_repo: Annotated[
        AnnouncementRepository, Depends(get_announcement_repo_for_write)
    ],
    analyzer: Annotated[IAnnouncementAnalyzer, Depends(get_analyzer)],
    storage: Annotated[IStorageService, Depends(get_storage_service)],
) -> AnnouncementAuthoringService:
    settings = get_settings()
    return AnnouncementAuthoringService(
        announcement_repo=announcement_repo,
        analyzer=analyzer,
        storage_service=storage,
        max_upload_size=settings.max_upload_size,
        allowed_mime_types=settings.allowed_mime_type_list,
    )


def get_query_service(
    announcement_repo: Annotated[AnnouncementRepository, Depends(get_announcement_repo)],
) -> AnnouncementQueryService:
    return AnnouncementQueryService(announcement_repo=announcement_repo)


def get_archive_expired_use_case(
    announcement_repo: Annotated[
        AnnouncementRepository, Depends(get_announcement_repo_for_write)
    ],
) -> ArchiveExpiredAnnouncementsUseCase:
    return ArchiveExpiredAnnouncementsUseCase(announcement_repo)


def get_user_directory(
    profile_repo: Annotated[ProfileRepository, Depends(get_profile_repo)],
    role_store: Annotated[SqlRoleStore, Depends(get_role_store)],
) -> UserDirectoryService:
    return UserDirectoryService(profile_repo=profile_repo, role_store=role_store)


def get_user_directory_for_write(
    profile_repo: Annotated[ProfileRepository, Depends(get_profile_repo_for_write)],
    role_store: Annotated[SqlRoleStore, Depends(get_role_store)],
) -> UserDirectoryService:
    return UserDirectoryService(profile_repo=profile_repo, role_store=role_store)
