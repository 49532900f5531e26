"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the caller's identity and role,
and application services. Routes depend only on these dependencies, not on
infrastructure directly.
"""

from .auth import (
    Principal,
    get_current_identity,
    get_current_principal,
    get_http_client,
    get_identity_provider,
    require_capability,
)
from .db import (
    get_announcement_repo,
    get_announcement_repo_for_write,
    get_profile_repo,
    get_profile_repo_for_write,
    get_role_store,
    get_role_store_for_write,
)
from .jobs import verify_job_caller
from .services import (
    get_analyzer,
    get_archive_expired_use_case,
    get_authoring_service,
    get_query_service,
    get_role_secrets,
    get_role_verification_service,
    get_storage_service,
    get_user_directory,
    get_user_directory_for_write,
)

__all__ = [
    "Principal",
    "get_analyzer",
    "get_announcement_repo",
    "get_announcement_repo_for_write",
    "get_archive_expired_use_case",
    "get_authoring_service",
    "get_current_identity",
    "get_current_principal",
    "get_http_client",
    "get_identity_provider",
    "get_profile_repo",
    "get_profile_repo_for_write",
    "get_query_service",
    "get_role_secrets",
    "get_role_store",
    "get_role_store_for_write",
    "get_role_verification_service",
    "get_storage_service",
    "get_user_directory",
    "get_user_directory_for_write",
    "require_capability",
    "verify_job_caller",
]
