"""Caller authentication for job endpoints (external scheduler or an archiving admin)."""

from __future__ import annotations

import hmac
from typing import Annotated

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials

from noticeboard.application.interfaces.services import IIdentityProvider
from noticeboard.application.services.access_policy import access_policy
from noticeboard.core.config import get_settings
from noticeboard.domain.enums import Capability
from noticeboard.domain.exceptions import AuthenticationException
from noticeboard.infrastructure.persistence.repositories import SqlRoleStore

from .auth import (
    bearer_scheme,
    get_current_identity,
    get_current_principal,
    get_identity_provider,
)
from .db import get_role_store

SCHEDULER_CALLER = "scheduler"


def _secret_matches(configured: str, supplied: str) -> bool:
    if not configured:
        return False
    return hmac.compare_digest(configured.encode("utf-8"), supplied.encode("utf-8"))


async def verify_job_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    provider: Annotated[IIdentityProvider, Depends(get_identity_provider)],
    role_store: Annotated[SqlRoleStore, Depends(get_role_store)],
    x_scheduler_secret: Annotated[str | None, Header()] = None,
) -> str:
    """Accept X-Scheduler-Secret, or a bearer token whose role may archive announcements.

    Returns "scheduler" or the caller's identity id (for logging).
    """
    if x_scheduler_secret is not None:
        settings = get_settings()
        configured = (
            settings.scheduler_secret.get_secret_value() if settings.scheduler_secret else ""
        )
        if not _secret_matches(configured, x_scheduler_secret):
            raise AuthenticationException("Invalid scheduler secret")
        return SCHEDULER_CALLER
    identity = await get_current_identity(credentials, provider)
    principal = await get_current_principal(identity, role_store)
    access_policy.require(principal.role, Capability.ARCHIVE_ANNOUNCEMENTS)
    return identity.id
