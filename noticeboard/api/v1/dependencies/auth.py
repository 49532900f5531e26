"""Identity, role and capability dependencies (composition root).

The bearer token is resolved by the identity provider on every request; the
caller's role comes from the role store (UNASSIGNED when none is stored).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated

import httpx
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from noticeboard.application.dtos.user import Identity
from noticeboard.application.interfaces.services import IIdentityProvider
from noticeboard.application.services.access_policy import access_policy
from noticeboard.core.config import get_settings
from noticeboard.domain.enums import Capability, Role
from noticeboard.domain.exceptions import AuthenticationException
from noticeboard.infrastructure.external.identity import IdentityProviderClient
from noticeboard.infrastructure.persistence.repositories import SqlRoleStore

from .db import get_role_store

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller and the role currently stored for them."""

    identity: Identity
    role: Role


def get_http_client(request: Request) -> httpx.AsyncClient | None:
    """Shared outbound HTTP client created in lifespan (None outside lifespan)."""
    return getattr(request.app.state, "http_client", None)


def get_identity_provider(
    http_client: Annotated[httpx.AsyncClient | None, Depends(get_http_client)],
) -> IIdentityProvider:
    """Identity provider client with shared HTTP client."""
    settings = get_settings()
    api_key = settings.identity_provider_api_key
    return IdentityProviderClient(
        base_url=settings.identity_provider_url,
        api_key=api_key.get_secret_value() if api_key else None,
        timeout=settings.identity_timeout_seconds,
        http_client=http_client,
    )


async def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    provider: Annotated[IIdentityProvider, Depends(get_identity_provider)],
) -> Identity:
    """Resolve the bearer token; raise AuthenticationException (401) when missing or rejected."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Missing bearer token")
    return await provider.get_identity(credentials.credentials)


async def get_current_principal(
    identity: Annotated[Identity, Depends(get_current_identity)],
    role_store: Annotated[SqlRoleStore, Depends(get_role_store)],
) -> Principal:
    """Caller plus stored role (UNASSIGNED when the caller has not selected one)."""
    role = await role_store.get_role(identity.id)
    return Principal(identity=identity, role=role or Role.UNASSIGNED)


def require_capability(capability: Capability) -> Callable:
    """Dependency factory: return the principal if its role grants capability, else 403."""

    async def _check(
        principal: Annotated[Principal, Depends(get_current_principal)],
    ) -> Principal:
        access_policy.require(principal.role, capability)
        return principal

    return _check
