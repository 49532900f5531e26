"""Identity provider client: resolves a bearer token to the signed-in identity.

Speaks the GoTrue user endpoint (GET {base}/user with the caller's bearer
token and the project apikey).
"""

from __future__ import annotations

from typing import Any

import httpx

from noticeboard.application.dtos.user import Identity
from noticeboard.domain.exceptions import (
    AuthenticationException,
    UpstreamUnavailableException,
)
from noticeboard.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "identity_provider"


def identity_from_payload(data: dict[str, Any]) -> Identity:
    """Build Identity from the provider's user object."""
    user_id = data.get("id")
    if not user_id:
        raise AuthenticationException("Identity provider returned no user id")
    metadata = data.get("user_metadata") or {}
    email = data.get("email")
    return Identity(
        id=str(user_id),
        email=email,
        display_name=metadata.get("full_name") or metadata.get("name") or email,
    )


class IdentityProviderClient:
    """Implements IIdentityProvider over HTTP."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.http_client = http_client

    async def _get_user(self, access_token: str) -> httpx.Response:
        headers = {"Authorization": f"Bearer {access_token}"}
        if self.api_key:
            headers["apikey"] = self.api_key
        url = f"{self.base_url}/user"
        if self.http_client is not None:
            return await self.http_client.get(url, headers=headers, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url, headers=headers)

    async def get_identity(self, access_token: str) -> Identity:
        """Return the identity for access_token.

        Raises:
            AuthenticationException: token missing, expired or rejected.
            UpstreamUnavailableException: provider timed out or failed (5xx).
        """
        if not access_token:
            raise AuthenticationException("Missing bearer token")
        try:
            response = await self._get_user(access_token)
        except httpx.TimeoutException as e:
            raise UpstreamUnavailableException(SERVICE_NAME, "timeout") from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailableException(SERVICE_NAME, type(e).__name__) from e

        if response.status_code in (400, 401, 403, 404):
            raise AuthenticationException("Invalid or expired session")
        if not response.is_success:
            logger.error("Identity provider error: status=%d", response.status_code)
            raise UpstreamUnavailableException(SERVICE_NAME, f"status {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamUnavailableException(SERVICE_NAME, "response is not JSON") from e
        return identity_from_payload(data)
