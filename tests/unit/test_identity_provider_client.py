"""Tests for IdentityProviderClient against a mocked provider (httpx.MockTransport)."""

import httpx
import pytest

from noticeboard.domain.exceptions import AuthenticationException, UpstreamUnavailableException
from noticeboard.infrastructure.external.identity import IdentityProviderClient
from noticeboard.infrastructure.external.identity.provider_client import identity_from_payload

BASE = "https://identity.test/auth/v1"


def _client(handler, api_key: str | None = "anon-key") -> IdentityProviderClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return IdentityProviderClient(base_url=BASE + "/", api_key=api_key, http_client=http_client)


async def test_valid_token_returns_identity() -> None:
    """200 with a user object resolves to Identity; headers carry token and apikey."""
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["apikey"] = request.headers.get("apikey")
        return httpx.Response(
            200,
            json={
                "id": "U1",
                "email": "u1@example.com",
                "user_metadata": {"full_name": "User One"},
            },
        )

    identity = await _client(handler).get_identity("tok")
    assert identity.id == "U1"
    assert identity.email == "u1@example.com"
    assert identity.display_name == "User One"
    assert seen == {"url": f"{BASE}/user", "auth": "Bearer tok", "apikey": "anon-key"}


@pytest.mark.parametrize("status", [400, 401, 403, 404])
async def test_rejected_token_is_authentication_error(status: int) -> None:
    """Client-error statuses mean the session is invalid."""
    client = _client(lambda request: httpx.Response(status, json={"msg": "bad jwt"}))
    with pytest.raises(AuthenticationException):
        await client.get_identity("tok")


async def test_server_error_is_upstream_unavailable() -> None:
    """5xx is a transient upstream failure, not an auth failure."""
    client = _client(lambda request: httpx.Response(502))
    with pytest.raises(UpstreamUnavailableException) as exc_info:
        await client.get_identity("tok")
    assert exc_info.value.retryable is True


async def test_timeout_is_upstream_unavailable() -> None:
    """Timeouts map to UpstreamUnavailableException."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("slow", request=request)

    with pytest.raises(UpstreamUnavailableException):
        await _client(handler).get_identity("tok")


async def test_empty_token_is_rejected_locally() -> None:
    """An empty token never reaches the provider."""
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"id": "U1"})

    with pytest.raises(AuthenticationException):
        await _client(handler).get_identity("")
    assert calls == []


def test_identity_from_payload_display_name_fallbacks() -> None:
    """display_name falls back from full_name to name to email."""
    assert identity_from_payload({"id": "1", "user_metadata": {"name": "N"}}).display_name == "N"
    assert identity_from_payload({"id": "1", "email": "e@x.test"}).display_name == "e@x.test"
    assert identity_from_payload({"id": "1"}).display_name is None


def test_identity_from_payload_requires_id() -> None:
    """A user object without id is treated as an auth failure."""
    with pytest.raises(AuthenticationException):
        identity_from_payload({"email": "e@x.test"})
