"""Health, readiness and cross-cutting middleware tests."""

from httpx import AsyncClient


async def test_health_returns_200(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status/version."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "version" in data


async def test_ready_returns_200_when_store_answers(client: AsyncClient) -> None:
    """GET /api/v1/health/ready runs SELECT 1 against the store."""
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200


async def test_request_id_is_generated(client: AsyncClient) -> None:
    """Every response carries X-Request-ID."""
    response = await client.get("/api/v1/health")
    assert response.headers.get("X-Request-ID")


async def test_request_id_is_propagated(client: AsyncClient) -> None:
    """A caller-supplied X-Request-ID is echoed back."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


async def test_security_headers_on_api(client: AsyncClient) -> None:
    """API responses carry the hardening headers."""
    response = await client.get("/api/v1/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    """Request ids with characters outside [A-Za-z0-9_-] are replaced."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "bad id;drop"})
    assert response.headers["X-Request-ID"] != "bad id;drop"
    assert len(response.headers["X-Request-ID"]) == 32
