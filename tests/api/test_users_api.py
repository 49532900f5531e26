"""User directory and profile API tests."""

from httpx import AsyncClient

from tests.conftest import MASTER, READER, bearer


async def test_reader_cannot_list_users(client: AsyncClient, seed_roles: None) -> None:
    """viewUsers is not granted to user."""
    response = await client.get("/api/v1/users", headers=bearer("token-reader"))
    assert response.status_code == 403


async def test_my_profile_is_created_on_first_read(client: AsyncClient, seed_roles: None) -> None:
    """GET /users/me/profile creates the profile from identity data."""
    response = await client.get("/api/v1/users/me/profile", headers=bearer("token-reader"))
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == READER.id
    assert data["email"] == READER.email
    assert data["full_name"] == READER.display_name


async def test_update_my_profile(client: AsyncClient, seed_roles: None) -> None:
    """PUT /users/me/profile changes full_name and avatar_url."""
    response = await client.put(
        "/api/v1/users/me/profile",
        json={"full_name": "Rex R.", "avatar_url": "https://cdn.test/rex.png"},
        headers=bearer("token-reader"),
    )
    assert response.status_code == 200
    assert response.json()["full_name"] == "Rex R."
    assert response.json()["avatar_url"] == "https://cdn.test/rex.png"


async def test_update_rejects_non_http_avatar(client: AsyncClient, seed_roles: None) -> None:
    """avatar_url must be http(s)."""
    response = await client.put(
        "/api/v1/users/me/profile",
        json={"avatar_url": "javascript:alert(1)"},
        headers=bearer("token-reader"),
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "avatar_url"}


async def test_unassigned_cannot_manage_profile(client: AsyncClient) -> None:
    """Role selection comes first."""
    response = await client.get("/api/v1/users/me/profile", headers=bearer("token-new"))
    assert response.status_code == 403


async def test_master_lists_users_with_roles(client: AsyncClient, seed_roles: None) -> None:
    """Directory rows carry the stored role; identities without a role show null."""
    for token in ("token-master", "token-reader"):
        await client.get("/api/v1/users/me/profile", headers=bearer(token))
    verify = await client.post(
        "/api/v1/roles/verify", json={"requested_role": "user"}, headers=bearer("token-new")
    )
    assert verify.status_code == 200

    response = await client.get("/api/v1/users", headers=bearer("token-master"))
    assert response.status_code == 200
    roles = {u["id"]: u["role"] for u in response.json()}
    assert roles[MASTER.id] == "master"
    assert roles[READER.id] == "user"
    assert roles["user-new"] == "user"
