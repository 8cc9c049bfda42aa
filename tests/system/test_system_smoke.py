"""
System smoke test: the register -> login -> profile flow end to end,
in-process against the temporary SQLite database.
"""

import pytest
from httpx import AsyncClient

API = "/api"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    """Health endpoint reports the database reachable."""
    r = await client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["database"] == "connected"
    assert "version" in data


@pytest.mark.asyncio
async def test_root(client: AsyncClient):
    r = await client.get("/")
    assert r.status_code == 200
    assert r.json()["api"] == API


@pytest.mark.asyncio
async def test_register_login_profile(client: AsyncClient):
    """register -> 201, login -> 200 with tokens, profile -> 200 with the email."""
    r = await client.post(
        f"{API}/auth/register",
        json={
            "email": "a@x.com",
            "password": "Abc12345!",
            "firstName": "A",
            "lastName": "B",
        },
    )
    # One-letter names are below the minimum length
    assert r.status_code == 400

    r = await client.post(
        f"{API}/auth/register",
        json={
            "email": "a@x.com",
            "password": "Abc12345!",
            "firstName": "Al",
            "lastName": "Bo",
        },
    )
    assert r.status_code == 201, r.text

    r = await client.post(
        f"{API}/auth/login",
        json={"email": "a@x.com", "password": "Abc12345!"},
    )
    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["accessToken"]
    assert data["refreshToken"]

    r = await client.get(
        f"{API}/users/profile",
        headers={"Authorization": f"Bearer {data['accessToken']}"},
    )
    assert r.status_code == 200
    assert r.json()["data"]["email"] == "a@x.com"


@pytest.mark.asyncio
async def test_request_id_echoed(client: AsyncClient):
    r = await client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert r.headers["X-Request-ID"] == "abc-123"


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client: AsyncClient):
    r = await client.get(f"{API}/nope")
    assert r.status_code == 404
    body = r.json()
    assert body["success"] is False
    assert body["statusCode"] == 404
