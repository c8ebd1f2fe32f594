import pytest
from httpx import AsyncClient
from sqlalchemy import select

from app.config import get_settings
from app.models import AdminSession
from app.security import hash_session_token

ADMIN_EMAIL = get_settings().admin_email
ADMIN_PASSWORD = get_settings().admin_password


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert "timestamp" in data


@pytest.mark.asyncio
async def test_unknown_route_returns_message(client: AsyncClient):
    response = await client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"message": "Route not found"}


@pytest.mark.asyncio
async def test_login_sets_session_cookie(client: AsyncClient, test_session):
    response = await client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Login successful"
    assert data["user"] == {"email": ADMIN_EMAIL}

    cookie_name = get_settings().session_cookie_name
    session_token = client.cookies.get(cookie_name)
    assert session_token
    assert "httponly" in response.headers["set-cookie"].lower()

    # Only the hash of the token is stored.
    stored = (await test_session.execute(select(AdminSession))).scalars().all()
    assert len(stored) == 1
    assert stored[0].session_token_hash == hash_session_token(session_token)
    assert stored[0].session_token_hash != session_token


@pytest.mark.asyncio
async def test_login_email_is_case_insensitive(client: AsyncClient):
    response = await client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient):
    response = await client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": "wrong-password"},
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"
    assert get_settings().session_cookie_name not in client.cookies


@pytest.mark.asyncio
async def test_login_unknown_email(client: AsyncClient):
    response = await client.post(
        "/api/auth/login",
        json={"email": "someone@else.com", "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_requires_both_fields(client: AsyncClient):
    response = await client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ""})
    assert response.status_code == 400

    response = await client.post("/api/auth/login", json={"email": ADMIN_EMAIL})
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


@pytest.mark.asyncio
async def test_verify_without_session(client: AsyncClient):
    response = await client.get("/api/auth/verify")
    assert response.status_code == 200
    assert response.json() == {"authenticated": False}


@pytest.mark.asyncio
async def test_verify_with_session(admin_client: AsyncClient):
    response = await admin_client.get("/api/auth/verify")
    assert response.status_code == 200
    assert response.json() == {"authenticated": True, "user": {"email": ADMIN_EMAIL}}


@pytest.mark.asyncio
async def test_logout_revokes_session(admin_client: AsyncClient, test_session):
    cookie_name = get_settings().session_cookie_name
    session_token = admin_client.cookies.get(cookie_name)

    response = await admin_client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"message": "Logout successful"}

    stored = (await test_session.execute(select(AdminSession))).scalar_one()
    assert stored.revoked_at is not None

    # The old token no longer authenticates even if replayed.
    admin_client.cookies.set(cookie_name, session_token)
    response = await admin_client.get("/api/auth/verify")
    assert response.json() == {"authenticated": False}


@pytest.mark.asyncio
async def test_logout_without_session_succeeds(client: AsyncClient):
    response = await client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json()["message"] == "Logout successful"


@pytest.mark.asyncio
async def test_tampered_cookie_is_rejected(client: AsyncClient):
    client.cookies.set(get_settings().session_cookie_name, "not-a-real-session")
    response = await client.get("/api/auth/verify")
    assert response.json() == {"authenticated": False}

    response = await client.post(
        "/api/players",
        json={"name": "Ali", "dateOfBirth": "2012-05-01", "gender": "male"},
    )
    assert response.status_code == 401
