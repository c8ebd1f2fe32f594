from datetime import datetime, timedelta, timezone

import pytest

from app.api.deps import find_active_session
from app.models import AdminSession
from app.security import (
    generate_session_token,
    hash_password,
    hash_session_token,
    verify_admin_credentials,
    verify_password,
)
from app.utils.timestamps import expires_after, utcnow


def test_password_hash_roundtrip():
    password_hash = hash_password("Test@1234")
    assert password_hash.startswith("pbkdf2_sha256$")
    assert verify_password("Test@1234", password_hash)
    assert not verify_password("test@1234", password_hash)


def test_password_hashes_are_salted():
    assert hash_password("same") != hash_password("same")


@pytest.mark.parametrize("bad_hash", ["", "plain-text", "bcrypt$10$abc$def", "pbkdf2_sha256$x$00$00"])
def test_verify_password_rejects_malformed_hash(bad_hash):
    assert verify_password("anything", bad_hash) is False


def test_default_admin_credentials():
    assert verify_admin_credentials("admin@rowad.com", "Test@1234")
    assert verify_admin_credentials(" Admin@Rowad.com ", "Test@1234")
    assert not verify_admin_credentials("admin@rowad.com", "wrong")
    assert not verify_admin_credentials("other@rowad.com", "Test@1234")


def test_session_tokens_are_unique_and_hashed():
    first, second = generate_session_token(), generate_session_token()
    assert first != second
    assert len(first) >= 48
    assert hash_session_token(first) == hash_session_token(first)
    assert hash_session_token(first) != first


def test_expires_after():
    now = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)
    assert expires_after(24, now) == datetime(2024, 6, 16, 12, 0, tzinfo=timezone.utc)
    assert expires_after(1) > utcnow()


@pytest.mark.asyncio
async def test_expired_session_is_not_active(test_session):
    token = generate_session_token()
    test_session.add(
        AdminSession(
            session_token_hash=hash_session_token(token),
            email="admin@rowad.com",
            expires_at=utcnow() - timedelta(minutes=1),
        )
    )
    await test_session.commit()

    assert await find_active_session(test_session, token) is None
    assert await find_active_session(test_session, None) is None


@pytest.mark.asyncio
async def test_live_session_is_active(test_session):
    token = generate_session_token()
    test_session.add(
        AdminSession(
            session_token_hash=hash_session_token(token),
            email="admin@rowad.com",
            expires_at=expires_after(1),
        )
    )
    await test_session.commit()

    session = await find_active_session(test_session, token)
    assert session is not None
    assert session.email == "admin@rowad.com"
