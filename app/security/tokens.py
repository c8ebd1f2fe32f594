import hashlib
import hmac
import secrets

from app.config import get_settings


def generate_session_token() -> str:
    return secrets.token_urlsafe(48)


def hash_session_token(session_token: str) -> str:
    """Keyed digest of the cookie value; the raw token is never stored."""
    return hmac.new(
        get_settings().session_secret.encode("utf-8"),
        session_token.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
