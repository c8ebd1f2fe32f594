import hashlib
import hmac
import os
from functools import lru_cache

from app.config import get_settings

_ALGORITHM = "pbkdf2_sha256"
_ITERATIONS = 200_000


def _derive(plain_password: str, salt_hex: str, iterations: int) -> str:
    return hashlib.pbkdf2_hmac(
        "sha256",
        plain_password.encode("utf-8"),
        bytes.fromhex(salt_hex),
        iterations,
    ).hex()


def hash_password(plain_password: str) -> str:
    salt = os.urandom(16).hex()
    return f"{_ALGORITHM}${_ITERATIONS}${salt}${_derive(plain_password, salt, _ITERATIONS)}"


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        algorithm, iterations_raw, salt, expected_digest = password_hash.split("$", 3)
        if algorithm != _ALGORITHM:
            return False
        computed = _derive(plain_password, salt, int(iterations_raw))
    except ValueError:
        return False
    return hmac.compare_digest(computed, expected_digest)


@lru_cache
def admin_password_hash() -> str:
    """Salted hash of the single admin account, computed once per process."""
    settings = get_settings()
    return settings.admin_password_hash or hash_password(settings.admin_password)


def verify_admin_credentials(email: str, password: str) -> bool:
    settings = get_settings()
    if email.strip().lower() != settings.admin_email.strip().lower():
        return False
    return verify_password(password, admin_password_hash())
