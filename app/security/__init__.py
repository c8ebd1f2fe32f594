from app.security.passwords import hash_password, verify_admin_credentials, verify_password
from app.security.tokens import generate_session_token, hash_session_token

__all__ = [
    "hash_password",
    "verify_password",
    "verify_admin_credentials",
    "generate_session_token",
    "hash_session_token",
]
