from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.database import AsyncSessionLocal
from app.errors import AuthenticationError
from app.models import AdminSession
from app.schemas.auth import AuthUser
from app.security import hash_session_token
from app.utils.timestamps import utcnow


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def find_active_session(db: AsyncSession, session_token: str | None) -> AdminSession | None:
    if not session_token:
        return None
    result = await db.execute(
        select(AdminSession).where(
            AdminSession.session_token_hash == hash_session_token(session_token),
            AdminSession.revoked_at.is_(None),
            AdminSession.expires_at > utcnow(),
        )
    )
    return result.scalar_one_or_none()


async def get_optional_admin(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> AuthUser | None:
    session_token = request.cookies.get(get_settings().session_cookie_name)
    session = await find_active_session(db, session_token)
    if session is None:
        return None
    return AuthUser(email=session.email)


async def get_current_admin(admin: AuthUser | None = Depends(get_optional_admin)) -> AuthUser:
    if admin is None:
        raise AuthenticationError("Authentication required")
    return admin
