import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import find_active_session, get_db, get_optional_admin
from app.config import get_settings
from app.errors import AuthenticationError, ValidationError
from app.models import AdminSession
from app.schemas.auth import AuthUser, LoginRequest, LoginResponse, VerifyResponse
from app.schemas.common import MessageResponse
from app.security import generate_session_token, hash_session_token, verify_admin_credentials
from app.utils.timestamps import expires_after, utcnow

logger = logging.getLogger(__name__)
settings = get_settings()
router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, session_token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_token,
        max_age=settings.session_ttl_hours * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.session_cookie_samesite,
        path="/",
    )


def _clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        secure=settings.cookie_secure,
        samesite=settings.session_cookie_samesite,
    )


async def _create_session(db: AsyncSession, email: str, request: Request) -> str:
    session_token = generate_session_token()
    db.add(
        AdminSession(
            session_token_hash=hash_session_token(session_token),
            email=email,
            expires_at=expires_after(settings.session_ttl_hours),
            user_agent=request.headers.get("user-agent"),
            ip_address=request.client.host if request.client else None,
        )
    )
    await db.flush()
    return session_token


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    if not payload.email or not payload.password:
        raise ValidationError("Email and password are required")

    if not verify_admin_credentials(payload.email, payload.password):
        logger.warning("Failed admin login for %s", payload.email)
        raise AuthenticationError("Invalid credentials")

    session_token = await _create_session(db, settings.admin_email, request)
    await db.commit()

    _set_session_cookie(response, session_token)
    logger.info("Admin %s logged in", settings.admin_email)
    return LoginResponse(message="Login successful", user=AuthUser(email=settings.admin_email))


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    session = await find_active_session(db, request.cookies.get(settings.session_cookie_name))
    if session is not None:
        session.revoked_at = utcnow()
        await db.commit()
        logger.info("Admin %s logged out", session.email)

    _clear_session_cookie(response)
    return MessageResponse(message="Logout successful")


@router.get("/verify", response_model=VerifyResponse, response_model_exclude_none=True)
async def verify(admin: AuthUser | None = Depends(get_optional_admin)):
    if admin is None:
        return VerifyResponse(authenticated=False)
    return VerifyResponse(authenticated=True, user=admin)
