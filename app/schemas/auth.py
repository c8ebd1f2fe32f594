from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthUser(BaseModel):
    email: str


class LoginResponse(BaseModel):
    message: str
    user: AuthUser


class VerifyResponse(BaseModel):
    authenticated: bool
    user: AuthUser | None = None
