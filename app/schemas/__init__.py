from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.player import PlayerCreateRequest, PlayerUpdateRequest, PlayerResponse
from app.schemas.test import TestCreateRequest, TestUpdateRequest, TestResponse
from app.schemas.result import ResultCreateRequest, ResultUpdateRequest, ResultResponse
from app.schemas.nested import (
    PlayerDetailResponse,
    ResultDetailResponse,
    ResultWithPlayerResponse,
    ResultWithTestResponse,
    TestDetailResponse,
)
from app.schemas.auth import AuthUser, LoginRequest, LoginResponse, VerifyResponse

__all__ = [
    "ErrorResponse",
    "MessageResponse",
    "PlayerCreateRequest",
    "PlayerUpdateRequest",
    "PlayerResponse",
    "PlayerDetailResponse",
    "TestCreateRequest",
    "TestUpdateRequest",
    "TestResponse",
    "TestDetailResponse",
    "ResultCreateRequest",
    "ResultUpdateRequest",
    "ResultResponse",
    "ResultDetailResponse",
    "ResultWithPlayerResponse",
    "ResultWithTestResponse",
    "AuthUser",
    "LoginRequest",
    "LoginResponse",
    "VerifyResponse",
]
