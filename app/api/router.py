from fastapi import APIRouter

from app.api.auth import router as auth_router
from app.api.players import router as players_router
from app.api.tests import router as tests_router
from app.api.results import router as results_router
from app.schemas.common import ErrorResponse

api_router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        401: {"model": ErrorResponse, "description": "Authentication required"},
        404: {"model": ErrorResponse, "description": "Not found"},
    }
)

# Admin session
api_router.include_router(auth_router)

# Club data
api_router.include_router(players_router)
api_router.include_router(tests_router)
api_router.include_router(results_router)
