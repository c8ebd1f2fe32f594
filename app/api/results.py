import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_admin, get_db
from app.errors import ValidationError
from app.models import Player, Test, TestResult
from app.schemas.auth import AuthUser
from app.schemas.common import MessageResponse
from app.schemas.nested import ResultDetailResponse, ResultWithPlayerResponse, ResultWithTestResponse
from app.schemas.result import ResultCreateRequest, ResultUpdateRequest
from app.services import assembler
from app.utils.timestamps import utcnow

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/results", tags=["results"])


async def _ensure_references(db: AsyncSession, player_id: UUID | None, test_id: UUID | None) -> None:
    errors = []
    if player_id is not None and await db.get(Player, player_id) is None:
        errors.append(f"playerId: player {player_id} does not exist")
    if test_id is not None and await db.get(Test, test_id) is None:
        errors.append(f"testId: test {test_id} does not exist")
    if errors:
        raise ValidationError("Referenced player or test does not exist", errors=errors)


@router.get("", response_model=list[ResultDetailResponse])
async def list_results(
    page: int = Query(default=1, ge=1, le=assembler.MAX_PAGE),
    limit: int = Query(default=assembler.DEFAULT_PAGE_SIZE, ge=1, description="Capped at 100"),
    db: AsyncSession = Depends(get_db),
):
    return await assembler.list_results(db, page=page, limit=limit)


@router.get("/player/{player_id}", response_model=list[ResultWithTestResponse])
async def get_player_results(player_id: UUID, db: AsyncSession = Depends(get_db)):
    return await assembler.results_for_player(db, player_id)


@router.get("/test/{test_id}", response_model=list[ResultWithPlayerResponse])
async def get_test_results(test_id: UUID, db: AsyncSession = Depends(get_db)):
    return await assembler.results_for_test(db, test_id)


@router.get("/{result_id}", response_model=ResultDetailResponse)
async def get_result(result_id: UUID, db: AsyncSession = Depends(get_db)):
    return await assembler.get_result_detail(db, result_id)


@router.post("", response_model=ResultDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_result(
    payload: ResultCreateRequest,
    db: AsyncSession = Depends(get_db),
    _admin: AuthUser = Depends(get_current_admin),
):
    await _ensure_references(db, payload.player_id, payload.test_id)

    result = TestResult(
        player_id=payload.player_id,
        test_id=payload.test_id,
        left_hand_score=payload.left_hand_score,
        right_hand_score=payload.right_hand_score,
        forehand_score=payload.forehand_score,
        backhand_score=payload.backhand_score,
    )
    db.add(result)
    await db.commit()

    logger.info("Created test result %s (player %s, test %s)", result.id, result.player_id, result.test_id)
    return await assembler.get_result_detail(db, result.id)


@router.put("/{result_id}", response_model=ResultDetailResponse)
async def update_result(
    result_id: UUID,
    payload: ResultUpdateRequest,
    db: AsyncSession = Depends(get_db),
    _admin: AuthUser = Depends(get_current_admin),
):
    result = await assembler.get_result_or_404(db, result_id)
    await _ensure_references(db, payload.player_id, payload.test_id)

    update_data = payload.model_dump(exclude_unset=True)
    for field_name, value in update_data.items():
        setattr(result, field_name, value)
    result.updated_at = utcnow()

    await db.commit()

    logger.info("Updated test result %s (%s)", result_id, ", ".join(sorted(update_data)) or "no fields")
    return await assembler.get_result_detail(db, result_id)


@router.delete("/{result_id}", response_model=MessageResponse)
async def delete_result(
    result_id: UUID,
    db: AsyncSession = Depends(get_db),
    _admin: AuthUser = Depends(get_current_admin),
):
    result = await assembler.get_result_or_404(db, result_id)

    await db.delete(result)
    await db.commit()

    logger.info("Deleted test result %s", result_id)
    return MessageResponse(message="Test result deleted successfully")
