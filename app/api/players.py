import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_admin, get_db
from app.models import Gender, Player
from app.schemas.auth import AuthUser
from app.schemas.common import MessageResponse
from app.schemas.nested import PlayerDetailResponse
from app.schemas.player import PlayerCreateRequest, PlayerResponse, PlayerUpdateRequest
from app.services import assembler
from app.utils.timestamps import utcnow

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/players", tags=["players"])


@router.get("", response_model=list[PlayerResponse])
async def list_players(
    search: str | None = Query(default=None, description="Case-insensitive substring of the name"),
    gender: Gender | None = Query(default=None),
    age_group: str | None = Query(default=None, alias="ageGroup"),
    page: int = Query(default=1, ge=1, le=assembler.MAX_PAGE),
    limit: int = Query(default=assembler.DEFAULT_PAGE_SIZE, ge=1, description="Capped at 100"),
    db: AsyncSession = Depends(get_db),
):
    """List players newest first, each with derived age and age group."""
    return await assembler.list_players(
        db,
        search=search,
        gender=gender,
        age_group=age_group,
        page=page,
        limit=limit,
    )


@router.get("/{player_id}", response_model=PlayerDetailResponse)
async def get_player(player_id: UUID, db: AsyncSession = Depends(get_db)):
    return await assembler.get_player_detail(db, player_id)


@router.post("", response_model=PlayerResponse, status_code=status.HTTP_201_CREATED)
async def create_player(
    payload: PlayerCreateRequest,
    db: AsyncSession = Depends(get_db),
    _admin: AuthUser = Depends(get_current_admin),
):
    player = Player(
        name=payload.name,
        date_of_birth=payload.date_of_birth,
        gender=payload.gender,
    )
    db.add(player)
    await db.commit()
    await db.refresh(player)

    logger.info("Created player %s", player.id)
    return assembler.serialize_player(player)


@router.put("/{player_id}", response_model=PlayerResponse)
async def update_player(
    player_id: UUID,
    payload: PlayerUpdateRequest,
    db: AsyncSession = Depends(get_db),
    _admin: AuthUser = Depends(get_current_admin),
):
    player = await assembler.get_player_or_404(db, player_id)

    update_data = payload.model_dump(exclude_unset=True)
    for field_name, value in update_data.items():
        setattr(player, field_name, value)
    player.updated_at = utcnow()

    await db.commit()
    await db.refresh(player)

    logger.info("Updated player %s (%s)", player.id, ", ".join(sorted(update_data)) or "no fields")
    return assembler.serialize_player(player)


@router.delete("/{player_id}", response_model=MessageResponse)
async def delete_player(
    player_id: UUID,
    db: AsyncSession = Depends(get_db),
    _admin: AuthUser = Depends(get_current_admin),
):
    player = await assembler.get_player_or_404(db, player_id)

    # Test results go with the player (ON DELETE CASCADE).
    await db.delete(player)
    await db.commit()

    logger.info("Deleted player %s", player_id)
    return MessageResponse(message="Player deleted successfully")
