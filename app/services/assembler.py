"""Read side of the API: fetch rows, attach derived fields, nest and filter.

Every response that carries a player gets ``age``/``ageGroup`` and every
result gets ``totalScore`` here, computed against one reference date per
request. Age-group filters run after derivation because the label is never
stored.
"""

from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.errors import NotFoundError, ValidationError
from app.models import Gender, Player, Test, TestResult, TestType
from app.schemas.nested import (
    PlayerDetailResponse,
    ResultDetailResponse,
    ResultWithPlayerResponse,
    ResultWithTestResponse,
    TestDetailResponse,
)
from app.schemas.player import PlayerResponse
from app.schemas.result import ResultResponse
from app.schemas.test import TestResponse
from app.utils.derivation import AGE_GROUPS, age_group_for_age, calculate_age, total_score_of

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100
# Keeps OFFSET well inside the database integer range.
MAX_PAGE = 100_000


def page_window(page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> tuple[int, int]:
    """Return ``(offset, limit)`` with limit capped at MAX_PAGE_SIZE."""
    if page < 1 or page > MAX_PAGE:
        raise ValidationError(f"page must be between 1 and {MAX_PAGE}")
    if limit < 1:
        raise ValidationError("limit must be >= 1")
    limit = min(limit, MAX_PAGE_SIZE)
    return (page - 1) * limit, limit


def validate_age_group(age_group: str | None) -> str | None:
    if age_group is None or age_group == "":
        return None
    if age_group not in AGE_GROUPS:
        raise ValidationError(
            f"Unknown age group: {age_group}",
            errors=[f"ageGroup: must be one of {', '.join(AGE_GROUPS)}"],
        )
    return age_group


# --- Serialization ---

def serialize_player(player: Player, today: date | None = None) -> PlayerResponse:
    today = today or date.today()
    age = calculate_age(player.date_of_birth, today)
    return PlayerResponse(
        id=player.id,
        name=player.name,
        date_of_birth=player.date_of_birth,
        gender=player.gender,
        age=age,
        age_group=age_group_for_age(age),
        created_at=player.created_at,
        updated_at=player.updated_at,
    )


def serialize_test(test: Test) -> TestResponse:
    return TestResponse.model_validate(test)


def _result_fields(result: TestResult) -> dict:
    return {
        "id": result.id,
        "player_id": result.player_id,
        "test_id": result.test_id,
        "left_hand_score": result.left_hand_score,
        "right_hand_score": result.right_hand_score,
        "forehand_score": result.forehand_score,
        "backhand_score": result.backhand_score,
        "total_score": total_score_of(result),
        "created_at": result.created_at,
        "updated_at": result.updated_at,
    }


def serialize_result(result: TestResult) -> ResultResponse:
    return ResultResponse(**_result_fields(result))


def serialize_result_with_player(result: TestResult, today: date | None = None) -> ResultWithPlayerResponse:
    return ResultWithPlayerResponse(
        **_result_fields(result),
        player=serialize_player(result.player, today) if result.player is not None else None,
    )


def serialize_result_detail(result: TestResult, today: date | None = None) -> ResultDetailResponse:
    return ResultDetailResponse(
        **_result_fields(result),
        player=serialize_player(result.player, today) if result.player is not None else None,
        test=serialize_test(result.test) if result.test is not None else None,
    )


def filter_results_by_player(
    results: list[ResultWithPlayerResponse],
    gender: Gender | None = None,
    age_group: str | None = None,
) -> list[ResultWithPlayerResponse]:
    """Post-derivation filter on the nested player of each result."""
    filtered = results
    if gender is not None:
        filtered = [r for r in filtered if r.player is not None and r.player.gender == gender]
    if age_group is not None:
        filtered = [r for r in filtered if r.player is not None and r.player.age_group == age_group]
    return filtered


# --- Players ---

async def list_players(
    db: AsyncSession,
    *,
    search: str | None = None,
    gender: Gender | None = None,
    age_group: str | None = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    today: date | None = None,
) -> list[PlayerResponse]:
    offset, limit = page_window(page, limit)
    age_group = validate_age_group(age_group)
    today = today or date.today()

    query = select(Player)
    if search and search.strip():
        query = query.where(Player.name.icontains(search.strip(), autoescape=True))
    if gender is not None:
        query = query.where(Player.gender == gender)
    query = query.order_by(Player.created_at.desc())

    if age_group is None:
        result = await db.execute(query.offset(offset).limit(limit))
        return [serialize_player(player, today) for player in result.scalars().all()]

    # Age group is derived, so it filters the full candidate set before paging.
    result = await db.execute(query)
    players = [serialize_player(player, today) for player in result.scalars().all()]
    matching = [player for player in players if player.age_group == age_group]
    return matching[offset:offset + limit]


async def get_player_or_404(db: AsyncSession, player_id: UUID) -> Player:
    player = await db.get(Player, player_id)
    if player is None:
        raise NotFoundError("Player not found")
    return player


async def get_player_detail(
    db: AsyncSession,
    player_id: UUID,
    today: date | None = None,
) -> PlayerDetailResponse:
    player = await get_player_or_404(db, player_id)
    today = today or date.today()

    result = await db.execute(
        select(TestResult)
        .where(TestResult.player_id == player_id)
        .options(selectinload(TestResult.test))
        .order_by(TestResult.created_at.desc())
    )
    test_results = [
        ResultWithTestResponse(
            **_result_fields(row),
            test=serialize_test(row.test) if row.test is not None else None,
        )
        for row in result.scalars().all()
    ]
    return PlayerDetailResponse(
        **serialize_player(player, today).model_dump(),
        test_results=test_results,
    )


# --- Tests ---

async def list_tests(
    db: AsyncSession,
    *,
    test_type: TestType | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> list[TestResponse]:
    offset, limit = page_window(page, limit)
    if date_from is not None and date_to is not None and date_from > date_to:
        raise ValidationError("dateFrom must not be after dateTo")

    query = select(Test)
    if test_type is not None:
        query = query.where(Test.test_type == test_type)
    if date_from is not None:
        query = query.where(Test.date_conducted >= date_from)
    if date_to is not None:
        query = query.where(Test.date_conducted <= date_to)

    result = await db.execute(
        query.order_by(Test.date_conducted.desc(), Test.created_at.desc()).offset(offset).limit(limit)
    )
    return [serialize_test(test) for test in result.scalars().all()]


async def get_test_or_404(db: AsyncSession, test_id: UUID) -> Test:
    test = await db.get(Test, test_id)
    if test is None:
        raise NotFoundError("Test not found")
    return test


async def _results_with_players(
    db: AsyncSession,
    test_id: UUID,
    today: date,
) -> list[ResultWithPlayerResponse]:
    result = await db.execute(
        select(TestResult)
        .where(TestResult.test_id == test_id)
        .options(selectinload(TestResult.player))
        .order_by(TestResult.created_at.desc())
    )
    return [serialize_result_with_player(row, today) for row in result.scalars().all()]


async def get_test_detail(
    db: AsyncSession,
    test_id: UUID,
    *,
    include_results: bool = False,
    gender: Gender | None = None,
    age_group: str | None = None,
    today: date | None = None,
) -> TestDetailResponse:
    test = await get_test_or_404(db, test_id)
    age_group = validate_age_group(age_group)
    detail = TestDetailResponse(**serialize_test(test).model_dump())
    if not include_results:
        return detail

    results = await _results_with_players(db, test_id, today or date.today())
    detail.test_results = filter_results_by_player(results, gender=gender, age_group=age_group)
    return detail


# --- Results ---

async def list_results(
    db: AsyncSession,
    *,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    today: date | None = None,
) -> list[ResultDetailResponse]:
    offset, limit = page_window(page, limit)
    result = await db.execute(
        select(TestResult)
        .options(selectinload(TestResult.player), selectinload(TestResult.test))
        .order_by(TestResult.created_at.desc())
        .offset(offset)
        .limit(limit)
    )
    today = today or date.today()
    return [serialize_result_detail(row, today) for row in result.scalars().all()]


async def results_for_player(db: AsyncSession, player_id: UUID) -> list[ResultWithTestResponse]:
    await get_player_or_404(db, player_id)
    result = await db.execute(
        select(TestResult)
        .where(TestResult.player_id == player_id)
        .options(selectinload(TestResult.test))
        .order_by(TestResult.created_at.desc())
    )
    return [
        ResultWithTestResponse(
            **_result_fields(row),
            test=serialize_test(row.test) if row.test is not None else None,
        )
        for row in result.scalars().all()
    ]


async def results_for_test(
    db: AsyncSession,
    test_id: UUID,
    today: date | None = None,
) -> list[ResultWithPlayerResponse]:
    await get_test_or_404(db, test_id)
    return await _results_with_players(db, test_id, today or date.today())


async def get_result_or_404(db: AsyncSession, result_id: UUID) -> TestResult:
    result = await db.execute(
        select(TestResult)
        .where(TestResult.id == result_id)
        .options(selectinload(TestResult.player), selectinload(TestResult.test))
        .execution_options(populate_existing=True)
    )
    row = result.scalar_one_or_none()
    if row is None:
        raise NotFoundError("Test result not found")
    return row


async def get_result_detail(
    db: AsyncSession,
    result_id: UUID,
    today: date | None = None,
) -> ResultDetailResponse:
    return serialize_result_detail(await get_result_or_404(db, result_id), today)
