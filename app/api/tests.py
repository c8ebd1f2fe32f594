import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_admin, get_db
from app.models import Gender, Test, TestType
from app.schemas.auth import AuthUser
from app.schemas.common import MessageResponse
from app.schemas.nested import TestDetailResponse
from app.schemas.test import TestCreateRequest, TestResponse, TestUpdateRequest
from app.services import assembler
from app.utils.timestamps import utcnow

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tests", tags=["tests"])


@router.get("", response_model=list[TestResponse])
async def list_tests(
    test_type: TestType | None = Query(default=None, alias="testType"),
    date_from: date | None = Query(default=None, alias="dateFrom"),
    date_to: date | None = Query(default=None, alias="dateTo"),
    page: int = Query(default=1, ge=1, le=assembler.MAX_PAGE),
    limit: int = Query(default=assembler.DEFAULT_PAGE_SIZE, ge=1, description="Capped at 100"),
    db: AsyncSession = Depends(get_db),
):
    """List tests, most recently conducted first."""
    return await assembler.list_tests(
        db,
        test_type=test_type,
        date_from=date_from,
        date_to=date_to,
        page=page,
        limit=limit,
    )


@router.get("/{test_id}", response_model=TestDetailResponse, response_model_exclude_unset=True)
async def get_test(
    test_id: UUID,
    include_results: bool = Query(default=False, alias="includeResults"),
    gender: Gender | None = Query(default=None),
    age_group: str | None = Query(default=None, alias="ageGroup"),
    db: AsyncSession = Depends(get_db),
):
    """Get a test; with ``includeResults`` its results are nested and filtered by player."""
    return await assembler.get_test_detail(
        db,
        test_id,
        include_results=include_results,
        gender=gender,
        age_group=age_group,
    )


@router.post("", response_model=TestResponse, status_code=status.HTTP_201_CREATED)
async def create_test(
    payload: TestCreateRequest,
    db: AsyncSession = Depends(get_db),
    _admin: AuthUser = Depends(get_current_admin),
):
    test = Test(
        name=payload.name,
        test_type=payload.test_type,
        date_conducted=payload.date_conducted,
        description=payload.description,
    )
    db.add(test)
    await db.commit()
    await db.refresh(test)

    logger.info("Created test %s (%s)", test.id, test.test_type.value)
    return assembler.serialize_test(test)


@router.put("/{test_id}", response_model=TestResponse)
async def update_test(
    test_id: UUID,
    payload: TestUpdateRequest,
    db: AsyncSession = Depends(get_db),
    _admin: AuthUser = Depends(get_current_admin),
):
    test = await assembler.get_test_or_404(db, test_id)

    update_data = payload.model_dump(exclude_unset=True)
    for field_name, value in update_data.items():
        setattr(test, field_name, value)
    test.updated_at = utcnow()

    await db.commit()
    await db.refresh(test)

    logger.info("Updated test %s (%s)", test.id, ", ".join(sorted(update_data)) or "no fields")
    return assembler.serialize_test(test)


@router.delete("/{test_id}", response_model=MessageResponse)
async def delete_test(
    test_id: UUID,
    db: AsyncSession = Depends(get_db),
    _admin: AuthUser = Depends(get_current_admin),
):
    test = await assembler.get_test_or_404(db, test_id)

    # Test results go with the test (ON DELETE CASCADE).
    await db.delete(test)
    await db.commit()

    logger.info("Deleted test %s", test_id)
    return MessageResponse(message="Test deleted successfully")
