from datetime import date, datetime
from typing import Annotated
from uuid import UUID

from pydantic import StringConstraints, model_validator

from app.models.test import TestType
from app.schemas.common import CamelModel, WriteModel

TestName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class TestCreateRequest(WriteModel):
    __test__ = False

    name: TestName
    test_type: TestType
    date_conducted: date
    description: str | None = None


class TestUpdateRequest(WriteModel):
    __test__ = False

    name: TestName | None = None
    test_type: TestType | None = None
    date_conducted: date | None = None
    description: str | None = None

    @model_validator(mode="after")
    def _no_null_required_fields(self):
        self.reject_nulls("name", "test_type", "date_conducted")
        return self


class TestResponse(CamelModel):
    __test__ = False

    id: UUID
    name: str
    test_type: TestType
    date_conducted: date
    description: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
