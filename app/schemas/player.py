from datetime import date, datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, StringConstraints, model_validator

from app.models.player import Gender
from app.schemas.common import CamelModel, WriteModel

PlayerName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


def _not_in_future(value: date) -> date:
    if value > date.today():
        raise ValueError("date of birth cannot be in the future")
    return value


BirthDate = Annotated[date, AfterValidator(_not_in_future)]


class PlayerCreateRequest(WriteModel):
    name: PlayerName
    date_of_birth: BirthDate
    gender: Gender


class PlayerUpdateRequest(WriteModel):
    name: PlayerName | None = None
    date_of_birth: BirthDate | None = None
    gender: Gender | None = None

    @model_validator(mode="after")
    def _no_null_required_fields(self):
        self.reject_nulls("name", "date_of_birth", "gender")
        return self


class PlayerResponse(CamelModel):
    id: UUID
    name: str
    date_of_birth: date
    gender: Gender
    age: int
    age_group: str
    created_at: datetime
    updated_at: datetime
