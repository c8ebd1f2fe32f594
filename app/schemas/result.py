from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import Field, model_validator

from app.schemas.common import CamelModel, WriteModel

# Strict: "5" and 5.0 are rejected, only JSON integers pass.
# Upper bound is the INTEGER column range.
MAX_SCORE = 2_147_483_647
Score = Annotated[int, Field(strict=True, ge=0, le=MAX_SCORE)]


class ResultCreateRequest(WriteModel):
    player_id: UUID
    test_id: UUID
    left_hand_score: Score
    right_hand_score: Score
    forehand_score: Score
    backhand_score: Score


class ResultUpdateRequest(WriteModel):
    player_id: UUID | None = None
    test_id: UUID | None = None
    left_hand_score: Score | None = None
    right_hand_score: Score | None = None
    forehand_score: Score | None = None
    backhand_score: Score | None = None

    @model_validator(mode="after")
    def _no_null_required_fields(self):
        self.reject_nulls(
            "player_id",
            "test_id",
            "left_hand_score",
            "right_hand_score",
            "forehand_score",
            "backhand_score",
        )
        return self


class ResultResponse(CamelModel):
    id: UUID
    player_id: UUID
    test_id: UUID
    left_hand_score: int
    right_hand_score: int
    forehand_score: int
    backhand_score: int
    total_score: int
    created_at: datetime
    updated_at: datetime
