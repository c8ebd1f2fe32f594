"""Common schemas shared across endpoints."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON bodies use camelCase keys; Python code uses snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WriteModel(CamelModel):
    """Request body: unknown keys (e.g. a client supplied totalScore) are rejected."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    def reject_nulls(self, *field_names: str) -> None:
        for field_name in field_names:
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                raise ValueError(f"{to_camel(field_name)} cannot be null")


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    message: str
    errors: list[str] | None = None
