import enum

from sqlalchemy import Enum as SQLEnum, Uuid

# Native UUID on PostgreSQL, CHAR(32) on SQLite tests.
ENTITY_ID_SQL_TYPE = Uuid(as_uuid=True)


def value_enum(enum_cls: type[enum.Enum], name: str) -> SQLEnum:
    """Enum column persisted by member value ("60_30"), not member name."""
    return SQLEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )
