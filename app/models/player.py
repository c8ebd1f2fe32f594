from datetime import datetime, date
import enum
import uuid

from sqlalchemy import String, Date, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.sql_types import ENTITY_ID_SQL_TYPE, value_enum
from app.utils.timestamps import utcnow


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"


class Player(Base):
    __tablename__ = "players"

    id: Mapped[uuid.UUID] = mapped_column(ENTITY_ID_SQL_TYPE, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    gender: Mapped[Gender] = mapped_column(value_enum(Gender, "gender"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    test_results: Mapped[list["TestResult"]] = relationship(
        "TestResult",
        back_populates="player",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
