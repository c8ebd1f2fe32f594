from datetime import datetime, date
import enum
import uuid

from sqlalchemy import String, Text, Date, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.sql_types import ENTITY_ID_SQL_TYPE, value_enum
from app.utils.timestamps import utcnow


class TestType(str, enum.Enum):
    """Work/rest interval protocol, seconds of work then seconds of rest."""

    WORK_60_REST_30 = "60_30"
    WORK_30_REST_30 = "30_30"
    WORK_30_REST_60 = "30_60"


TEST_TYPE_LABELS = {
    TestType.WORK_60_REST_30: "Super Solo (60s/30s)",
    TestType.WORK_30_REST_30: "Juniors Solo (30s/30s)",
    TestType.WORK_30_REST_60: "Speed Solo (30s/60s)",
}


class Test(Base):
    __tablename__ = "tests"
    __test__ = False  # not a pytest test class

    id: Mapped[uuid.UUID] = mapped_column(ENTITY_ID_SQL_TYPE, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    test_type: Mapped[TestType] = mapped_column(value_enum(TestType, "test_type"), nullable=False, index=True)
    date_conducted: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    test_results: Mapped[list["TestResult"]] = relationship(
        "TestResult",
        back_populates="test",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
