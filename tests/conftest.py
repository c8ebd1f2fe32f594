from datetime import date, datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base
from app.api.deps import get_db  # Import from where routes actually use it
from app.config import get_settings
from app.models import Gender, Player, Test, TestResult, TestType


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_EMAIL = get_settings().admin_email
ADMIN_PASSWORD = get_settings().admin_password


def born_years_ago(age: int) -> date:
    """Birth date of someone who turned ``age`` forty days ago."""
    anchor = date.today() - timedelta(days=40)
    try:
        return anchor.replace(year=anchor.year - age)
    except ValueError:
        return anchor.replace(year=anchor.year - age, day=28)


@pytest.fixture(scope="function")
async def test_engine():
    """Create test database engine with foreign keys enforced (ON DELETE CASCADE)."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture(scope="function")
async def client(test_session) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with overridden database dependency."""

    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def admin_client(client) -> AsyncClient:
    """Same client, holding a logged-in admin session cookie."""
    response = await client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return client


# --- Data Fixtures ---

@pytest.fixture
async def sample_player(test_session) -> Player:
    """A 14-year-old (U-15) male player."""
    player = Player(
        name="Ahmed Al-Harbi",
        date_of_birth=born_years_ago(14),
        gender=Gender.MALE,
    )
    test_session.add(player)
    await test_session.commit()
    await test_session.refresh(player)
    return player


@pytest.fixture
async def sample_players(test_session) -> list[Player]:
    """Players over both genders and several age groups, created oldest first."""
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    players = [
        Player(name="Sara Al-Qahtani", date_of_birth=born_years_ago(8), gender=Gender.FEMALE,
               created_at=base),
        Player(name="Omar Al-Otaibi", date_of_birth=born_years_ago(8), gender=Gender.MALE,
               created_at=base + timedelta(days=1)),
        Player(name="Reem Al-Dosari", date_of_birth=born_years_ago(16), gender=Gender.FEMALE,
               created_at=base + timedelta(days=2)),
        Player(name="Khaled Al-Shammari", date_of_birth=born_years_ago(30), gender=Gender.MALE,
               created_at=base + timedelta(days=3)),
        Player(name="Noura Al-Ghamdi", date_of_birth=born_years_ago(8), gender=Gender.FEMALE,
               created_at=base + timedelta(days=4)),
    ]
    test_session.add_all(players)
    await test_session.commit()
    for player in players:
        await test_session.refresh(player)
    return players


@pytest.fixture
async def sample_test(test_session) -> Test:
    test = Test(
        name="Spring Speed Championship",
        test_type=TestType.WORK_60_REST_30,
        date_conducted=date(2024, 3, 10),
        description="Seasonal championship",
    )
    test_session.add(test)
    await test_session.commit()
    await test_session.refresh(test)
    return test


@pytest.fixture
async def sample_tests(test_session) -> list[Test]:
    tests = [
        Test(name="Winter Camp", test_type=TestType.WORK_30_REST_60, date_conducted=date(2024, 1, 20)),
        Test(name="Spring Qualifier", test_type=TestType.WORK_30_REST_30, date_conducted=date(2024, 4, 5)),
        Test(name="Summer Championship", test_type=TestType.WORK_60_REST_30, date_conducted=date(2024, 7, 1)),
    ]
    test_session.add_all(tests)
    await test_session.commit()
    for test in tests:
        await test_session.refresh(test)
    return tests


@pytest.fixture
async def sample_result(test_session, sample_player, sample_test) -> TestResult:
    result = TestResult(
        player_id=sample_player.id,
        test_id=sample_test.id,
        left_hand_score=10,
        right_hand_score=12,
        forehand_score=15,
        backhand_score=8,
    )
    test_session.add(result)
    await test_session.commit()
    await test_session.refresh(result)
    return result
