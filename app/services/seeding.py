"""Demo data for local development: players, the standard tests and their results."""

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Gender, Player, Test, TestResult, TestType
from app.utils.derivation import AGE_GROUPS, calculate_age, get_age_group

logger = logging.getLogger(__name__)

DEFAULT_SEED = 12345

FIRST_NAMES = {
    Gender.MALE: [
        "Ahmed", "Mohammed", "Abdullah", "Khaled", "Salem", "Fahd", "Abdulaziz", "Saad", "Nasser", "Abdulrahman",
        "Youssef", "Ibrahim", "Omar", "Ali", "Hassan", "Tariq", "Waleed", "Majed", "Bandar", "Turki",
    ],
    Gender.FEMALE: [
        "Fatima", "Noura", "Sara", "Reem", "Hind", "Manal", "Amal", "Rania", "Dana", "Lina",
        "Shahd", "Jood", "Ruba", "Ghala", "Maryam", "Zainab", "Haya", "Nouf", "Rahaf", "Nada",
    ],
}

LAST_NAMES = [
    "Al-Ahmad", "Al-Otaibi", "Al-Shammari", "Al-Qahtani", "Al-Harbi", "Al-Dosari", "Al-Mutairi", "Al-Anazi",
    "Al-Shehri", "Al-Ghamdi", "Al-Zahrani", "Al-Asiri", "Al-Juhani", "Al-Khalidi", "Al-Saeed", "Al-Rashid",
    "Al-Balawi", "Al-Thaqafi", "Al-Saedi", "Al-Nufaie",
]

TEST_TEMPLATES = [
    ("Spring Speed Championship", "Seasonal championship measuring speedball pace", TestType.WORK_60_REST_30),
    ("Summer Endurance Test", "High-intensity endurance test during the summer", TestType.WORK_30_REST_30),
    ("Monthly Beginners Assessment", "Monthly assessment for new players with generous rest", TestType.WORK_30_REST_60),
    ("Year-End Championship", "The club's main annual championship", TestType.WORK_60_REST_30),
    ("Local League Qualifier", "Qualification test for the local league", TestType.WORK_30_REST_30),
    ("National Team Trials", "Trials for joining the national team", TestType.WORK_60_REST_30),
    ("Winter Development Camp", "Development camp held over the winter", TestType.WORK_30_REST_60),
    ("Mid-Season Review", "Mid-season review across all levels", TestType.WORK_30_REST_30),
]

# (min age, max age, weight)
AGE_RANGES = [
    (8, 12, 20),
    (13, 17, 30),
    (18, 25, 25),
    (26, 35, 20),
    (36, 45, 5),
]

SCORE_RANGES = {
    TestType.WORK_60_REST_30: (15, 45),
    TestType.WORK_30_REST_30: (20, 50),
    TestType.WORK_30_REST_60: (25, 55),
}

POSITION_FACTORS = {
    "left_hand_score": 0.95,
    "right_hand_score": 1.0,
    "forehand_score": 1.05,
    "backhand_score": 0.9,
}


@dataclass
class SeedSummary:
    players: int = 0
    tests: int = 0
    results: int = 0
    skipped: bool = False
    age_groups: dict[str, int] = field(default_factory=dict)
    genders: dict[str, int] = field(default_factory=dict)
    test_types: dict[str, int] = field(default_factory=dict)


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # Feb 29 in a non-leap target year.
        return day.replace(year=day.year - years, day=28)


def birth_date_for_age(rng: random.Random, age: int, today: date) -> date:
    """Random birth date for someone exactly ``age`` years old on ``today``."""
    latest = _years_before(today, age)
    earliest = _years_before(today, age + 1) + timedelta(days=1)
    return earliest + timedelta(days=rng.randint(0, (latest - earliest).days))


def pick_age(rng: random.Random) -> int:
    low, high, _ = rng.choices(AGE_RANGES, weights=[weight for *_, weight in AGE_RANGES])[0]
    return rng.randint(low, high)


def _age_factor(age: int) -> float:
    if age < 12:
        return 0.6
    if age < 16:
        return 0.8
    if age < 18:
        return 0.9
    if age <= 25:
        return 1.0
    if age <= 30:
        return 0.95
    if age <= 35:
        return 0.9
    return 0.8


def generate_score(rng: random.Random, age: int, test_type: TestType, position: str) -> int:
    """Score scaled by age (peak 18-25), test type and hand/stroke; always >= 1."""
    low, high = SCORE_RANGES[test_type]
    factor = _age_factor(age) * POSITION_FACTORS[position]
    base = rng.randint(int(low * factor), int(high * factor))
    return max(1, int(base * rng.uniform(0.8, 1.2)))


def _random_datetime(rng: random.Random, start: date, end: date) -> datetime:
    span = int((datetime.combine(end, time.max) - datetime.combine(start, time.min)).total_seconds())
    moment = datetime.combine(start, time.min) + timedelta(seconds=rng.randint(0, span))
    return moment.replace(tzinfo=timezone.utc)


def _summarize(players: list[Player], tests: list[Test], results: list[TestResult], today: date) -> SeedSummary:
    age_groups = Counter(get_age_group(player.date_of_birth, today) for player in players)
    return SeedSummary(
        players=len(players),
        tests=len(tests),
        results=len(results),
        age_groups={label: age_groups[label] for label in AGE_GROUPS if age_groups[label]},
        genders=dict(Counter(player.gender.value for player in players)),
        test_types=dict(Counter(test.test_type.value for test in tests)),
    )


async def seed_database(
    db: AsyncSession,
    *,
    players: int = 25,
    tests: int = len(TEST_TEMPLATES),
    results_per_test: int = 12,
    rng: random.Random | None = None,
    today: date | None = None,
) -> SeedSummary:
    """Insert demo data unless the database already has players.

    Players, tests and results are committed stage by stage; a failure in a
    later stage leaves the earlier stages in place.
    """
    rng = rng or random.Random(DEFAULT_SEED)
    today = today or date.today()

    existing = await db.execute(select(Player.id).limit(1))
    if existing.scalar_one_or_none() is not None:
        logger.info("Database already contains players, skipping seeding")
        return SeedSummary(skipped=True)

    player_rows = []
    for _ in range(players):
        gender = rng.choice(list(Gender))
        player_rows.append(
            Player(
                name=f"{rng.choice(FIRST_NAMES[gender])} {rng.choice(LAST_NAMES)}",
                date_of_birth=birth_date_for_age(rng, pick_age(rng), today),
                gender=gender,
                created_at=_random_datetime(rng, today - timedelta(days=700), today - timedelta(days=30)),
            )
        )
    db.add_all(player_rows)
    await db.commit()
    logger.info("Seeded %d players", len(player_rows))

    test_rows = []
    for index in range(tests):
        name, description, test_type = TEST_TEMPLATES[index % len(TEST_TEMPLATES)]
        conducted = today - timedelta(days=rng.randint(1, 365))
        test_rows.append(
            Test(
                name=name,
                description=description,
                test_type=test_type,
                date_conducted=conducted,
                created_at=_random_datetime(rng, conducted, conducted),
            )
        )
    db.add_all(test_rows)
    await db.commit()
    logger.info("Seeded %d tests", len(test_rows))

    result_rows = []
    for test in test_rows:
        participants = rng.randint(int(results_per_test * 0.7), int(results_per_test * 1.3))
        for player in rng.sample(player_rows, min(participants, len(player_rows))):
            age = calculate_age(player.date_of_birth, test.date_conducted)
            scores = {
                position: generate_score(rng, age, test.test_type, position)
                for position in POSITION_FACTORS
            }
            result_rows.append(
                TestResult(
                    player_id=player.id,
                    test_id=test.id,
                    created_at=_random_datetime(rng, test.date_conducted, test.date_conducted),
                    **scores,
                )
            )
    db.add_all(result_rows)
    await db.commit()
    logger.info("Seeded %d test results", len(result_rows))

    return _summarize(player_rows, test_rows, result_rows, today)
