"""Dashboard aggregation over already-fetched players, tests and results.

Inputs are the JSON dicts the API returns (camelCase keys). Age groups are
re-derived from ``dateOfBirth`` with the shared ladder so the dashboard and
the server can never disagree.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date

from app.models.test import TEST_TYPE_LABELS, TestType
from app.utils.derivation import AGE_GROUPS, get_age_group

RECENT_LIMIT = 5


@dataclass
class DashboardSummary:
    total_players: int
    total_tests: int
    gender_distribution: dict[str, int] = field(default_factory=dict)
    age_group_distribution: dict[str, int] = field(default_factory=dict)
    test_type_distribution: dict[str, int] = field(default_factory=dict)
    recent_tests: list[dict] = field(default_factory=list)
    recent_players: list[dict] = field(default_factory=list)


def describe_test_type(test_type: str) -> str:
    try:
        return TEST_TYPE_LABELS[TestType(test_type)]
    except ValueError:
        return test_type


def player_age_group(player: dict, today: date | None = None) -> str:
    return get_age_group(date.fromisoformat(player["dateOfBirth"]), today)


def _ladder_ordered(counts: Counter) -> dict[str, int]:
    return {label: counts[label] for label in AGE_GROUPS if counts[label]}


def summarize_dashboard(
    players: list[dict],
    tests: list[dict],
    today: date | None = None,
) -> DashboardSummary:
    gender_counts = Counter(player["gender"] for player in players)
    age_group_counts = Counter(player_age_group(player, today) for player in players)
    test_type_counts = Counter(describe_test_type(test["testType"]) for test in tests)

    recent_tests = sorted(tests, key=lambda test: test["dateConducted"], reverse=True)[:RECENT_LIMIT]
    recent_players = sorted(players, key=lambda player: player["createdAt"], reverse=True)[:RECENT_LIMIT]

    return DashboardSummary(
        total_players=len(players),
        total_tests=len(tests),
        gender_distribution=dict(gender_counts),
        age_group_distribution=_ladder_ordered(age_group_counts),
        test_type_distribution=dict(test_type_counts),
        recent_tests=recent_tests,
        recent_players=recent_players,
    )


def average_scores_by_age_group(results: list[dict], today: date | None = None) -> dict[str, float]:
    """Mean ``totalScore`` per age group of the nested player, in ladder order.

    Results without a nested player are skipped.
    """
    totals: Counter = Counter()
    counts: Counter = Counter()
    for result in results:
        player = result.get("player")
        if not player:
            continue
        label = player_age_group(player, today)
        totals[label] += result["totalScore"]
        counts[label] += 1
    return {label: round(totals[label] / counts[label], 2) for label in AGE_GROUPS if counts[label]}
