"""Derived player and result fields.

Age, age group and total score are computed on every read and never stored.
This module holds the only copy of the age-group ladder; the API layer, the
client stores, the dashboard helpers and the seeder all import from here.
"""

from datetime import date
from typing import Any

# (exclusive upper age bound, label), checked in order.
AGE_GROUP_LADDER: tuple[tuple[int, str], ...] = (
    (7, "Mini"),
    (9, "U-09"),
    (11, "U-11"),
    (13, "U-13"),
    (15, "U-15"),
    (17, "U-17"),
    (19, "U-19"),
    (21, "U-21"),
)
SENIORS = "Seniors"

AGE_GROUPS: tuple[str, ...] = tuple(label for _, label in AGE_GROUP_LADDER) + (SENIORS,)


def calculate_age(date_of_birth: date, today: date | None = None) -> int:
    """Return the number of completed years between birth and ``today``.

    Exact calendar arithmetic: the year difference is decremented when this
    year's birthday has not happened yet.

    Examples:
        >>> calculate_age(date(2010, 6, 15), date(2024, 6, 14))
        13
        >>> calculate_age(date(2010, 6, 15), date(2024, 6, 15))
        14
    """
    today = today or date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def age_group_for_age(age: int) -> str:
    for upper_bound, label in AGE_GROUP_LADDER:
        if age < upper_bound:
            return label
    return SENIORS


def get_age_group(date_of_birth: date, today: date | None = None) -> str:
    return age_group_for_age(calculate_age(date_of_birth, today))


def calculate_total_score(left_hand: int, right_hand: int, forehand: int, backhand: int) -> int:
    return left_hand + right_hand + forehand + backhand


def total_score_of(result: Any) -> int:
    """Total score of a TestResult-like object (ORM row or schema)."""
    return calculate_total_score(
        result.left_hand_score,
        result.right_hand_score,
        result.forehand_score,
        result.backhand_score,
    )
