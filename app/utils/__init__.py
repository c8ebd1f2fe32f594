"""Utility functions."""

from app.utils.derivation import (
    AGE_GROUPS,
    age_group_for_age,
    calculate_age,
    calculate_total_score,
    get_age_group,
    total_score_of,
)
from app.utils.timestamps import utcnow

__all__ = [
    "AGE_GROUPS",
    "age_group_for_age",
    "calculate_age",
    "calculate_total_score",
    "get_age_group",
    "total_score_of",
    "utcnow",
]
