from app.models.player import Player, Gender
from app.models.test import Test, TestType, TEST_TYPE_LABELS
from app.models.test_result import TestResult
from app.models.admin_session import AdminSession

__all__ = [
    "Player",
    "Gender",
    "Test",
    "TestType",
    "TEST_TYPE_LABELS",
    "TestResult",
    "AdminSession",
]
