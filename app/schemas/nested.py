"""Responses that nest related entities (results inside players/tests and vice versa)."""

from app.schemas.player import PlayerResponse
from app.schemas.result import ResultResponse
from app.schemas.test import TestResponse


class ResultWithTestResponse(ResultResponse):
    test: TestResponse | None = None


class ResultWithPlayerResponse(ResultResponse):
    player: PlayerResponse | None = None


class ResultDetailResponse(ResultResponse):
    player: PlayerResponse | None = None
    test: TestResponse | None = None


class PlayerDetailResponse(PlayerResponse):
    test_results: list[ResultWithTestResponse] = []


class TestDetailResponse(TestResponse):
    __test__ = False

    test_results: list[ResultWithPlayerResponse] | None = None
