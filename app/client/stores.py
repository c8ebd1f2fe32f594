"""Client-side state stores mirroring slices of server state.

Each store keeps the last fetched collection (``items``), one detail object
(``selected``), a loading flag and the last error message. Stores are plain
objects built around one ``ApiClient`` (see ``ClientStores``); there is no
module-level state.

Fetches replace state wholesale and record failures in ``error``. Mutations
reconcile local state from the server response, or record the error and
re-raise it. Concurrent fetches on one store are last-write-wins.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from app.client.api_client import ApiClient, ApiError


def _error_message(exc: Exception, fallback: str) -> str:
    if isinstance(exc, ApiError):
        return exc.message
    return str(exc) or fallback


class EntityStore:
    """Shared fetch/create/update/delete bookkeeping for one entity kind."""

    def __init__(self, api: ApiClient):
        self.api = api
        self.items: list[dict] = []
        self.selected: dict | None = None
        self.is_loading = False
        self.error: str | None = None

    async def _fetch_items(self, call: Callable[[], Awaitable[list[dict]]], fallback: str) -> None:
        self.is_loading = True
        self.error = None
        try:
            self.items = await call()
        except Exception as exc:
            self.error = _error_message(exc, fallback)
        finally:
            self.is_loading = False

    async def _fetch_selected(self, call: Callable[[], Awaitable[dict]], fallback: str) -> None:
        self.is_loading = True
        self.error = None
        try:
            self.selected = await call()
        except Exception as exc:
            self.error = _error_message(exc, fallback)
        finally:
            self.is_loading = False

    async def _mutate(self, call: Callable[[], Awaitable[Any]], fallback: str) -> Any:
        self.is_loading = True
        self.error = None
        try:
            return await call()
        except Exception as exc:
            self.error = _error_message(exc, fallback)
            raise
        finally:
            self.is_loading = False

    def _append(self, created: dict) -> dict:
        self.items = [*self.items, created]
        return created

    def _replace(self, item_id: str, updated: dict) -> dict:
        self.items = [updated if item.get("id") == item_id else item for item in self.items]
        if self.selected is not None and self.selected.get("id") == item_id:
            # Keep detail-only nested data the update response does not carry.
            merged = dict(updated)
            if "testResults" in self.selected:
                merged["testResults"] = self.selected["testResults"]
            self.selected = merged
        return updated

    def _remove(self, item_id: str) -> None:
        self.items = [item for item in self.items if item.get("id") != item_id]
        if self.selected is not None and self.selected.get("id") == item_id:
            self.selected = None

    def clear_error(self) -> None:
        self.error = None

    def clear_selected(self) -> None:
        self.selected = None


class PlayersStore(EntityStore):
    async def fetch_players(
        self,
        search: str | None = None,
        gender: str | None = None,
        age_group: str | None = None,
    ) -> None:
        await self._fetch_items(
            lambda: self.api.get_players(search=search, gender=gender, age_group=age_group),
            "Failed to fetch players",
        )

    async def fetch_player_detail(self, player_id: str, include_results: bool = False) -> None:
        """Player detail always nests its results; ``include_results`` is accepted for parity with tests."""
        await self._fetch_selected(lambda: self.api.get_player(player_id), "Failed to fetch player")

    async def create_player(self, data: dict) -> dict:
        created = await self._mutate(lambda: self.api.create_player(data), "Failed to create player")
        return self._append(created)

    async def update_player(self, player_id: str, data: dict) -> dict:
        updated = await self._mutate(lambda: self.api.update_player(player_id, data), "Failed to update player")
        return self._replace(player_id, updated)

    async def delete_player(self, player_id: str) -> None:
        await self._mutate(lambda: self.api.delete_player(player_id), "Failed to delete player")
        self._remove(player_id)


class TestsStore(EntityStore):
    __test__ = False  # not a pytest test class

    async def fetch_tests(
        self,
        test_type: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> None:
        await self._fetch_items(
            lambda: self.api.get_tests(test_type=test_type, date_from=date_from, date_to=date_to),
            "Failed to fetch tests",
        )

    async def fetch_test_detail(
        self,
        test_id: str,
        include_results: bool = False,
        gender: str | None = None,
        age_group: str | None = None,
    ) -> None:
        await self._fetch_selected(
            lambda: self.api.get_test(test_id, include_results=include_results, gender=gender, age_group=age_group),
            "Failed to fetch test",
        )

    async def create_test(self, data: dict) -> dict:
        created = await self._mutate(lambda: self.api.create_test(data), "Failed to create test")
        return self._append(created)

    async def update_test(self, test_id: str, data: dict) -> dict:
        updated = await self._mutate(lambda: self.api.update_test(test_id, data), "Failed to update test")
        return self._replace(test_id, updated)

    async def delete_test(self, test_id: str) -> None:
        await self._mutate(lambda: self.api.delete_test(test_id), "Failed to delete test")
        self._remove(test_id)


class ResultsStore(EntityStore):
    async def fetch_results(self) -> None:
        await self._fetch_items(self.api.get_results, "Failed to fetch results")

    async def fetch_player_results(self, player_id: str) -> None:
        await self._fetch_items(lambda: self.api.get_player_results(player_id), "Failed to fetch results")

    async def fetch_test_results(self, test_id: str) -> None:
        await self._fetch_items(lambda: self.api.get_test_results(test_id), "Failed to fetch results")

    async def fetch_result_detail(self, result_id: str) -> None:
        await self._fetch_selected(lambda: self.api.get_result(result_id), "Failed to fetch result")

    async def create_result(self, data: dict) -> dict:
        created = await self._mutate(lambda: self.api.create_result(data), "Failed to create result")
        return self._append(created)

    async def update_result(self, result_id: str, data: dict) -> dict:
        updated = await self._mutate(lambda: self.api.update_result(result_id, data), "Failed to update result")
        return self._replace(result_id, updated)

    async def delete_result(self, result_id: str) -> None:
        await self._mutate(lambda: self.api.delete_result(result_id), "Failed to delete result")
        self._remove(result_id)


class AuthStore:
    def __init__(self, api: ApiClient):
        self.api = api
        self.user: dict | None = None
        self.is_authenticated = False
        self.is_loading = False
        self.error: str | None = None

    async def login(self, email: str, password: str) -> None:
        self.is_loading = True
        self.error = None
        try:
            response = await self.api.login(email, password)
            self.user = response.get("user")
            self.is_authenticated = True
        except Exception as exc:
            self.error = _error_message(exc, "Login failed")
            raise
        finally:
            self.is_loading = False

    async def logout(self) -> None:
        self.is_loading = True
        try:
            await self.api.logout()
            self.user = None
            self.is_authenticated = False
            self.error = None
        except Exception as exc:
            self.error = _error_message(exc, "Logout failed")
        finally:
            self.is_loading = False

    async def check_auth(self) -> None:
        """Refresh auth state from the server; failures mean "logged out", never an error."""
        self.is_loading = True
        try:
            response = await self.api.verify_auth()
            self.user = response.get("user")
            self.is_authenticated = bool(response.get("authenticated"))
        except Exception:
            self.user = None
            self.is_authenticated = False
            self.error = None
        finally:
            self.is_loading = False

    def clear_error(self) -> None:
        self.error = None


@dataclass
class ClientStores:
    """All stores for one API client, built once at application start."""

    api: ApiClient
    players: PlayersStore = field(init=False)
    tests: TestsStore = field(init=False)
    results: ResultsStore = field(init=False)
    auth: AuthStore = field(init=False)

    def __post_init__(self) -> None:
        self.players = PlayersStore(self.api)
        self.tests = TestsStore(self.api)
        self.results = ResultsStore(self.api)
        self.auth = AuthStore(self.api)

    @classmethod
    def create(
        cls,
        base_url: str = "http://localhost:5000/api",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ClientStores":
        return cls(api=ApiClient(base_url, transport=transport))

    async def aclose(self) -> None:
        await self.api.aclose()
