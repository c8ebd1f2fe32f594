import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response or transport failure; ``message`` is what the server said."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _clean_params(params: dict[str, Any] | None) -> dict[str, str]:
    cleaned: dict[str, str] = {}
    for key, value in (params or {}).items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            cleaned[key] = "true" if value else "false"
        else:
            cleaned[key] = str(getattr(value, "value", value))
    return cleaned


class ApiClient:
    """Client for the SpeedballHub REST API.

    One ``httpx.AsyncClient`` per instance, so the admin session cookie set
    by ``login`` is sent with every later call. No retries: a failed call
    raises ``ApiError`` and the caller decides.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000/api",
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json: dict | None = None,
    ) -> Any:
        kwargs: dict[str, Any] = {"params": _clean_params(params)}
        # Only send a body (and its JSON content type) when there is one.
        if json is not None:
            kwargs["json"] = json

        try:
            response = await self._client.request(method.upper(), endpoint, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method.upper(), endpoint, exc)
            raise ApiError(f"Network error: {exc}") from exc

        if response.is_error:
            try:
                message = response.json().get("message")
            except ValueError:
                message = None
            raise ApiError(message or f"HTTP {response.status_code}", response.status_code)

        return response.json()

    # Auth
    async def login(self, email: str, password: str) -> dict:
        return await self._request("post", "/auth/login", json={"email": email, "password": password})

    async def logout(self) -> dict:
        return await self._request("post", "/auth/logout", json={})

    async def verify_auth(self) -> dict:
        return await self._request("get", "/auth/verify")

    # Players
    async def get_players(
        self,
        search: str | None = None,
        gender: str | None = None,
        age_group: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        params = {"search": search, "gender": gender, "ageGroup": age_group, "page": page, "limit": limit}
        return await self._request("get", "/players", params=params)

    async def get_player(self, player_id: str) -> dict:
        return await self._request("get", f"/players/{player_id}")

    async def create_player(self, data: dict) -> dict:
        return await self._request("post", "/players", json=data)

    async def update_player(self, player_id: str, data: dict) -> dict:
        return await self._request("put", f"/players/{player_id}", json=data)

    async def delete_player(self, player_id: str) -> dict:
        return await self._request("delete", f"/players/{player_id}")

    # Tests
    async def get_tests(
        self,
        test_type: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        params = {"testType": test_type, "dateFrom": date_from, "dateTo": date_to, "page": page, "limit": limit}
        return await self._request("get", "/tests", params=params)

    async def get_test(
        self,
        test_id: str,
        include_results: bool = False,
        gender: str | None = None,
        age_group: str | None = None,
    ) -> dict:
        params = {"includeResults": include_results or None, "gender": gender, "ageGroup": age_group}
        return await self._request("get", f"/tests/{test_id}", params=params)

    async def create_test(self, data: dict) -> dict:
        return await self._request("post", "/tests", json=data)

    async def update_test(self, test_id: str, data: dict) -> dict:
        return await self._request("put", f"/tests/{test_id}", json=data)

    async def delete_test(self, test_id: str) -> dict:
        return await self._request("delete", f"/tests/{test_id}")

    # Results
    async def get_results(self, page: int | None = None, limit: int | None = None) -> list[dict]:
        return await self._request("get", "/results", params={"page": page, "limit": limit})

    async def get_result(self, result_id: str) -> dict:
        return await self._request("get", f"/results/{result_id}")

    async def get_player_results(self, player_id: str) -> list[dict]:
        return await self._request("get", f"/results/player/{player_id}")

    async def get_test_results(self, test_id: str) -> list[dict]:
        return await self._request("get", f"/results/test/{test_id}")

    async def create_result(self, data: dict) -> dict:
        return await self._request("post", "/results", json=data)

    async def update_result(self, result_id: str, data: dict) -> dict:
        return await self._request("put", f"/results/{result_id}", json=data)

    async def delete_result(self, result_id: str) -> dict:
        return await self._request("delete", f"/results/{result_id}")
