from uuid import uuid4

import httpx
import pytest
from httpx import ASGITransport

from app.client import ApiClient, ApiError, ClientStores
from app.config import get_settings
from app.main import app


@pytest.fixture
async def stores(client):
    """Stores talking to the app in-process; ``client`` installs the DB override."""
    stores = ClientStores.create(base_url="http://test/api", transport=ASGITransport(app=app))
    yield stores
    await stores.aclose()


@pytest.fixture
async def logged_in_stores(stores):
    settings = get_settings()
    await stores.auth.login(settings.admin_email, settings.admin_password)
    return stores


@pytest.mark.asyncio
async def test_fetch_players_fills_items(stores, sample_players):
    await stores.players.fetch_players(gender="female", age_group="U-09")
    assert stores.players.error is None
    assert stores.players.is_loading is False
    assert [p["name"] for p in stores.players.items] == ["Noura Al-Ghamdi", "Sara Al-Qahtani"]


@pytest.mark.asyncio
async def test_fetch_records_server_message(stores):
    await stores.players.fetch_players(age_group="U-99")
    assert stores.players.items == []
    assert stores.players.error.startswith("Unknown age group")


@pytest.mark.asyncio
async def test_fetch_player_detail(stores, sample_player, sample_result):
    await stores.players.fetch_player_detail(str(sample_player.id))
    assert stores.players.selected["id"] == str(sample_player.id)
    assert stores.players.selected["testResults"][0]["totalScore"] == 45


@pytest.mark.asyncio
async def test_fetch_player_detail_not_found(stores):
    await stores.players.fetch_player_detail(str(uuid4()))
    assert stores.players.selected is None
    assert stores.players.error == "Player not found"


@pytest.mark.asyncio
async def test_mutation_without_session_raises_and_records(stores):
    with pytest.raises(ApiError) as exc_info:
        await stores.players.create_player({"name": "Ali", "dateOfBirth": "2012-05-01", "gender": "male"})
    assert exc_info.value.status_code == 401
    assert stores.players.error == "Authentication required"
    assert stores.players.items == []


@pytest.mark.asyncio
async def test_player_crud_reconciles_state(logged_in_stores):
    players = logged_in_stores.players

    created = await players.create_player({"name": "Ali Al-Saeed", "dateOfBirth": "2012-05-01", "gender": "male"})
    assert [p["id"] for p in players.items] == [created["id"]]

    await players.fetch_player_detail(created["id"])
    updated = await players.update_player(created["id"], {"name": "Ali Al-Saeed Jr"})
    assert players.items[0]["name"] == "Ali Al-Saeed Jr"
    assert players.selected["name"] == "Ali Al-Saeed Jr"
    assert players.selected["testResults"] == []
    assert updated["ageGroup"] == players.items[0]["ageGroup"]

    await players.delete_player(created["id"])
    assert players.items == []
    assert players.selected is None


@pytest.mark.asyncio
async def test_tests_store(logged_in_stores, sample_tests):
    tests = logged_in_stores.tests
    await tests.fetch_tests(test_type="30_30")
    assert [t["name"] for t in tests.items] == ["Spring Qualifier"]

    created = await tests.create_test({"name": "Trial", "testType": "30_60", "dateConducted": "2024-09-01"})
    assert tests.items[-1]["id"] == created["id"]

    await tests.fetch_test_detail(created["id"], include_results=True)
    assert tests.selected["testResults"] == []

    await tests.fetch_test_detail(created["id"])
    assert "testResults" not in tests.selected


@pytest.mark.asyncio
async def test_results_store(logged_in_stores, sample_player, sample_test):
    results = logged_in_stores.results
    created = await results.create_result(
        {
            "playerId": str(sample_player.id),
            "testId": str(sample_test.id),
            "leftHandScore": 1,
            "rightHandScore": 2,
            "forehandScore": 3,
            "backhandScore": 4,
        }
    )
    assert created["totalScore"] == 10

    await results.fetch_test_results(str(sample_test.id))
    assert [r["id"] for r in results.items] == [created["id"]]

    updated = await results.update_result(created["id"], {"backhandScore": 10})
    assert updated["totalScore"] == 16
    assert results.items[0]["totalScore"] == 16

    await results.delete_result(created["id"])
    assert results.items == []


@pytest.mark.asyncio
async def test_results_store_rejects_bad_reference(logged_in_stores, sample_test):
    with pytest.raises(ApiError):
        await logged_in_stores.results.create_result(
            {
                "playerId": str(uuid4()),
                "testId": str(sample_test.id),
                "leftHandScore": 1,
                "rightHandScore": 1,
                "forehandScore": 1,
                "backhandScore": 1,
            }
        )
    assert logged_in_stores.results.error == "Referenced player or test does not exist"


@pytest.mark.asyncio
async def test_auth_store_flow(stores):
    settings = get_settings()
    await stores.auth.check_auth()
    assert stores.auth.is_authenticated is False

    await stores.auth.login(settings.admin_email, settings.admin_password)
    assert stores.auth.is_authenticated is True
    assert stores.auth.user == {"email": settings.admin_email}

    await stores.auth.check_auth()
    assert stores.auth.is_authenticated is True

    await stores.auth.logout()
    assert stores.auth.is_authenticated is False
    assert stores.auth.user is None

    await stores.auth.check_auth()
    assert stores.auth.is_authenticated is False
    assert stores.auth.error is None


@pytest.mark.asyncio
async def test_auth_store_bad_login(stores):
    with pytest.raises(ApiError):
        await stores.auth.login("admin@rowad.com", "nope")
    assert stores.auth.is_authenticated is False
    assert stores.auth.error == "Invalid credentials"


@pytest.mark.asyncio
async def test_check_auth_treats_network_failure_as_logged_out():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    stores = ClientStores.create(base_url="http://test/api", transport=httpx.MockTransport(refuse))
    try:
        await stores.auth.check_auth()
        assert stores.auth.is_authenticated is False
        assert stores.auth.error is None

        await stores.players.fetch_players()
        assert stores.players.error.startswith("Network error")
    finally:
        await stores.aclose()


@pytest.mark.asyncio
async def test_api_client_falls_back_to_status_message():
    transport = httpx.MockTransport(lambda request: httpx.Response(502, text="bad gateway"))
    async with ApiClient("http://test/api", transport=transport) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.get_players()
    assert exc_info.value.message == "HTTP 502"
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_api_client_drops_empty_params():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=[])

    async with ApiClient("http://test/api", transport=httpx.MockTransport(handler)) as api:
        await api.get_players(search="", gender="male", age_group=None)
        assert seen["params"] == {"gender": "male"}

        await api.get_test("abc", include_results=True)
        assert seen["params"] == {"includeResults": "true"}


@pytest.mark.asyncio
async def test_fetch_player_detail_accepts_include_results(stores, sample_player, sample_result):
    await stores.players.fetch_player_detail(str(sample_player.id), include_results=True)
    assert stores.players.error is None
    assert [r["id"] for r in stores.players.selected["testResults"]] == [str(sample_result.id)]
