"""User profile lookup — tests for fetch_user_profile against a mocked user API."""

from unittest.mock import AsyncMock

import httpx
import pytest

from order_service.errors import UserFetchFailed, UserIdRequired, UserNotFound
from order_service.models import UserProfile
from order_service.users import fetch_user_profile


def _api_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://users.test")


@pytest.mark.asyncio
async def test_fetches_and_transforms_user():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={
            "id": 1,
            "name": "Juan Dela Cruz",
            "email": "juan@example.com",
            "status": "active",
            "createdAt": "2024-01-01",
        })

    async with _api_client(handler) as client:
        result = await fetch_user_profile(1, client)

    assert result == UserProfile(id=1, name="Juan Dela Cruz", email="juan@example.com", isActive=True)
    assert len(requests) == 1
    assert requests[0].url.path == "/users/1"


@pytest.mark.asyncio
async def test_inactive_user():
    def handler(request):
        return httpx.Response(200, json={
            "id": 2, "name": "Maria Santos", "email": "maria@example.com", "status": "inactive",
        })

    async with _api_client(handler) as client:
        result = await fetch_user_profile(2, client)

    assert result.isActive is False


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", [None, "", 0])
async def test_missing_user_id_does_not_call_api(user_id):
    client = AsyncMock()

    with pytest.raises(UserIdRequired, match="User ID is required"):
        await fetch_user_profile(user_id, client)

    client.get.assert_not_awaited()


@pytest.mark.asyncio
async def test_not_found():
    async with _api_client(lambda request: httpx.Response(404)) as client:
        with pytest.raises(UserNotFound, match="User not found"):
            await fetch_user_profile(999, client)


@pytest.mark.asyncio
async def test_server_error():
    async with _api_client(lambda request: httpx.Response(500)) as client:
        with pytest.raises(UserFetchFailed, match="Failed to fetch user profile"):
            await fetch_user_profile(1, client)


@pytest.mark.asyncio
async def test_network_error():
    def handler(request):
        raise httpx.ConnectTimeout("Network timeout", request=request)

    async with _api_client(handler) as client:
        with pytest.raises(UserFetchFailed, match="Failed to fetch user profile"):
            await fetch_user_profile(1, client)


@pytest.mark.asyncio
async def test_malformed_payload():
    async with _api_client(lambda request: httpx.Response(200, json={"id": 1})) as client:
        with pytest.raises(UserFetchFailed):
            await fetch_user_profile(1, client)
