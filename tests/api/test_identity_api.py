"""Tests for request identity resolution."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from shuttlestock.api.dependencies import get_ident_store, get_inventory_summary_use_case
from shuttlestock.api.main import app
from shuttlestock.application.use_cases import GetInventorySummaryUseCase


@pytest.fixture
def ident_store():
    store = AsyncMock()
    store.get_group_id_for_user.return_value = "group-1"
    return store


@pytest.fixture
async def raw_client(ident_store, inventory_store, type_store):
    app.dependency_overrides[get_ident_store] = lambda: ident_store
    app.dependency_overrides[get_inventory_summary_use_case] = lambda: GetInventorySummaryUseCase(
        inventory_store, type_store
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_ident_store, None)
    app.dependency_overrides.pop(get_inventory_summary_use_case, None)


class TestIdentity:
    async def test_missing_header_is_401(self, raw_client: AsyncClient, ident_store):
        response = await raw_client.get("/api/inventory")

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"
        ident_store.get_group_id_for_user.assert_not_awaited()

    async def test_user_without_group_is_403(self, raw_client: AsyncClient, ident_store):
        ident_store.get_group_id_for_user.return_value = None

        response = await raw_client.get("/api/inventory", headers={"X-User-Id": "user-orphan"})

        assert response.status_code == 403
        assert response.json()["error_code"] == "GROUP_NOT_ASSIGNED"

    async def test_member_scoped_to_group(self, raw_client: AsyncClient, ident_store, type_store):
        response = await raw_client.get("/api/inventory", headers={"X-User-Id": "user-1"})

        assert response.status_code == 200
        ident_store.get_group_id_for_user.assert_awaited_once_with("user-1")
        type_store.list_types.assert_awaited_once_with("group-1", include_hidden=False)
