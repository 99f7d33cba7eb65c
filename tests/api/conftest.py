"""Fixtures for API tests.

Use cases run for real against mocked stores; identity is overridden.
"""

from datetime import datetime
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from shuttlestock.api.dependencies import (
    get_current_group_id,
    get_current_user_id,
    get_delete_records_use_case,
    get_history_use_case,
    get_inventory_summary_use_case,
    get_manage_types_use_case,
    get_record_pickup_use_case,
    get_record_restock_use_case,
    get_settlement_use_case,
)
from shuttlestock.api.main import app
from shuttlestock.application.use_cases import (
    ComputeSettlementUseCase,
    DeleteRecordsUseCase,
    GetInventorySummaryUseCase,
    ListHistoryUseCase,
    ManageTypesUseCase,
    PickupLocks,
    RecordPickupUseCase,
    RecordRestockUseCase,
)
from shuttlestock.core.entities.inventory import ShuttlecockType


@pytest.fixture
def yonex() -> ShuttlecockType:
    return ShuttlecockType(
        id="type-a",
        group_id="group-1",
        brand="Yonex",
        name="AS-50",
        created_at=datetime(2024, 1, 1),
    )


@pytest.fixture
def inventory_store():
    store = AsyncMock()
    store.list_restock_batches.return_value = []
    store.list_pickup_events.return_value = []
    store.list_active_type_ids.return_value = []
    store.list_restock_history.return_value = []
    store.list_pickup_history.return_value = []
    return store


@pytest.fixture
def type_store(yonex):
    store = AsyncMock()
    store.get_type.return_value = yonex
    store.list_types.return_value = [yonex]
    return store


@pytest.fixture
def overrides(inventory_store, type_store):
    return {
        get_current_group_id: lambda: "group-1",
        get_current_user_id: lambda: "user-1",
        get_record_restock_use_case: lambda: RecordRestockUseCase(inventory_store, type_store),
        get_record_pickup_use_case: lambda: RecordPickupUseCase(
            inventory_store, type_store, locks=PickupLocks(), serialize=True
        ),
        get_settlement_use_case: lambda: ComputeSettlementUseCase(inventory_store, type_store),
        get_inventory_summary_use_case: lambda: GetInventorySummaryUseCase(
            inventory_store, type_store
        ),
        get_history_use_case: lambda: ListHistoryUseCase(inventory_store, type_store, limit=50),
        get_manage_types_use_case: lambda: ManageTypesUseCase(type_store),
        get_delete_records_use_case: lambda: DeleteRecordsUseCase(inventory_store),
    }


@pytest.fixture
async def api_client(overrides):
    app.dependency_overrides.update(overrides)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dependency in overrides:
        app.dependency_overrides.pop(dependency, None)
