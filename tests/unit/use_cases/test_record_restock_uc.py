"""Tests for RecordRestockUseCase."""

from unittest.mock import AsyncMock

import pytest

from shuttlestock.application.dto.requests import RestockRequest
from shuttlestock.application.use_cases.record_restock import RecordRestockUseCase
from shuttlestock.core.entities.inventory import ShuttlecockType
from shuttlestock.core.exceptions import TypeInactiveError, TypeNotFoundError


@pytest.fixture
def inventory_store():
    store = AsyncMock()

    async def add_restock(batch):
        batch.id = 11
        return batch

    store.add_restock.side_effect = add_restock
    return store


@pytest.fixture
def type_store():
    store = AsyncMock()
    store.get_type.return_value = ShuttlecockType(
        id="t1", group_id="group-1", brand="Yonex", name="AS-50"
    )
    return store


@pytest.fixture
def use_case(inventory_store, type_store):
    return RecordRestockUseCase(inventory_store=inventory_store, type_store=type_store)


class TestRecordRestockUseCase:
    async def test_records_batch_in_group(self, use_case, inventory_store):
        result = await use_case.execute(
            "group-1", RestockRequest(type_id="t1", quantity=12, unit_price=450)
        )

        batch = inventory_store.add_restock.call_args[0][0]
        assert batch.group_id == "group-1"
        assert batch.quantity == 12
        assert batch.unit_price == 450
        assert result.batch.id == 11

    async def test_unknown_type(self, use_case, type_store, inventory_store):
        type_store.get_type.return_value = None

        with pytest.raises(TypeNotFoundError):
            await use_case.execute("group-1", RestockRequest(type_id="nope", quantity=1))
        inventory_store.add_restock.assert_not_awaited()

    async def test_hidden_type(self, use_case, type_store):
        type_store.get_type.return_value = ShuttlecockType(
            id="t1", group_id="group-1", brand="Yonex", name="AS-50", is_active=False
        )

        with pytest.raises(TypeInactiveError):
            await use_case.execute("group-1", RestockRequest(type_id="t1", quantity=1))

    async def test_to_response(self, use_case):
        result = await use_case.execute(
            "group-1", RestockRequest(type_id="t1", quantity=12, unit_price=450)
        )
        response = use_case.to_response(result)
        assert response.id == 11
        assert response.total_price == 5400
