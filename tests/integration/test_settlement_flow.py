"""End-to-end flow against a real SQLite database."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import aiosqlite
import pytest
from httpx import ASGITransport, AsyncClient

import shuttlestock.infrastructure.storage.sqlite.connection as conn_module
from shuttlestock.api.main import app
from shuttlestock.application.dto.requests import PickupRequest, RestockRequest, SettlementRequest
from shuttlestock.application.use_cases import (
    ComputeSettlementUseCase,
    DeleteRecordsUseCase,
    GetInventorySummaryUseCase,
    PickupLocks,
    RecordPickupUseCase,
    RecordRestockUseCase,
)
from shuttlestock.core.exceptions import InsufficientStockError, RecordInUseError
from shuttlestock.infrastructure.storage.sqlite.migrations.migrator import initialize_database

GROUP = "club"


@pytest.fixture
async def live_db(tmp_path: Path) -> AsyncGenerator[Path, None]:
    db_path = tmp_path / "flow.db"
    await initialize_database(db_path, create_backup_before=False)
    async with aiosqlite.connect(db_path) as conn:
        await conn.executescript(f"""
            INSERT INTO groups (id, name) VALUES ('{GROUP}', 'Club');
            INSERT INTO profiles (user_id, group_id) VALUES ('member', '{GROUP}');
            INSERT INTO shuttlecock_types (id, group_id, brand, name, created_at)
            VALUES ('feather', '{GROUP}', 'Yonex', 'AS-50', '2024-01-01T00:00:00.000000');
        """)
        await conn.commit()

    settings = MagicMock()
    settings.storage.db_path = db_path
    settings.storage.busy_timeout = 5000

    conn_module._database = None
    with patch.object(conn_module, "get_settings", return_value=settings):
        try:
            yield db_path
        finally:
            await conn_module.close_database()


async def test_restock_pickup_settle_delete(live_db):
    restock = RecordRestockUseCase()
    pickup = RecordPickupUseCase(locks=PickupLocks(), serialize=True)
    deleter = DeleteRecordsUseCase()

    cheap = await restock.execute(GROUP, RestockRequest(type_id="feather", quantity=10, unit_price=100))
    dear = await restock.execute(GROUP, RestockRequest(type_id="feather", quantity=10, unit_price=120))

    await pickup.execute(GROUP, PickupRequest(picker_name="Alice", quantity=8, type_id="feather"))
    bob = await pickup.execute(GROUP, PickupRequest(picker_name="Bob", quantity=5, type_id="feather"))
    assert bob.stock.current_stock == 7

    with pytest.raises(InsufficientStockError):
        await pickup.execute(GROUP, PickupRequest(picker_name="Carol", quantity=8, type_id="feather"))

    settlement = ComputeSettlementUseCase()
    result = await settlement.execute(GROUP, SettlementRequest())
    assert result.report.grand_total_cost == 8 * 100 + 2 * 100 + 3 * 120
    assert result.report.warnings == []

    bob_only = await settlement.execute(GROUP, SettlementRequest(picker_name="Bob"))
    assert bob_only.report.grand_total_cost == 2 * 100 + 3 * 120

    with pytest.raises(RecordInUseError):
        await deleter.delete_restock(GROUP, dear.batch.id)
    with pytest.raises(RecordInUseError):
        await deleter.delete_restock(GROUP, cheap.batch.id)

    await deleter.delete_pickup(GROUP, bob.pickup.id)
    await deleter.delete_restock(GROUP, dear.batch.id)

    summary = await GetInventorySummaryUseCase().current_stock(GROUP, "feather")
    assert summary.total_restocked == 10
    assert summary.total_picked == 8
    assert summary.current_stock == 2


async def test_http_flow_with_identity_header(live_db):
    headers = {"X-User-Id": "member"}
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", headers=headers) as client:
        response = await client.post(
            "/api/inventory/restock",
            json={"type_id": "feather", "quantity": 4, "unit_price": 150},
        )
        assert response.status_code == 201

        response = await client.post(
            "/api/pickups",
            json={"picker_name": "Alice", "quantity": 3, "type_id": "feather"},
        )
        assert response.status_code == 201
        assert response.json()["stock"]["current_stock"] == 1

        response = await client.post("/api/settlement/calculate", json={})
        assert response.status_code == 200
        data = response.json()
        assert data["grand_total_cost"] == 450
        assert data["details"][0]["brand"] == "Yonex"

        response = await client.get("/api/inventory/history")
        assert [row["quantity"] for row in response.json()] == [4]

        response = await client.get("/api/inventory", headers={"X-User-Id": "stranger"})
        assert response.status_code == 403


async def test_db_health(live_db):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/health/db")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"]["available"] is True
