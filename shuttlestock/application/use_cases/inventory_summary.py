"""Inventory Summary Use Case: per-type stock levels for display."""

from dataclasses import dataclass

from shuttlestock.application.dto.responses import (
    InventorySummaryItemResponse,
    InventorySummaryResponse,
    StockLevelResponse,
)
from shuttlestock.config import get_logger
from shuttlestock.core.entities.inventory import ShuttlecockType, StockLevel
from shuttlestock.core.exceptions import TypeNotFoundError
from shuttlestock.core.interfaces.inventory_store import IInventoryStore
from shuttlestock.core.interfaces.type_store import ITypeStore
from shuttlestock.core.services.stock_projector import StockSummaryProjector

logger = get_logger(__name__)


@dataclass
class InventorySummaryRow:
    shuttle_type: ShuttlecockType
    level: StockLevel


class GetInventorySummaryUseCase:
    """Stock levels per type; plain arithmetic, not FIFO."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        type_store: ITypeStore | None = None,
    ):
        self._inventory_store = inventory_store
        self._type_store = type_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from shuttlestock.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_type_store(self) -> ITypeStore:
        if self._type_store is None:
            from shuttlestock.infrastructure.storage.sqlite import get_type_store

            self._type_store = await get_type_store()
        return self._type_store

    async def execute(
        self, group_id: str, include_hidden: bool = False
    ) -> list[InventorySummaryRow]:
        """List every type in the group with its stock level."""
        type_store = await self._get_type_store()
        types = await type_store.list_types(group_id, include_hidden=include_hidden)

        projector = StockSummaryProjector(await self._get_inventory_store())
        levels = await projector.all_levels(group_id)

        rows = [
            InventorySummaryRow(
                shuttle_type=t,
                level=levels.get(t.id, StockLevel(type_id=t.id)),  # type: ignore[arg-type]
            )
            for t in types
        ]
        logger.debug("inventory_summary_built", group_id=group_id, types=len(rows))
        return rows

    async def current_stock(self, group_id: str, type_id: str) -> StockLevel:
        """Stock level for one type of the group."""
        type_store = await self._get_type_store()
        if await type_store.get_type(group_id, type_id) is None:
            raise TypeNotFoundError(type_id)

        projector = StockSummaryProjector(await self._get_inventory_store())
        return await projector.current_stock(group_id, type_id)

    def to_response(self, rows: list[InventorySummaryRow]) -> InventorySummaryResponse:
        """Convert rows to API response."""
        items = [
            InventorySummaryItemResponse(
                type_id=row.level.type_id,
                brand=row.shuttle_type.brand,
                name=row.shuttle_type.name,
                is_active=row.shuttle_type.is_active,
                total_restocked=row.level.total_restocked,
                total_picked=row.level.total_picked,
                current_stock=row.level.current_stock,
            )
            for row in rows
        ]
        return InventorySummaryResponse(items=items, total=len(items))

    @staticmethod
    def stock_response(level: StockLevel) -> StockLevelResponse:
        return StockLevelResponse(
            type_id=level.type_id,
            total_restocked=level.total_restocked,
            total_picked=level.total_picked,
            current_stock=level.current_stock,
        )
