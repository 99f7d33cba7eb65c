"""List History Use Case: restock and pickup records, newest first."""

from shuttlestock.application.dto.requests import parse_bound
from shuttlestock.application.dto.responses import (
    PickupResponse,
    RestockHistoryEntryResponse,
)
from shuttlestock.config import get_settings
from shuttlestock.core.entities.inventory import PickupEvent, RestockBatch, ShuttlecockType
from shuttlestock.core.exceptions import ValidationError
from shuttlestock.core.interfaces.inventory_store import IInventoryStore
from shuttlestock.core.interfaces.type_store import ITypeStore


class ListHistoryUseCase:
    """Restock and pickup history labelled with brand and name."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        type_store: ITypeStore | None = None,
        limit: int | None = None,
    ):
        self._inventory_store = inventory_store
        self._type_store = type_store
        self._limit = limit or get_settings().inventory.history_limit

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

    async def _types_by_id(self, group_id: str) -> dict[str, ShuttlecockType]:
        type_store = await self._get_type_store()
        return {
            t.id: t
            for t in await type_store.list_types(group_id, include_hidden=True)
            if t.id is not None
        }

    async def restocks(
        self,
        group_id: str,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> list[RestockHistoryEntryResponse]:
        """Restock batches between optional bounds (dates cover whole days)."""
        try:
            start = parse_bound(start_date) if start_date else None
            end = parse_bound(end_date, end_of_day=True) if end_date else None
        except ValueError as e:
            raise ValidationError("start_date/end_date", str(e)) from e

        inv_store = await self._get_inventory_store()
        batches = await inv_store.list_restock_history(group_id, start, end, self._limit)
        types = await self._types_by_id(group_id)
        return [self._restock_entry(b, types.get(b.type_id)) for b in batches]

    async def pickups(self, group_id: str) -> list[PickupResponse]:
        """Most recent pickups."""
        inv_store = await self._get_inventory_store()
        pickups = await inv_store.list_pickup_history(group_id, self._limit)
        types = await self._types_by_id(group_id)
        return [self._pickup_entry(p, types.get(p.type_id)) for p in pickups]

    @staticmethod
    def _restock_entry(
        batch: RestockBatch, shuttle_type: ShuttlecockType | None
    ) -> RestockHistoryEntryResponse:
        entry = RestockHistoryEntryResponse(
            id=batch.id,  # type: ignore[arg-type]
            date=batch.created_at,
            type_id=batch.type_id,
            quantity=batch.quantity,
            unit_price=batch.unit_price,
            total_price=batch.total_price,
        )
        if shuttle_type is not None:
            entry.brand = shuttle_type.brand
            entry.name = shuttle_type.name
        return entry

    @staticmethod
    def _pickup_entry(
        pickup: PickupEvent, shuttle_type: ShuttlecockType | None
    ) -> PickupResponse:
        return PickupResponse(
            id=pickup.id,  # type: ignore[arg-type]
            type_id=pickup.type_id,
            picker_name=pickup.picker_name,
            quantity=pickup.quantity,
            created_at=pickup.created_at,
            brand=shuttle_type.brand if shuttle_type else None,
            name=shuttle_type.name if shuttle_type else None,
        )
