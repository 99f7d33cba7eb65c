"""
Stock Summary Projector.

Plain arithmetic stock levels (restocked minus picked) per type. Used for
display and for the availability check before a pickup. Not FIFO-aware
and does not touch the simulator.
"""

from collections.abc import Iterable

from shuttlestock.core.entities.inventory import PickupEvent, RestockBatch, StockLevel
from shuttlestock.core.interfaces.inventory_store import IInventoryStore


def tally(
    batches: Iterable[RestockBatch],
    pickups: Iterable[PickupEvent],
) -> dict[str, StockLevel]:
    """Total restocked and picked quantities keyed by type id."""
    levels: dict[str, StockLevel] = {}

    for batch in batches:
        level = levels.setdefault(batch.type_id, StockLevel(type_id=batch.type_id))
        level.total_restocked += batch.quantity

    for pickup in pickups:
        level = levels.setdefault(pickup.type_id, StockLevel(type_id=pickup.type_id))
        level.total_picked += pickup.quantity

    return levels


class StockSummaryProjector:
    """Reads events through the store port and tallies them."""

    def __init__(self, inventory_store: IInventoryStore) -> None:
        self._store = inventory_store

    async def current_stock(self, group_id: str, type_id: str) -> StockLevel:
        """Stock level for one type; zeros if it has no events."""
        batches = await self._store.list_restock_batches(group_id, type_id)
        pickups = await self._store.list_pickup_events(group_id, type_id)
        levels = tally(batches, pickups)
        return levels.get(type_id, StockLevel(type_id=type_id))

    async def all_levels(self, group_id: str) -> dict[str, StockLevel]:
        """Stock levels for every type with at least one event."""
        batches = await self._store.list_restock_batches(group_id)
        pickups = await self._store.list_pickup_events(group_id)
        return tally(batches, pickups)
