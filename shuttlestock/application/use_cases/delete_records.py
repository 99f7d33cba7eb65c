"""Delete Records Use Case: remove pickups and untouched restock batches."""

from contextlib import nullcontext

from shuttlestock.application.dto.responses import DeleteResponse
from shuttlestock.application.use_cases.record_pickup import PickupLocks, get_pickup_locks
from shuttlestock.config import get_logger, get_settings
from shuttlestock.core.exceptions import (
    PickupNotFoundError,
    RecordInUseError,
    RestockNotFoundError,
)
from shuttlestock.core.interfaces.inventory_store import IInventoryStore
from shuttlestock.core.services.fifo_simulator import FifoSimulator

logger = get_logger(__name__)


class DeleteRecordsUseCase:
    """
    Deletes records within the caller's group.

    A restock batch can only go while a full FIFO replay leaves it
    untouched. Removing a drawn batch would silently reprice every later
    pickup of the type. The replay and the delete hold the same per-type
    lock as pickups, so no pickup can draw on the batch in between.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        simulator: FifoSimulator | None = None,
        locks: PickupLocks | None = None,
        serialize: bool | None = None,
    ):
        self._inventory_store = inventory_store
        self._simulator = simulator or FifoSimulator()
        self._locks = locks or get_pickup_locks()
        self._serialize = (
            get_settings().inventory.serialize_pickups if serialize is None else serialize
        )

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from shuttlestock.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def delete_pickup(self, group_id: str, pickup_id: int) -> DeleteResponse:
        store = await self._get_inventory_store()
        if not await store.delete_pickup(group_id, pickup_id):
            raise PickupNotFoundError(pickup_id)
        return DeleteResponse(id=pickup_id, message="Pickup deleted")

    async def delete_restock(self, group_id: str, restock_id: int) -> DeleteResponse:
        store = await self._get_inventory_store()
        batch = await store.get_restock(group_id, restock_id)
        if batch is None:
            raise RestockNotFoundError(restock_id)

        lock = self._locks.for_type(group_id, batch.type_id) if self._serialize else nullcontext()
        async with lock:
            result = self._simulator.simulate(
                batch.type_id,
                await store.list_restock_batches(group_id, batch.type_id),
                await store.list_pickup_events(group_id, batch.type_id),
            )
            consumed = result.ledger.consumed_from(restock_id)
            if consumed > 0:
                logger.warning(
                    "restock_delete_refused",
                    restock_id=restock_id,
                    type_id=batch.type_id,
                    consumed=consumed,
                )
                raise RecordInUseError("restock", restock_id, consumed)

            if not await store.delete_restock(group_id, restock_id):
                raise RestockNotFoundError(restock_id)
        return DeleteResponse(id=restock_id, message="Restock deleted")
