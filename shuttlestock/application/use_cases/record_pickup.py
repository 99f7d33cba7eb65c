"""Record Pickup Use Case: stock-checked pickup with per-type serialization."""

import asyncio
from dataclasses import dataclass

from shuttlestock.application.dto.requests import PickupRequest
from shuttlestock.application.dto.responses import (
    PickupResponse,
    RecordPickupResponse,
    StockLevelResponse,
)
from shuttlestock.config import get_logger, get_settings
from shuttlestock.core.entities.inventory import (
    PickupEvent,
    ShuttlecockType,
    StockLevel,
    utc_now,
)
from shuttlestock.core.exceptions import InsufficientStockError, TypeNotFoundError
from shuttlestock.core.interfaces.inventory_store import IInventoryStore
from shuttlestock.core.interfaces.type_store import ITypeStore
from shuttlestock.core.services.stock_projector import StockSummaryProjector

logger = get_logger(__name__)


class PickupLocks:
    """One asyncio.Lock per (group_id, type_id), created on first use."""

    def __init__(self) -> None:
        self._locks: dict[tuple[str, str], asyncio.Lock] = {}

    def for_type(self, group_id: str, type_id: str) -> asyncio.Lock:
        key = (group_id, type_id)
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    def __len__(self) -> int:
        return len(self._locks)


# Shared by every request handled in this process
_pickup_locks = PickupLocks()


def get_pickup_locks() -> PickupLocks:
    return _pickup_locks


@dataclass
class RecordPickupResult:
    """Result of recording a pickup."""

    pickup: PickupEvent
    shuttle_type: ShuttlecockType
    stock: StockLevel


class RecordPickupUseCase:
    """
    Record a pickup after checking current stock.

    The stock check and the insert are not atomic on their own. With
    ``serialize`` on they run under a lock keyed by group and type, so two
    pickups served by the same process cannot both pass the check.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        type_store: ITypeStore | None = None,
        locks: PickupLocks | None = None,
        serialize: bool | None = None,
    ):
        self._inventory_store = inventory_store
        self._type_store = type_store
        self._locks = locks or get_pickup_locks()
        self._serialize = (
            get_settings().inventory.serialize_pickups if serialize is None else serialize
        )

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

    async def execute(self, group_id: str, request: PickupRequest) -> RecordPickupResult:
        """Execute record pickup use case."""
        logger.info(
            "record_pickup_started",
            group_id=group_id,
            type_id=request.type_id,
            quantity=request.quantity,
        )

        type_store = await self._get_type_store()
        shuttle_type = await type_store.get_type(group_id, request.type_id)
        if shuttle_type is None:
            raise TypeNotFoundError(request.type_id)

        if not self._serialize:
            return await self._check_and_insert(group_id, request, shuttle_type)

        async with self._locks.for_type(group_id, request.type_id):
            return await self._check_and_insert(group_id, request, shuttle_type)

    async def _check_and_insert(
        self,
        group_id: str,
        request: PickupRequest,
        shuttle_type: ShuttlecockType,
    ) -> RecordPickupResult:
        inv_store = await self._get_inventory_store()
        projector = StockSummaryProjector(inv_store)

        level = await projector.current_stock(group_id, request.type_id)
        if request.quantity > level.current_stock:
            logger.warning(
                "pickup_rejected_insufficient_stock",
                type_id=request.type_id,
                requested=request.quantity,
                available=level.current_stock,
            )
            raise InsufficientStockError(
                request.type_id, request.quantity, level.current_stock
            )

        pickup = await inv_store.add_pickup(
            PickupEvent(
                group_id=group_id,
                type_id=request.type_id,
                picker_name=request.picker_name,
                quantity=request.quantity,
                created_at=utc_now(),
            )
        )

        stock = StockLevel(
            type_id=level.type_id,
            total_restocked=level.total_restocked,
            total_picked=level.total_picked + pickup.quantity,
        )
        logger.info(
            "record_pickup_complete",
            pickup_id=pickup.id,
            type_id=pickup.type_id,
            stock_left=stock.current_stock,
        )
        return RecordPickupResult(pickup=pickup, shuttle_type=shuttle_type, stock=stock)

    def to_response(self, result: RecordPickupResult) -> RecordPickupResponse:
        """Convert result to API response."""
        pickup = result.pickup
        return RecordPickupResponse(
            pickup=PickupResponse(
                id=pickup.id,  # type: ignore[arg-type]
                type_id=pickup.type_id,
                picker_name=pickup.picker_name,
                quantity=pickup.quantity,
                created_at=pickup.created_at,
                brand=result.shuttle_type.brand,
                name=result.shuttle_type.name,
            ),
            stock=StockLevelResponse(
                type_id=result.stock.type_id,
                total_restocked=result.stock.total_restocked,
                total_picked=result.stock.total_picked,
                current_stock=result.stock.current_stock,
            ),
        )
