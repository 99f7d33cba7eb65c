"""Record Restock Use Case: append a priced batch to a type's FIFO queue."""

from dataclasses import dataclass

from shuttlestock.application.dto.requests import RestockRequest
from shuttlestock.application.dto.responses import RestockResponse
from shuttlestock.config import get_logger
from shuttlestock.core.entities.inventory import RestockBatch, ShuttlecockType, utc_now
from shuttlestock.core.exceptions import TypeInactiveError, TypeNotFoundError
from shuttlestock.core.interfaces.inventory_store import IInventoryStore
from shuttlestock.core.interfaces.type_store import ITypeStore

logger = get_logger(__name__)


@dataclass
class RecordRestockResult:
    """Result of recording a restock."""

    batch: RestockBatch
    shuttle_type: ShuttlecockType


class RecordRestockUseCase:
    """Record a restock batch for an active type in the caller's group."""

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

    async def execute(self, group_id: str, request: RestockRequest) -> RecordRestockResult:
        """Execute record restock use case."""
        logger.info(
            "record_restock_started",
            group_id=group_id,
            type_id=request.type_id,
            quantity=request.quantity,
        )

        type_store = await self._get_type_store()
        shuttle_type = await type_store.get_type(group_id, request.type_id)
        if shuttle_type is None:
            raise TypeNotFoundError(request.type_id)
        if not shuttle_type.is_active:
            raise TypeInactiveError(request.type_id)

        inv_store = await self._get_inventory_store()
        batch = await inv_store.add_restock(
            RestockBatch(
                group_id=group_id,
                type_id=request.type_id,
                quantity=request.quantity,
                unit_price=request.unit_price,
                created_at=utc_now(),
            )
        )

        return RecordRestockResult(batch=batch, shuttle_type=shuttle_type)

    def to_response(self, result: RecordRestockResult) -> RestockResponse:
        """Convert result to API response."""
        batch = result.batch
        return RestockResponse(
            id=batch.id,  # type: ignore[arg-type]
            type_id=batch.type_id,
            quantity=batch.quantity,
            unit_price=batch.unit_price,
            total_price=batch.total_price,
            created_at=batch.created_at,
        )
