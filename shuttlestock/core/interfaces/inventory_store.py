"""Abstract interface for restock and pickup event storage."""

from abc import ABC, abstractmethod
from datetime import datetime

from shuttlestock.core.entities.inventory import PickupEvent, RestockBatch


class IInventoryStore(ABC):
    """
    Interface for restock batch and pickup event persistence.

    Every listing used for replay must come back ordered by
    ``(created_at, id)`` ascending so timestamp ties break in insertion order.
    """

    @abstractmethod
    async def list_restock_batches(
        self, group_id: str, type_id: str | None = None
    ) -> list[RestockBatch]:
        """List restock batches for a group, oldest first."""
        pass

    @abstractmethod
    async def list_pickup_events(
        self, group_id: str, type_id: str | None = None
    ) -> list[PickupEvent]:
        """List pickup events for a group, oldest first."""
        pass

    @abstractmethod
    async def list_active_type_ids(self, group_id: str) -> list[str]:
        """List type ids referenced by any restock, ordered by first restock."""
        pass

    @abstractmethod
    async def add_restock(self, batch: RestockBatch) -> RestockBatch:
        """Record a restock batch."""
        pass

    @abstractmethod
    async def add_pickup(self, pickup: PickupEvent) -> PickupEvent:
        """Record a pickup event."""
        pass

    @abstractmethod
    async def get_restock(self, group_id: str, restock_id: int) -> RestockBatch | None:
        """Get a restock batch by ID within a group."""
        pass

    @abstractmethod
    async def get_pickup(self, group_id: str, pickup_id: int) -> PickupEvent | None:
        """Get a pickup event by ID within a group."""
        pass

    @abstractmethod
    async def delete_restock(self, group_id: str, restock_id: int) -> bool:
        """Delete a restock batch. Returns False when nothing matched."""
        pass

    @abstractmethod
    async def delete_pickup(self, group_id: str, pickup_id: int) -> bool:
        """Delete a pickup event. Returns False when nothing matched."""
        pass

    @abstractmethod
    async def list_restock_history(
        self,
        group_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = 200,
    ) -> list[RestockBatch]:
        """List restock batches newest first, optionally bounded by time."""
        pass

    @abstractmethod
    async def list_pickup_history(
        self, group_id: str, limit: int = 200
    ) -> list[PickupEvent]:
        """List pickup events newest first."""
        pass
