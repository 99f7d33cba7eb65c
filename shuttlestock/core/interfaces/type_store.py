"""Abstract interface for shuttlecock type storage."""

from abc import ABC, abstractmethod

from shuttlestock.core.entities.inventory import ShuttlecockType


class ITypeStore(ABC):
    """Interface for shuttlecock type persistence."""

    @abstractmethod
    async def create_type(self, shuttle_type: ShuttlecockType) -> ShuttlecockType:
        """Create a new type."""
        pass

    @abstractmethod
    async def get_type(self, group_id: str, type_id: str) -> ShuttlecockType | None:
        """Get a type by ID within a group."""
        pass

    @abstractmethod
    async def list_types(
        self, group_id: str, include_hidden: bool = False
    ) -> list[ShuttlecockType]:
        """List types for a group, newest first."""
        pass

    @abstractmethod
    async def update_type(self, shuttle_type: ShuttlecockType) -> ShuttlecockType:
        """Persist brand, name, visibility and owner of a type."""
        pass
