"""Abstract interface for resolving a user to a group."""

from abc import ABC, abstractmethod


class IIdentityStore(ABC):
    """Lookup side of the external identity provider."""

    @abstractmethod
    async def get_group_id_for_user(self, user_id: str) -> str | None:
        """Return the group a user belongs to, if any."""
        pass
