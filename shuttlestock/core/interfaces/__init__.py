"""Core interfaces (ports) for dependency injection."""

from shuttlestock.core.interfaces.identity_store import IIdentityStore
from shuttlestock.core.interfaces.inventory_store import IInventoryStore
from shuttlestock.core.interfaces.type_store import ITypeStore

__all__ = [
    "IInventoryStore",
    "ITypeStore",
    "IIdentityStore",
]
