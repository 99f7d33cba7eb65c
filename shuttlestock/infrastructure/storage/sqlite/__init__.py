"""SQLite storage implementations."""

from shuttlestock.infrastructure.storage.sqlite.connection import (
    SQLiteDatabase,
    close_database,
    get_connection,
    get_database,
    get_transaction,
)
from shuttlestock.infrastructure.storage.sqlite.identity_store import SQLiteIdentityStore
from shuttlestock.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from shuttlestock.infrastructure.storage.sqlite.type_store import SQLiteTypeStore

# Singleton instances
_inventory_store: SQLiteInventoryStore | None = None
_type_store: SQLiteTypeStore | None = None
_identity_store: SQLiteIdentityStore | None = None


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_type_store() -> SQLiteTypeStore:
    """Get singleton type store instance."""
    global _type_store
    if _type_store is None:
        _type_store = SQLiteTypeStore()
    return _type_store


async def get_identity_store() -> SQLiteIdentityStore:
    """Get singleton identity store instance."""
    global _identity_store
    if _identity_store is None:
        _identity_store = SQLiteIdentityStore()
    return _identity_store


__all__ = [
    # Connection
    "SQLiteDatabase",
    "get_database",
    "close_database",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteInventoryStore",
    "SQLiteTypeStore",
    "SQLiteIdentityStore",
    # Factory functions
    "get_inventory_store",
    "get_type_store",
    "get_identity_store",
]
