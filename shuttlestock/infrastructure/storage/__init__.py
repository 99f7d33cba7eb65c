"""Storage infrastructure implementations."""

from shuttlestock.infrastructure.storage.sqlite import (
    SQLiteIdentityStore,
    SQLiteInventoryStore,
    SQLiteTypeStore,
    close_database,
    get_connection,
    get_database,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteInventoryStore",
    "SQLiteTypeStore",
    "SQLiteIdentityStore",
    # Connections
    "get_database",
    "close_database",
    "get_connection",
    "get_transaction",
]
