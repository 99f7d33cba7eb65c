"""
SQLite access for the stores.

Each store operation opens its own aiosqlite connection and closes it when
the operation ends. Journal mode is a property of the database file, so WAL
is switched on once when the database is opened; foreign keys and the busy
timeout are per-connection and are set on every connect.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from shuttlestock.config import Settings, get_logger, get_settings

logger = get_logger(__name__)


class SQLiteDatabase:
    """Hands out configured connections to one SQLite file."""

    def __init__(self, db_path: Path, busy_timeout: int = 30000):
        self.db_path = db_path
        self.busy_timeout = busy_timeout
        self.journal_mode: str | None = None
        self._open_connections = 0

    @classmethod
    def from_settings(cls, settings: Settings) -> "SQLiteDatabase":
        return cls(settings.storage.db_path, busy_timeout=settings.storage.busy_timeout)

    @property
    def is_open(self) -> bool:
        return self.journal_mode is not None

    @property
    def open_connections(self) -> int:
        return self._open_connections

    async def open(self) -> None:
        """Create the data directory and put the file in WAL mode."""
        if self.is_open:
            return

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(self.db_path) as conn:
            cursor = await conn.execute("PRAGMA journal_mode=WAL")
            row = await cursor.fetchone()
        self.journal_mode = row[0]
        logger.info("database_opened", db_path=str(self.db_path), journal_mode=self.journal_mode)

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Open a connection for one operation.

        Usage:
            async with db.connect() as conn:
                await conn.execute(...)
        """
        await self.open()

        conn = await aiosqlite.connect(self.db_path)
        self._open_connections += 1
        try:
            conn.row_factory = aiosqlite.Row
            await conn.execute("PRAGMA foreign_keys=ON")
            await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
            await conn.execute("PRAGMA synchronous=NORMAL")
            yield conn
        finally:
            self._open_connections -= 1
            await conn.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Connection that commits on success and rolls back on error."""
        async with self.connect() as conn:
            try:
                yield conn
                await conn.commit()
            except Exception:
                await conn.rollback()
                raise

    async def close(self) -> None:
        if self._open_connections:
            logger.warning("database_closed_with_open_connections", count=self._open_connections)
        self.journal_mode = None
        logger.info("database_closed", db_path=str(self.db_path))


_database: SQLiteDatabase | None = None


async def get_database() -> SQLiteDatabase:
    """Process-wide database handle, opened on first use."""
    global _database
    if _database is None:
        _database = SQLiteDatabase.from_settings(get_settings())
        await _database.open()
    return _database


async def close_database() -> None:
    global _database
    if _database is not None:
        await _database.close()
        _database = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    db = await get_database()
    async with db.connect() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    db = await get_database()
    async with db.transaction() as conn:
        yield conn
