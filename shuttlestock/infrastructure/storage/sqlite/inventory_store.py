"""SQLite implementation of restock and pickup event storage."""

from datetime import UTC, datetime
from typing import Any

import aiosqlite

from shuttlestock.config import get_logger
from shuttlestock.core.entities.inventory import PickupEvent, RestockBatch
from shuttlestock.core.exceptions import DatabaseError, QueryError
from shuttlestock.core.interfaces.inventory_store import IInventoryStore
from shuttlestock.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)

logger = get_logger(__name__)


def format_timestamp(value: datetime) -> str:
    """Store every timestamp as naive UTC with fixed precision so text order is time order."""
    if value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
    return value.isoformat(timespec="microseconds")


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of restock batch and pickup event storage."""

    async def _fetch_all(
        self, operation: str, sql: str, params: tuple[Any, ...]
    ) -> list[aiosqlite.Row]:
        try:
            async with get_connection() as conn:
                cursor = await conn.execute(sql, params)
                return list(await cursor.fetchall())
        except (aiosqlite.Error, OSError) as e:
            logger.error("inventory_query_failed", operation=operation, error=str(e))
            raise QueryError(operation, str(e)) from e

    async def list_restock_batches(
        self, group_id: str, type_id: str | None = None
    ) -> list[RestockBatch]:
        """List restock batches for a group, oldest first."""
        sql = "SELECT * FROM restock_records WHERE group_id = ?"
        params: tuple[Any, ...] = (group_id,)
        if type_id is not None:
            sql += " AND shuttlecock_type_id = ?"
            params += (type_id,)
        sql += " ORDER BY created_at ASC, id ASC"

        rows = await self._fetch_all("list_restock_batches", sql, params)
        return [self._row_to_batch(row) for row in rows]

    async def list_pickup_events(
        self, group_id: str, type_id: str | None = None
    ) -> list[PickupEvent]:
        """List pickup events for a group, oldest first."""
        sql = "SELECT * FROM pickup_records WHERE group_id = ?"
        params: tuple[Any, ...] = (group_id,)
        if type_id is not None:
            sql += " AND shuttlecock_type_id = ?"
            params += (type_id,)
        sql += " ORDER BY created_at ASC, id ASC"

        rows = await self._fetch_all("list_pickup_events", sql, params)
        return [self._row_to_pickup(row) for row in rows]

    async def list_active_type_ids(self, group_id: str) -> list[str]:
        """List restocked type ids ordered by their first restock."""
        rows = await self._fetch_all(
            "list_active_type_ids",
            """
            SELECT shuttlecock_type_id, MIN(created_at) AS first_restock, MIN(id) AS first_id
            FROM restock_records
            WHERE group_id = ?
            GROUP BY shuttlecock_type_id
            ORDER BY first_restock ASC, first_id ASC
            """,
            (group_id,),
        )
        return [row["shuttlecock_type_id"] for row in rows]

    async def add_restock(self, batch: RestockBatch) -> RestockBatch:
        """Record a restock batch."""
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO restock_records (
                        group_id, shuttlecock_type_id, quantity, unit_price, created_at
                    ) VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        batch.group_id,
                        batch.type_id,
                        batch.quantity,
                        batch.unit_price,
                        format_timestamp(batch.created_at),
                    ),
                )
                batch.id = cursor.lastrowid
        except (aiosqlite.Error, OSError) as e:
            raise DatabaseError("add_restock", str(e)) from e

        logger.info(
            "restock_recorded",
            restock_id=batch.id,
            type_id=batch.type_id,
            qty=batch.quantity,
            unit_price=batch.unit_price,
        )
        return batch

    async def add_pickup(self, pickup: PickupEvent) -> PickupEvent:
        """Record a pickup event."""
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO pickup_records (
                        group_id, shuttlecock_type_id, picker_name, quantity, created_at
                    ) VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        pickup.group_id,
                        pickup.type_id,
                        pickup.picker_name,
                        pickup.quantity,
                        format_timestamp(pickup.created_at),
                    ),
                )
                pickup.id = cursor.lastrowid
        except (aiosqlite.Error, OSError) as e:
            raise DatabaseError("add_pickup", str(e)) from e

        logger.info(
            "pickup_recorded",
            pickup_id=pickup.id,
            type_id=pickup.type_id,
            qty=pickup.quantity,
        )
        return pickup

    async def get_restock(self, group_id: str, restock_id: int) -> RestockBatch | None:
        """Get a restock batch by ID within a group."""
        rows = await self._fetch_all(
            "get_restock",
            "SELECT * FROM restock_records WHERE id = ? AND group_id = ?",
            (restock_id, group_id),
        )
        return self._row_to_batch(rows[0]) if rows else None

    async def get_pickup(self, group_id: str, pickup_id: int) -> PickupEvent | None:
        """Get a pickup event by ID within a group."""
        rows = await self._fetch_all(
            "get_pickup",
            "SELECT * FROM pickup_records WHERE id = ? AND group_id = ?",
            (pickup_id, group_id),
        )
        return self._row_to_pickup(rows[0]) if rows else None

    async def delete_restock(self, group_id: str, restock_id: int) -> bool:
        """Delete a restock batch."""
        return await self._delete("restock_records", group_id, restock_id)

    async def delete_pickup(self, group_id: str, pickup_id: int) -> bool:
        """Delete a pickup event."""
        return await self._delete("pickup_records", group_id, pickup_id)

    async def _delete(self, table: str, group_id: str, record_id: int) -> bool:
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    f"DELETE FROM {table} WHERE id = ? AND group_id = ?",
                    (record_id, group_id),
                )
                deleted = cursor.rowcount > 0
        except (aiosqlite.Error, OSError) as e:
            raise DatabaseError(f"delete from {table}", str(e)) from e

        if deleted:
            logger.info("record_deleted", table=table, record_id=record_id)
        return deleted

    async def list_restock_history(
        self,
        group_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = 200,
    ) -> list[RestockBatch]:
        """List restock batches newest first."""
        sql = "SELECT * FROM restock_records WHERE group_id = ?"
        params: tuple[Any, ...] = (group_id,)
        if start is not None:
            sql += " AND created_at >= ?"
            params += (format_timestamp(start),)
        if end is not None:
            sql += " AND created_at <= ?"
            params += (format_timestamp(end),)
        sql += " ORDER BY created_at DESC, id DESC LIMIT ?"
        params += (limit,)

        rows = await self._fetch_all("list_restock_history", sql, params)
        return [self._row_to_batch(row) for row in rows]

    async def list_pickup_history(
        self, group_id: str, limit: int = 200
    ) -> list[PickupEvent]:
        """List pickup events newest first."""
        rows = await self._fetch_all(
            "list_pickup_history",
            """
            SELECT * FROM pickup_records
            WHERE group_id = ?
            ORDER BY created_at DESC, id DESC
            LIMIT ?
            """,
            (group_id, limit),
        )
        return [self._row_to_pickup(row) for row in rows]

    @staticmethod
    def _row_to_batch(row: aiosqlite.Row) -> RestockBatch:
        """Convert a database row to a RestockBatch entity."""
        try:
            return RestockBatch(
                id=row["id"],
                group_id=row["group_id"],
                type_id=row["shuttlecock_type_id"],
                quantity=int(row["quantity"]),
                unit_price=int(row["unit_price"]),
                created_at=parse_timestamp(row["created_at"]),
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise QueryError("decode restock_records row", str(e)) from e

    @staticmethod
    def _row_to_pickup(row: aiosqlite.Row) -> PickupEvent:
        """Convert a database row to a PickupEvent entity."""
        try:
            return PickupEvent(
                id=row["id"],
                group_id=row["group_id"],
                type_id=row["shuttlecock_type_id"],
                picker_name=row["picker_name"],
                quantity=int(row["quantity"]),
                created_at=parse_timestamp(row["created_at"]),
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise QueryError("decode pickup_records row", str(e)) from e
