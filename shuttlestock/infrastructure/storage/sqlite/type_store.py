"""SQLite implementation of shuttlecock type storage."""

import uuid

import aiosqlite

from shuttlestock.config import get_logger
from shuttlestock.core.entities.inventory import ShuttlecockType, SystemOwner, UserOwner
from shuttlestock.core.exceptions import DatabaseError, QueryError
from shuttlestock.core.interfaces.type_store import ITypeStore
from shuttlestock.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from shuttlestock.infrastructure.storage.sqlite.inventory_store import (
    format_timestamp,
    parse_timestamp,
)

logger = get_logger(__name__)


def _generate_id() -> str:
    """Generate a new UUID text ID."""
    return str(uuid.uuid4())


class SQLiteTypeStore(ITypeStore):
    """SQLite implementation of shuttlecock type storage."""

    async def create_type(self, shuttle_type: ShuttlecockType) -> ShuttlecockType:
        """Create a new type."""
        if not shuttle_type.id:
            shuttle_type.id = _generate_id()
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO shuttlecock_types (
                        id, group_id, brand, name, is_active, owner_user_id, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        shuttle_type.id,
                        shuttle_type.group_id,
                        shuttle_type.brand,
                        shuttle_type.name,
                        int(shuttle_type.is_active),
                        self._owner_column(shuttle_type),
                        format_timestamp(shuttle_type.created_at),
                    ),
                )
        except (aiosqlite.Error, OSError) as e:
            raise DatabaseError("create_type", str(e)) from e

        logger.info("type_created", type_id=shuttle_type.id, label=shuttle_type.label)
        return shuttle_type

    async def get_type(self, group_id: str, type_id: str) -> ShuttlecockType | None:
        """Get a type by ID within a group."""
        try:
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM shuttlecock_types WHERE id = ? AND group_id = ?",
                    (type_id, group_id),
                )
                row = await cursor.fetchone()
        except (aiosqlite.Error, OSError) as e:
            raise QueryError("get_type", str(e)) from e

        if row is None:
            return None
        return self._row_to_type(row)

    async def list_types(
        self, group_id: str, include_hidden: bool = False
    ) -> list[ShuttlecockType]:
        """List types for a group, newest first."""
        sql = "SELECT * FROM shuttlecock_types WHERE group_id = ?"
        if not include_hidden:
            sql += " AND is_active = 1"
        sql += " ORDER BY created_at DESC, id"

        try:
            async with get_connection() as conn:
                cursor = await conn.execute(sql, (group_id,))
                rows = await cursor.fetchall()
        except (aiosqlite.Error, OSError) as e:
            raise QueryError("list_types", str(e)) from e

        return [self._row_to_type(row) for row in rows]

    async def update_type(self, shuttle_type: ShuttlecockType) -> ShuttlecockType:
        """Persist brand, name, visibility and owner."""
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE shuttlecock_types SET
                        brand = ?,
                        name = ?,
                        is_active = ?,
                        owner_user_id = ?
                    WHERE id = ? AND group_id = ?
                    """,
                    (
                        shuttle_type.brand,
                        shuttle_type.name,
                        int(shuttle_type.is_active),
                        self._owner_column(shuttle_type),
                        shuttle_type.id,
                        shuttle_type.group_id,
                    ),
                )
        except (aiosqlite.Error, OSError) as e:
            raise DatabaseError("update_type", str(e)) from e

        logger.info(
            "type_updated",
            type_id=shuttle_type.id,
            is_active=shuttle_type.is_active,
        )
        return shuttle_type

    @staticmethod
    def _owner_column(shuttle_type: ShuttlecockType) -> str | None:
        # NULL owner_user_id means system-owned
        if isinstance(shuttle_type.owner, UserOwner):
            return shuttle_type.owner.user_id
        return None

    @staticmethod
    def _row_to_type(row: aiosqlite.Row) -> ShuttlecockType:
        """Convert a database row to a ShuttlecockType entity."""
        try:
            owner_id = row["owner_user_id"]
            return ShuttlecockType(
                id=row["id"],
                group_id=row["group_id"],
                brand=row["brand"],
                name=row["name"],
                is_active=bool(row["is_active"]),
                owner=UserOwner(user_id=owner_id) if owner_id else SystemOwner(),
                created_at=parse_timestamp(row["created_at"]),
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise QueryError("decode shuttlecock_types row", str(e)) from e
