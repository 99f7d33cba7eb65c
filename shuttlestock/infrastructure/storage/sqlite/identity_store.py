"""SQLite lookup of group membership."""

import uuid

import aiosqlite

from shuttlestock.config import get_logger
from shuttlestock.core.exceptions import DatabaseError, QueryError
from shuttlestock.core.interfaces.identity_store import IIdentityStore
from shuttlestock.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)

logger = get_logger(__name__)


class SQLiteIdentityStore(IIdentityStore):
    """
    Profiles table mapping users to groups.

    Users themselves live with the identity provider; only the
    membership mapping is kept here.
    """

    async def get_group_id_for_user(self, user_id: str) -> str | None:
        """Return the group a user belongs to, if any."""
        try:
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT group_id FROM profiles WHERE user_id = ?", (user_id,)
                )
                row = await cursor.fetchone()
        except (aiosqlite.Error, OSError) as e:
            raise QueryError("get_group_id_for_user", str(e)) from e

        if row is None:
            return None
        return row["group_id"]

    async def create_group(self, name: str, group_id: str | None = None) -> str:
        """Create a group and return its ID."""
        group_id = group_id or str(uuid.uuid4())
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    "INSERT INTO groups (id, name) VALUES (?, ?)", (group_id, name)
                )
        except (aiosqlite.Error, OSError) as e:
            raise DatabaseError("create_group", str(e)) from e

        logger.info("group_created", group_id=group_id, name=name)
        return group_id

    async def assign_user(self, user_id: str, group_id: str) -> None:
        """Attach a user to a group, replacing any previous membership."""
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO profiles (user_id, group_id) VALUES (?, ?)
                    ON CONFLICT(user_id) DO UPDATE SET group_id = excluded.group_id
                    """,
                    (user_id, group_id),
                )
        except (aiosqlite.Error, OSError) as e:
            raise DatabaseError("assign_user", str(e)) from e

        logger.info("user_assigned", user_id=user_id, group_id=group_id)
