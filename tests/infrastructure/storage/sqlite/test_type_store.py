"""Tests for SQLite type store."""

import pytest

from shuttlestock.core.entities.inventory import ShuttlecockType, SystemOwner, UserOwner
from shuttlestock.infrastructure.storage.sqlite.type_store import SQLiteTypeStore


@pytest.fixture
def store(database):
    return SQLiteTypeStore()


class TestSQLiteTypeStore:
    async def test_seeded_types_are_system_owned(self, store):
        t = await store.get_type("group-1", "type-a")
        assert t is not None
        assert isinstance(t.owner, SystemOwner)

    async def test_get_is_group_scoped(self, store):
        assert await store.get_type("group-2", "type-a") is None

    async def test_create_generates_id(self, store):
        created = await store.create_type(
            ShuttlecockType(
                group_id="group-1", brand="Victor", name="Gold", owner=UserOwner(user_id="user-1")
            )
        )
        fetched = await store.get_type("group-1", created.id)
        assert fetched.owner == UserOwner(user_id="user-1")
        assert fetched.label == "Victor Gold"

    async def test_list_hides_inactive_by_default(self, store):
        t = await store.get_type("group-1", "type-b")
        await store.update_type(t.model_copy(update={"is_active": False}))

        visible = await store.list_types("group-1")
        everything = await store.list_types("group-1", include_hidden=True)

        assert [x.id for x in visible] == ["type-a"]
        assert [x.id for x in everything] == ["type-b", "type-a"]

    async def test_update_persists_owner_transfer(self, store):
        t = await store.get_type("group-1", "type-a")
        await store.update_type(t.edited_by("user-1", name="AS-40"))

        fetched = await store.get_type("group-1", "type-a")
        assert fetched.name == "AS-40"
        assert fetched.owner == UserOwner(user_id="user-1")
