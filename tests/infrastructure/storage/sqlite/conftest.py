"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import aiosqlite
import pytest

import shuttlestock.infrastructure.storage.sqlite.connection as conn_module
from shuttlestock.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """Migrated database with one group, two members and two types."""
    await initialize_database(temp_db_path, create_backup_before=False)

    async with aiosqlite.connect(temp_db_path) as conn:
        await conn.executescript("""
            INSERT INTO groups (id, name) VALUES ('group-1', 'Tuesday Club');
            INSERT INTO groups (id, name) VALUES ('group-2', 'Friday Club');
            INSERT INTO profiles (user_id, group_id) VALUES ('user-1', 'group-1');
            INSERT INTO profiles (user_id, group_id) VALUES ('user-orphan', NULL);
            INSERT INTO shuttlecock_types (id, group_id, brand, name, created_at)
            VALUES ('type-a', 'group-1', 'Yonex', 'AS-50', '2024-01-01T00:00:00.000000');
            INSERT INTO shuttlecock_types (id, group_id, brand, name, created_at)
            VALUES ('type-b', 'group-1', 'RSL', 'Classic', '2024-01-02T00:00:00.000000');
            INSERT INTO shuttlecock_types (id, group_id, brand, name, created_at)
            VALUES ('type-x', 'group-2', 'Victor', 'Master', '2024-01-03T00:00:00.000000');
        """)
        await conn.commit()

    yield temp_db_path


@pytest.fixture
async def database(initialized_db: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Point the process-wide database handle at the test database."""
    conn_module._database = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield initialized_db
        finally:
            await conn_module.close_database()
