"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Generator
from datetime import datetime, timedelta

import pytest

from shuttlestock.config import reset_settings
from shuttlestock.core.entities.inventory import PickupEvent, RestockBatch

GROUP_ID = "group-1"
TYPE_A = "type-a"

# Fixed origin for every timestamp built by the factories below
T0 = datetime(2024, 3, 1, 9, 0, 0)


def _at(minutes: int) -> datetime:
    return T0 + timedelta(minutes=minutes)


@pytest.fixture
def at() -> Callable[[int], datetime]:
    """Timestamp ``minutes`` after a fixed origin."""
    return _at


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch) -> Generator[None, None, None]:
    """Point storage at a temp directory and drop cached settings."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def make_batch() -> Callable[..., RestockBatch]:
    def _make(
        id: int,
        quantity: int,
        unit_price: int,
        minute: int,
        type_id: str = TYPE_A,
        group_id: str = GROUP_ID,
    ) -> RestockBatch:
        return RestockBatch(
            id=id,
            group_id=group_id,
            type_id=type_id,
            quantity=quantity,
            unit_price=unit_price,
            created_at=_at(minute),
        )

    return _make


@pytest.fixture
def make_pickup() -> Callable[..., PickupEvent]:
    def _make(
        id: int,
        quantity: int,
        minute: int,
        picker_name: str = "Alice",
        type_id: str = TYPE_A,
        group_id: str = GROUP_ID,
    ) -> PickupEvent:
        return PickupEvent(
            id=id,
            group_id=group_id,
            type_id=type_id,
            picker_name=picker_name,
            quantity=quantity,
            created_at=_at(minute),
        )

    return _make
