"""Tests for the window cost aggregator."""

from unittest.mock import AsyncMock

import pytest

from shuttlestock.core.entities.settlement import SettlementWindow
from shuttlestock.core.exceptions import QueryError
from shuttlestock.core.services.settlement_calculator import SettlementCalculator


@pytest.fixture
def store():
    store = AsyncMock()
    store.list_active_type_ids.return_value = []
    store.list_restock_batches.return_value = []
    store.list_pickup_events.return_value = []
    return store


@pytest.fixture
def calculator(store):
    return SettlementCalculator(store)


class TestScenarios:
    async def test_single_batch_no_window(self, calculator, store, make_batch, make_pickup):
        store.list_active_type_ids.return_value = ["type-a"]
        store.list_restock_batches.return_value = [make_batch(1, 10, 100, 0)]
        store.list_pickup_events.return_value = [make_pickup(1, 4, 10)]

        report = await calculator.compute("group-1", SettlementWindow())

        assert report.grand_total_cost == 400
        assert len(report.details) == 1
        detail = report.details[0]
        assert detail.total_quantity == 4
        assert detail.total_cost == 400
        assert [(b.price, b.quantity) for b in detail.used_batches] == [(100, 4)]

    async def test_pickup_spanning_batches(self, calculator, store, make_batch, make_pickup):
        store.list_active_type_ids.return_value = ["type-a"]
        store.list_restock_batches.return_value = [
            make_batch(1, 5, 100, 0),
            make_batch(2, 5, 200, 10),
        ]
        store.list_pickup_events.return_value = [make_pickup(1, 7, 20)]

        report = await calculator.compute("group-1", SettlementWindow())

        assert report.grand_total_cost == 900
        assert [(b.price, b.quantity) for b in report.details[0].used_batches] == [
            (100, 5),
            (200, 2),
        ]

    async def test_window_after_all_pickups(
        self, calculator, store, make_batch, make_pickup, at
    ):
        store.list_active_type_ids.return_value = ["type-a"]
        store.list_restock_batches.return_value = [
            make_batch(1, 5, 100, 0),
            make_batch(2, 5, 200, 10),
        ]
        store.list_pickup_events.return_value = [make_pickup(1, 7, 20)]

        report = await calculator.compute(
            "group-1", SettlementWindow(start=at(30), end=at(40))
        )

        assert report.grand_total_cost == 0
        assert report.details == []

    async def test_depletion_is_reported_not_raised(
        self, calculator, store, make_batch, make_pickup
    ):
        store.list_active_type_ids.return_value = ["type-b"]
        store.list_restock_batches.return_value = [make_batch(1, 3, 50, 0, type_id="type-b")]
        store.list_pickup_events.return_value = [
            make_pickup(1, 2, 10, type_id="type-b"),
            make_pickup(2, 5, 20, type_id="type-b"),
        ]

        report = await calculator.compute("group-1", SettlementWindow())

        assert report.details[0].total_quantity == 3
        assert report.details[0].total_cost == 150
        assert len(report.warnings) == 1
        assert report.warnings[0].shortfall == 4

    async def test_no_restocked_types(self, calculator):
        report = await calculator.compute("group-1", SettlementWindow())

        assert report.grand_total_cost == 0
        assert report.details == []
        assert report.skipped_types == []


class TestWindowing:
    @pytest.fixture
    def history(self, store, make_batch, make_pickup):
        store.list_active_type_ids.return_value = ["type-a"]
        store.list_restock_batches.return_value = [
            make_batch(1, 3, 100, 0),
            make_batch(2, 10, 300, 5),
        ]
        store.list_pickup_events.return_value = [
            make_pickup(1, 3, 10, picker_name="Alice"),
            make_pickup(2, 2, 20, picker_name="Bob"),
            make_pickup(3, 1, 30, picker_name="Alice Chen"),
        ]

    async def test_out_of_window_pickups_still_consume(self, calculator, history, at):
        # Pickup 1 took the cheap batch even though it is outside the window
        report = await calculator.compute("group-1", SettlementWindow(start=at(15)))

        assert report.details[0].total_quantity == 3
        assert report.details[0].total_cost == 900
        assert [(b.price, b.quantity) for b in report.details[0].used_batches] == [(300, 3)]

    async def test_bounds_are_inclusive(self, calculator, history, at):
        report = await calculator.compute(
            "group-1", SettlementWindow(start=at(10), end=at(20))
        )
        assert report.details[0].total_quantity == 5

    async def test_in_window_cost_does_not_depend_on_window(self, calculator, history, at):
        narrow = await calculator.compute("group-1", SettlementWindow(start=at(20), end=at(20)))
        full = await calculator.compute("group-1", SettlementWindow())

        assert narrow.details[0].total_cost == 600
        assert full.details[0].total_cost == 300 + 600 + 300

    async def test_picker_filter_is_case_sensitive_substring(self, calculator, history):
        report = await calculator.compute("group-1", SettlementWindow(picker_name="Alice"))
        assert report.details[0].total_quantity == 4

        report = await calculator.compute("group-1", SettlementWindow(picker_name="alice"))
        assert report.details == []

    async def test_compute_is_idempotent(self, calculator, history, at):
        window = SettlementWindow(start=at(0), picker_name="Bob")
        first = await calculator.compute("group-1", window)
        second = await calculator.compute("group-1", window)

        assert first.model_dump_json() == second.model_dump_json()


class TestErrorIsolation:
    async def test_invalid_type_is_skipped(self, calculator, store, make_batch, make_pickup):
        store.list_active_type_ids.return_value = ["type-a", "type-b"]
        store.list_restock_batches.return_value = [
            make_batch(1, 0, 100, 0),
            make_batch(2, 4, 80, 0, type_id="type-b"),
        ]
        store.list_pickup_events.return_value = [
            make_pickup(1, 1, 10),
            make_pickup(2, 2, 10, type_id="type-b"),
        ]

        report = await calculator.compute("group-1", SettlementWindow())

        assert [d.type_id for d in report.details] == ["type-b"]
        assert report.grand_total_cost == 160
        assert [s.type_id for s in report.skipped_types] == ["type-a"]

    async def test_query_error_aborts(self, calculator, store):
        store.list_active_type_ids.return_value = ["type-a"]
        store.list_pickup_events.side_effect = QueryError("list_pickup_events", "disk I/O error")

        with pytest.raises(QueryError):
            await calculator.compute("group-1", SettlementWindow())

    async def test_type_filter(self, calculator, store, make_batch, make_pickup):
        store.list_active_type_ids.return_value = ["type-a", "type-b"]
        store.list_restock_batches.return_value = [make_batch(2, 4, 80, 0, type_id="type-b")]
        store.list_pickup_events.return_value = [make_pickup(2, 2, 10, type_id="type-b")]

        report = await calculator.compute("group-1", SettlementWindow(type_id="type-b"))

        store.list_restock_batches.assert_awaited_once_with("group-1", "type-b")
        assert [d.type_id for d in report.details] == ["type-b"]

    def test_pickups_of_unrestocked_types_are_ignored(self, calculator, make_pickup):
        report = calculator.aggregate(
            ["type-a"], [], [make_pickup(1, 2, 0, type_id="type-z")], SettlementWindow()
        )
        assert report.details == []
        assert report.warnings == []
