"""Tests for the stock summary projector."""

from unittest.mock import AsyncMock

from shuttlestock.core.services.stock_projector import StockSummaryProjector, tally


class TestTally:
    def test_restocked_minus_picked(self, make_batch, make_pickup):
        levels = tally(
            [make_batch(1, 10, 100, 0), make_batch(2, 5, 120, 5)],
            [make_pickup(1, 4, 10), make_pickup(2, 3, 20)],
        )
        assert levels["type-a"].total_restocked == 15
        assert levels["type-a"].total_picked == 7
        assert levels["type-a"].current_stock == 8

    def test_can_go_negative(self, make_batch, make_pickup):
        levels = tally([make_batch(1, 2, 100, 0)], [make_pickup(1, 5, 10)])
        assert levels["type-a"].current_stock == -3

    def test_types_kept_apart(self, make_batch, make_pickup):
        levels = tally(
            [make_batch(1, 2, 100, 0), make_batch(2, 9, 100, 0, type_id="type-b")],
            [make_pickup(1, 1, 10, type_id="type-b")],
        )
        assert levels["type-a"].current_stock == 2
        assert levels["type-b"].current_stock == 8


class TestStockSummaryProjector:
    async def test_current_stock_without_events(self):
        store = AsyncMock()
        store.list_restock_batches.return_value = []
        store.list_pickup_events.return_value = []

        level = await StockSummaryProjector(store).current_stock("group-1", "type-a")

        assert level.type_id == "type-a"
        assert level.current_stock == 0
        store.list_restock_batches.assert_awaited_once_with("group-1", "type-a")

    async def test_all_levels(self, make_batch, make_pickup):
        store = AsyncMock()
        store.list_restock_batches.return_value = [make_batch(1, 6, 100, 0)]
        store.list_pickup_events.return_value = [make_pickup(1, 1, 10)]

        levels = await StockSummaryProjector(store).all_levels("group-1")

        assert levels["type-a"].current_stock == 5
