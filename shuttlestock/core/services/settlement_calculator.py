"""
Window Cost Aggregator.

Runs the FIFO simulator for every type a group has restocked, then sums
cost and quantity for the pickups that fall inside the requested window.
Out-of-window pickups still consume batches during the replay; they just
contribute nothing to the totals.
"""

from collections import defaultdict
from collections.abc import Iterable

from shuttlestock.config import get_logger
from shuttlestock.core.entities.inventory import PickupEvent, RestockBatch
from shuttlestock.core.entities.settlement import (
    SettlementReport,
    SettlementWindow,
    SkippedType,
    TypeSettlementDetail,
    UsedBatch,
)
from shuttlestock.core.exceptions import InvalidInputError
from shuttlestock.core.interfaces.inventory_store import IInventoryStore
from shuttlestock.core.services.fifo_simulator import FifoSimulator, SimulationResult

logger = get_logger(__name__)


def summarize_window(
    result: SimulationResult, window: SettlementWindow
) -> TypeSettlementDetail | None:
    """
    Sum the in-window part of a replay.

    Returns None when no unit was consumed inside the window.
    """
    total_quantity = 0
    total_cost = 0
    by_price: dict[int, int] = defaultdict(int)

    for step in result.steps:
        if not window.includes(step.pickup.created_at, step.pickup.picker_name):
            continue
        for draw in step.allocation.draws:
            total_quantity += draw.quantity
            total_cost += draw.cost
            by_price[draw.unit_price] += draw.quantity

    if total_quantity == 0:
        return None

    return TypeSettlementDetail(
        type_id=result.type_id,
        total_quantity=total_quantity,
        total_cost=total_cost,
        used_batches=[
            UsedBatch(price=price, quantity=quantity)
            for price, quantity in sorted(by_price.items())
        ],
    )


class SettlementCalculator:
    """
    Computes settlements for a group.

    Depends only on the inventory store port; the simulator can be
    swapped for tests.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore,
        simulator: FifoSimulator | None = None,
    ) -> None:
        self._store = inventory_store
        self._simulator = simulator or FifoSimulator()

    async def compute(self, group_id: str, window: SettlementWindow) -> SettlementReport:
        """
        Compute the settlement for ``group_id`` under ``window``.

        Raises:
            QueryError: If the event store cannot be read. Nothing partial
                is returned in that case.
        """
        type_ids = await self._store.list_active_type_ids(group_id)
        if window.type_id is not None:
            type_ids = [t for t in type_ids if t == window.type_id]

        batches = await self._store.list_restock_batches(group_id, window.type_id)
        pickups = await self._store.list_pickup_events(group_id, window.type_id)

        report = self.aggregate(type_ids, batches, pickups, window)

        logger.info(
            "settlement_computed",
            group_id=group_id,
            types=len(report.details),
            skipped=len(report.skipped_types),
            depletions=len(report.warnings),
            grand_total_cost=report.grand_total_cost,
        )
        return report

    def aggregate(
        self,
        type_ids: Iterable[str],
        batches: Iterable[RestockBatch],
        pickups: Iterable[PickupEvent],
        window: SettlementWindow,
    ) -> SettlementReport:
        """Replay and sum each type; malformed types are skipped, not fatal."""
        batches_by_type: dict[str, list[RestockBatch]] = defaultdict(list)
        for batch in batches:
            batches_by_type[batch.type_id].append(batch)

        pickups_by_type: dict[str, list[PickupEvent]] = defaultdict(list)
        for pickup in pickups:
            pickups_by_type[pickup.type_id].append(pickup)

        report = SettlementReport(window=window)

        for type_id in type_ids:
            try:
                result = self._simulator.simulate(
                    type_id,
                    batches_by_type.get(type_id, []),
                    pickups_by_type.get(type_id, []),
                )
            except InvalidInputError as e:
                logger.warning(
                    "settlement_type_skipped",
                    type_id=type_id,
                    reason=e.details.get("reason"),
                    record_id=e.details.get("record_id"),
                )
                report.skipped_types.append(
                    SkippedType(type_id=type_id, reason=e.message)
                )
                continue

            report.warnings.extend(result.warnings)

            detail = summarize_window(result, window)
            if detail is None:
                continue

            report.details.append(detail)
            report.grand_total_cost += detail.total_cost

        return report
