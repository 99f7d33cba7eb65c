"""
FIFO Consumption Simulator.

Replays the full pickup history of one type against a fresh Batch Ledger.
The replay always starts from the first pickup ever recorded: which batch
(and so which price) serves a pickup depends on everything consumed
before it, including pickups outside any reporting window.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from shuttlestock.config import get_logger
from shuttlestock.core.entities.inventory import PickupEvent, RestockBatch
from shuttlestock.core.entities.settlement import (
    BatchDraw,
    ConsumptionAllocation,
    DepletionWarning,
)
from shuttlestock.core.exceptions import InvalidInputError
from shuttlestock.core.services.batch_ledger import BatchLedger

logger = get_logger(__name__)


@dataclass
class ReplayStep:
    """One pickup and the batches it drew from."""

    pickup: PickupEvent
    allocation: ConsumptionAllocation


@dataclass
class SimulationResult:
    """Outcome of replaying one type's history."""

    type_id: str
    ledger: BatchLedger
    steps: list[ReplayStep] = field(default_factory=list)
    warnings: list[DepletionWarning] = field(default_factory=list)

    @property
    def total_consumed(self) -> int:
        return sum(step.allocation.consumed for step in self.steps)


class FifoSimulator:
    """Stateless replay engine; every call builds its own ledger."""

    def simulate(
        self,
        type_id: str,
        batches: Iterable[RestockBatch],
        pickups: Iterable[PickupEvent],
    ) -> SimulationResult:
        """
        Replay every pickup of ``type_id`` in ``(created_at, id)`` order.

        A pickup that outruns the recorded batches consumes what is left,
        the shortfall costs nothing, and a DepletionWarning is recorded.

        Raises:
            InvalidInputError: If a batch or pickup is malformed.
        """
        ledger = BatchLedger.from_batches(
            sorted(batches, key=lambda b: b.sort_key), type_id=type_id
        )
        result = SimulationResult(type_id=type_id, ledger=ledger)

        for pickup in sorted(pickups, key=lambda p: p.sort_key):
            if pickup.type_id != type_id:
                raise InvalidInputError(
                    f"pickup belongs to type {pickup.type_id}",
                    type_id=type_id,
                    record_id=pickup.id,
                )
            if pickup.quantity < 1:
                raise InvalidInputError(
                    f"pickup quantity must be at least 1, got {pickup.quantity}",
                    type_id=type_id,
                    record_id=pickup.id,
                )

            taken = ledger.take_earliest_available(pickup.quantity)
            allocation = ConsumptionAllocation(
                pickup_id=pickup.id,
                requested=pickup.quantity,
                draws=[
                    BatchDraw(batch_id=batch.id, unit_price=batch.unit_price, quantity=amount)
                    for batch, amount in taken
                ],
            )
            result.steps.append(ReplayStep(pickup=pickup, allocation=allocation))

            if allocation.shortfall > 0:
                warning = DepletionWarning(
                    type_id=type_id,
                    pickup_id=pickup.id,
                    picker_name=pickup.picker_name,
                    created_at=pickup.created_at,
                    requested=allocation.requested,
                    consumed=allocation.consumed,
                )
                result.warnings.append(warning)
                logger.warning(
                    "inventory_depleted",
                    type_id=type_id,
                    pickup_id=pickup.id,
                    requested=warning.requested,
                    consumed=warning.consumed,
                    shortfall=warning.shortfall,
                )

        logger.debug(
            "fifo_replay_complete",
            type_id=type_id,
            batches=len(ledger.slots),
            pickups=len(result.steps),
            consumed=result.total_consumed,
            remaining=ledger.total_remaining,
        )
        return result
