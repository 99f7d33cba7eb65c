"""
Batch Ledger.

Holds the restock batches of one shuttlecock type in FIFO order and hands
out units earliest-batch-first. Remaining counters live only in memory for
the duration of one replay; nothing here is ever persisted.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from shuttlestock.core.entities.inventory import RestockBatch
from shuttlestock.core.exceptions import InvalidInputError


@dataclass
class LedgerSlot:
    """A batch plus the units not yet handed out."""

    batch: RestockBatch
    remaining: int

    @property
    def consumed(self) -> int:
        return self.batch.quantity - self.remaining


class BatchLedger:
    """FIFO ledger over the restock batches of a single type."""

    def __init__(self, type_id: str | None = None) -> None:
        self.type_id = type_id
        self._slots: list[LedgerSlot] = []
        # Index of the first slot that may still have units. Remaining
        # counters never grow, so this only moves forward.
        self._cursor = 0

    @classmethod
    def from_batches(
        cls, batches: Iterable[RestockBatch], type_id: str | None = None
    ) -> "BatchLedger":
        ledger = cls(type_id)
        ledger.initialize(batches)
        return ledger

    def initialize(self, batches: Iterable[RestockBatch]) -> None:
        """
        Load batches and reset every remaining counter to the batch quantity.

        Args:
            batches: Batches sorted ascending by ``(created_at, id)``

        Raises:
            InvalidInputError: On a quantity below 1, a negative unit price,
                a batch of another type, or batches out of order.
        """
        slots: list[LedgerSlot] = []
        previous: RestockBatch | None = None

        for batch in batches:
            if batch.quantity < 1:
                raise InvalidInputError(
                    f"restock quantity must be at least 1, got {batch.quantity}",
                    type_id=batch.type_id,
                    record_id=batch.id,
                )
            if batch.unit_price < 0:
                raise InvalidInputError(
                    f"restock unit price must not be negative, got {batch.unit_price}",
                    type_id=batch.type_id,
                    record_id=batch.id,
                )
            if self.type_id is not None and batch.type_id != self.type_id:
                raise InvalidInputError(
                    f"batch belongs to type {batch.type_id}",
                    type_id=self.type_id,
                    record_id=batch.id,
                )
            if previous is not None and batch.sort_key < previous.sort_key:
                raise InvalidInputError(
                    "restock batches are not in created_at order",
                    type_id=batch.type_id,
                    record_id=batch.id,
                )
            slots.append(LedgerSlot(batch=batch, remaining=batch.quantity))
            previous = batch

        self._slots = slots
        self._cursor = 0

    def take_earliest_available(self, max_amount: int) -> list[tuple[RestockBatch, int]]:
        """
        Take up to ``max_amount`` units, oldest batch first.

        Returns the (batch, amount_taken) pairs actually drawn. The sum can
        fall short of ``max_amount`` once every batch is exhausted.
        """
        taken: list[tuple[RestockBatch, int]] = []
        to_take = max_amount

        while to_take > 0:
            slot = self._next_available()
            if slot is None:
                break
            amount = min(slot.remaining, to_take)
            slot.remaining -= amount
            to_take -= amount
            taken.append((slot.batch, amount))

        return taken

    def _next_available(self) -> LedgerSlot | None:
        while self._cursor < len(self._slots):
            slot = self._slots[self._cursor]
            if slot.remaining > 0:
                return slot
            self._cursor += 1
        return None

    @property
    def slots(self) -> tuple[LedgerSlot, ...]:
        return tuple(self._slots)

    @property
    def total_quantity(self) -> int:
        return sum(s.batch.quantity for s in self._slots)

    @property
    def total_remaining(self) -> int:
        return sum(s.remaining for s in self._slots)

    @property
    def total_consumed(self) -> int:
        return self.total_quantity - self.total_remaining

    def consumed_from(self, batch_id: int) -> int:
        """Units drawn so far from the batch with ``batch_id``."""
        for slot in self._slots:
            if slot.batch.id == batch_id:
                return slot.consumed
        raise KeyError(batch_id)
