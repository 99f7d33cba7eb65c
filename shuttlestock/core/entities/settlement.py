"""Settlement (FIFO costing) entities."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator


@dataclass(frozen=True)
class BatchDraw:
    """Units one pickup took from one batch."""

    batch_id: int | None
    unit_price: int
    quantity: int

    @property
    def cost(self) -> int:
        return self.unit_price * self.quantity


@dataclass
class ConsumptionAllocation:
    """Every batch draw made for a single pickup during a replay."""

    pickup_id: int | None
    requested: int
    draws: list[BatchDraw] = field(default_factory=list)

    @property
    def consumed(self) -> int:
        return sum(d.quantity for d in self.draws)

    @property
    def cost(self) -> int:
        return sum(d.cost for d in self.draws)

    @property
    def shortfall(self) -> int:
        return self.requested - self.consumed


class DepletionWarning(BaseModel):
    """A pickup that could only be partly served from recorded batches."""

    type_id: str
    pickup_id: int | None
    picker_name: str
    created_at: datetime
    requested: int
    consumed: int

    @property
    def shortfall(self) -> int:
        return self.requested - self.consumed


class UsedBatch(BaseModel):
    """Quantity drawn at one unit price."""

    price: int
    quantity: int


class TypeSettlementDetail(BaseModel):
    """In-window consumption and cost for one type."""

    type_id: str
    total_quantity: int
    total_cost: int
    used_batches: list[UsedBatch] = Field(default_factory=list)

    @property
    def average_cost(self) -> float:
        if self.total_quantity == 0:
            return 0.0
        return self.total_cost / self.total_quantity


class SkippedType(BaseModel):
    """A type left out of a settlement because its data could not be replayed."""

    type_id: str
    reason: str


class SettlementWindow(BaseModel):
    """Filters applied to a settlement. ``None`` means unbounded."""

    start: datetime | None = None
    end: datetime | None = None
    picker_name: str | None = None
    type_id: str | None = None

    @field_validator("start", "end")
    @classmethod
    def to_naive_utc(cls, v: datetime | None) -> datetime | None:
        """Records carry naive UTC timestamps; bounds must compare against them."""
        if v is not None and v.tzinfo is not None:
            return v.astimezone(UTC).replace(tzinfo=None)
        return v

    def includes(self, created_at: datetime, picker_name: str) -> bool:
        """Inclusive time bounds plus case-sensitive name containment."""
        if self.start is not None and created_at < self.start:
            return False
        if self.end is not None and created_at > self.end:
            return False
        if self.picker_name and self.picker_name not in picker_name:
            return False
        return True


class SettlementReport(BaseModel):
    """Result of a settlement computation."""

    window: SettlementWindow
    grand_total_cost: int = 0
    details: list[TypeSettlementDetail] = Field(default_factory=list)
    warnings: list[DepletionWarning] = Field(default_factory=list)
    skipped_types: list[SkippedType] = Field(default_factory=list)
