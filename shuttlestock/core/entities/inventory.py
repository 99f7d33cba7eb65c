"""Inventory domain entities."""

from datetime import UTC, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    """Naive UTC timestamp, the form every record is stored in."""
    return datetime.now(UTC).replace(tzinfo=None)


class SystemOwner(BaseModel):
    """Type seeded by the system and not yet claimed by anyone."""

    kind: Literal["system"] = "system"


class UserOwner(BaseModel):
    """Type created or claimed by a user."""

    kind: Literal["user"] = "user"
    user_id: str


Owner = Annotated[SystemOwner | UserOwner, Field(discriminator="kind")]


class ShuttlecockType(BaseModel):
    """A brand/model of shuttlecock tracked by a group."""

    id: str | None = None
    group_id: str
    brand: str
    name: str
    is_active: bool = True
    owner: Owner = Field(default_factory=SystemOwner)
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def label(self) -> str:
        return f"{self.brand} {self.name}"

    def can_edit(self, user_id: str) -> bool:
        """System-owned types are editable by anyone, user-owned only by the owner."""
        if isinstance(self.owner, SystemOwner):
            return True
        return self.owner.user_id == user_id

    def edited_by(
        self,
        user_id: str,
        brand: str | None = None,
        name: str | None = None,
    ) -> "ShuttlecockType":
        """
        Return a copy with brand/name changed by ``user_id``.

        Editing a system-owned type transfers ownership to the editor.
        """
        updates: dict = {}
        if brand is not None:
            updates["brand"] = brand
        if name is not None:
            updates["name"] = name
        if updates and isinstance(self.owner, SystemOwner):
            updates["owner"] = UserOwner(user_id=user_id)
        return self.model_copy(update=updates)


class RestockBatch(BaseModel):
    """
    One purchase of shuttlecocks at a fixed unit price.

    Quantity and price are stored exactly as persisted; range checks
    happen when a batch enters the ledger, not here.
    """

    id: int | None = None
    group_id: str
    type_id: str
    quantity: int
    unit_price: int = 0
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def total_price(self) -> int:
        return self.quantity * self.unit_price

    @property
    def sort_key(self) -> tuple[datetime, int]:
        # Records without an id sort after persisted ones at the same instant
        return (self.created_at, self.id if self.id is not None else 2**63)


class PickupEvent(BaseModel):
    """A member taking shuttlecocks out of stock."""

    id: int | None = None
    group_id: str
    type_id: str
    picker_name: str
    quantity: int
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def sort_key(self) -> tuple[datetime, int]:
        return (self.created_at, self.id if self.id is not None else 2**63)


class StockLevel(BaseModel):
    """Non-FIFO stock arithmetic for one type."""

    type_id: str
    total_restocked: int = 0
    total_picked: int = 0

    @property
    def current_stock(self) -> int:
        return self.total_restocked - self.total_picked
