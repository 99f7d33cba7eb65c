"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import UTC, date, datetime, time

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from shuttlestock.core.entities.settlement import SettlementWindow


def parse_bound(value: str, end_of_day: bool = False) -> datetime:
    """
    Parse an ISO date or datetime into a naive UTC datetime.

    A bare date covers the whole day: midnight for a start bound,
    23:59:59.999999 for an end bound.
    """
    value = value.strip()
    if len(value) == 10:
        day = date.fromisoformat(value)
        return datetime.combine(day, time.max if end_of_day else time.min)

    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


class RestockRequest(BaseModel):
    """Request to record a restock batch."""

    model_config = ConfigDict(extra="forbid")

    type_id: str = Field(..., min_length=1, description="Shuttlecock type ID")
    quantity: int = Field(..., ge=1, description="Tubes purchased")
    unit_price: int = Field(default=0, ge=0, description="Price per tube")


class PickupRequest(BaseModel):
    """Request to record a pickup."""

    model_config = ConfigDict(extra="forbid")

    picker_name: str = Field(..., min_length=1, max_length=100, description="Who took the tubes")
    quantity: int = Field(..., ge=1, description="Tubes taken")
    type_id: str = Field(..., min_length=1, description="Shuttlecock type ID")

    @field_validator("picker_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("picker_name must not be blank")
        return v


class SettlementRequest(BaseModel):
    """Request for a settlement over an optional window."""

    model_config = ConfigDict(extra="forbid")

    start_date: str | None = Field(
        default=None,
        description="Inclusive start, ISO date or datetime",
    )
    end_date: str | None = Field(
        default=None,
        description="Inclusive end, ISO date or datetime (a date covers the whole day)",
    )
    picker_name: str | None = Field(
        default=None,
        description="Only pickups whose picker name contains this text (case-sensitive)",
    )
    type_id: str | None = Field(default=None, description="Restrict to one type")

    @field_validator("start_date", "end_date")
    @classmethod
    def validate_iso(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        parse_bound(v)
        return v.strip()

    @field_validator("picker_name", "type_id")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def check_order(self) -> "SettlementRequest":
        if self.start_date and self.end_date:
            start = parse_bound(self.start_date)
            end = parse_bound(self.end_date, end_of_day=True)
            if end < start:
                raise ValueError("end_date must not be before start_date")
        return self

    def to_window(self) -> SettlementWindow:
        return SettlementWindow(
            start=parse_bound(self.start_date) if self.start_date else None,
            end=parse_bound(self.end_date, end_of_day=True) if self.end_date else None,
            picker_name=self.picker_name,
            type_id=self.type_id,
        )


class CreateTypeRequest(BaseModel):
    """Request to create a shuttlecock type."""

    model_config = ConfigDict(extra="forbid")

    brand: str = Field(..., min_length=1, max_length=100, description="Brand")
    name: str = Field(..., min_length=1, max_length=100, description="Model name")


class UpdateTypeRequest(BaseModel):
    """Request to edit a type or toggle its visibility."""

    model_config = ConfigDict(extra="forbid")

    brand: str | None = Field(default=None, min_length=1, max_length=100)
    name: str | None = Field(default=None, min_length=1, max_length=100)
    is_active: bool | None = Field(default=None, description="Show or hide the type")
