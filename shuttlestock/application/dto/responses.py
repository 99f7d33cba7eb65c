"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class TypeResponse(BaseModel):
    """Shuttlecock type."""

    id: str
    brand: str
    name: str
    is_active: bool
    owner: str = Field(..., description="'system' or 'user'")
    owner_user_id: str | None = None
    created_at: datetime


class RestockResponse(BaseModel):
    """A recorded restock batch."""

    id: int
    type_id: str
    quantity: int
    unit_price: int
    total_price: int
    created_at: datetime


class RestockHistoryEntryResponse(BaseModel):
    """Restock history row with type labels."""

    id: int
    date: datetime
    type_id: str
    brand: str = "Unknown"
    name: str = "Unknown"
    quantity: int
    unit_price: int
    total_price: int


class PickupResponse(BaseModel):
    """A recorded pickup."""

    id: int
    type_id: str
    picker_name: str
    quantity: int
    created_at: datetime
    brand: str | None = None
    name: str | None = None


class StockLevelResponse(BaseModel):
    """Current stock for one type."""

    type_id: str
    total_restocked: int
    total_picked: int
    current_stock: int


class RecordPickupResponse(BaseModel):
    """Pickup plus the stock left afterwards."""

    pickup: PickupResponse
    stock: StockLevelResponse


class InventorySummaryItemResponse(BaseModel):
    """Stock summary row for one type."""

    type_id: str
    brand: str
    name: str
    is_active: bool
    total_restocked: int
    total_picked: int
    current_stock: int


class InventorySummaryResponse(BaseModel):
    """Stock summary for a group."""

    items: list[InventorySummaryItemResponse]
    total: int


class UsedBatchResponse(BaseModel):
    """Quantity drawn at one unit price."""

    price: int
    quantity: int


class SettlementDetailResponse(BaseModel):
    """Settlement totals for one type."""

    type_id: str
    brand: str | None = None
    name: str | None = None
    total_quantity: int
    total_cost: int
    average_cost: float
    used_batches: list[UsedBatchResponse]


class DepletionWarningResponse(BaseModel):
    """Pickup that outran recorded stock during replay."""

    type_id: str
    pickup_id: int | None
    picker_name: str
    created_at: datetime
    requested: int
    consumed: int
    shortfall: int


class SkippedTypeResponse(BaseModel):
    """Type left out because its records could not be replayed."""

    type_id: str
    reason: str


class SettlementPeriodResponse(BaseModel):
    """Resolved window bounds."""

    start: datetime | None = None
    end: datetime | None = None


class SettlementResponse(BaseModel):
    """FIFO settlement report."""

    period: SettlementPeriodResponse
    grand_total_cost: int
    details: list[SettlementDetailResponse]
    warnings: list[DepletionWarningResponse] = Field(default_factory=list)
    skipped_types: list[SkippedTypeResponse] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    """Deletion acknowledgement."""

    id: int
    message: str


class ProviderHealthResponse(BaseModel):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. TYPE_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
