"""Data transfer objects for the API boundary."""

from shuttlestock.application.dto.requests import (
    CreateTypeRequest,
    PickupRequest,
    RestockRequest,
    SettlementRequest,
    UpdateTypeRequest,
    parse_bound,
)
from shuttlestock.application.dto.responses import (
    DeleteResponse,
    DepletionWarningResponse,
    ErrorResponse,
    HealthResponse,
    InventorySummaryItemResponse,
    InventorySummaryResponse,
    PickupResponse,
    ProviderHealthResponse,
    RecordPickupResponse,
    RestockHistoryEntryResponse,
    RestockResponse,
    SettlementDetailResponse,
    SettlementPeriodResponse,
    SettlementResponse,
    SkippedTypeResponse,
    StockLevelResponse,
    TypeResponse,
    UsedBatchResponse,
)

__all__ = [
    # Requests
    "RestockRequest",
    "PickupRequest",
    "SettlementRequest",
    "CreateTypeRequest",
    "UpdateTypeRequest",
    "parse_bound",
    # Responses
    "TypeResponse",
    "RestockResponse",
    "RestockHistoryEntryResponse",
    "PickupResponse",
    "RecordPickupResponse",
    "StockLevelResponse",
    "InventorySummaryItemResponse",
    "InventorySummaryResponse",
    "UsedBatchResponse",
    "SettlementDetailResponse",
    "DepletionWarningResponse",
    "SkippedTypeResponse",
    "SettlementPeriodResponse",
    "SettlementResponse",
    "DeleteResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
]
