"""Core domain entities."""

from shuttlestock.core.entities.inventory import (
    Owner,
    PickupEvent,
    RestockBatch,
    ShuttlecockType,
    StockLevel,
    SystemOwner,
    UserOwner,
    utc_now,
)
from shuttlestock.core.entities.settlement import (
    BatchDraw,
    ConsumptionAllocation,
    DepletionWarning,
    SettlementReport,
    SettlementWindow,
    SkippedType,
    TypeSettlementDetail,
    UsedBatch,
)

__all__ = [
    # Inventory entities
    "Owner",
    "SystemOwner",
    "UserOwner",
    "ShuttlecockType",
    "RestockBatch",
    "PickupEvent",
    "StockLevel",
    "utc_now",
    # Settlement entities
    "BatchDraw",
    "ConsumptionAllocation",
    "DepletionWarning",
    "UsedBatch",
    "TypeSettlementDetail",
    "SkippedType",
    "SettlementWindow",
    "SettlementReport",
]
