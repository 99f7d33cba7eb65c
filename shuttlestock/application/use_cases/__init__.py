"""Application use cases."""

from shuttlestock.application.use_cases.compute_settlement import (
    ComputeSettlementUseCase,
    SettlementResult,
)
from shuttlestock.application.use_cases.delete_records import DeleteRecordsUseCase
from shuttlestock.application.use_cases.inventory_summary import (
    GetInventorySummaryUseCase,
    InventorySummaryRow,
)
from shuttlestock.application.use_cases.list_history import ListHistoryUseCase
from shuttlestock.application.use_cases.manage_types import ManageTypesUseCase
from shuttlestock.application.use_cases.record_pickup import (
    PickupLocks,
    RecordPickupResult,
    RecordPickupUseCase,
    get_pickup_locks,
)
from shuttlestock.application.use_cases.record_restock import (
    RecordRestockResult,
    RecordRestockUseCase,
)

__all__ = [
    "RecordRestockUseCase",
    "RecordRestockResult",
    "RecordPickupUseCase",
    "RecordPickupResult",
    "PickupLocks",
    "get_pickup_locks",
    "ComputeSettlementUseCase",
    "SettlementResult",
    "GetInventorySummaryUseCase",
    "InventorySummaryRow",
    "ListHistoryUseCase",
    "ManageTypesUseCase",
    "DeleteRecordsUseCase",
]
