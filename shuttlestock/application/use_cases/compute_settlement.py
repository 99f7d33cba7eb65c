"""Compute Settlement Use Case: FIFO cost report over an optional window."""

from dataclasses import dataclass, field

from shuttlestock.application.dto.requests import SettlementRequest
from shuttlestock.application.dto.responses import (
    DepletionWarningResponse,
    SettlementDetailResponse,
    SettlementPeriodResponse,
    SettlementResponse,
    SkippedTypeResponse,
    UsedBatchResponse,
)
from shuttlestock.config import get_logger
from shuttlestock.core.entities.inventory import ShuttlecockType
from shuttlestock.core.entities.settlement import SettlementReport
from shuttlestock.core.interfaces.inventory_store import IInventoryStore
from shuttlestock.core.interfaces.type_store import ITypeStore
from shuttlestock.core.services.settlement_calculator import SettlementCalculator

logger = get_logger(__name__)


@dataclass
class SettlementResult:
    """Settlement report plus the type labels used to render it."""

    report: SettlementReport
    types: dict[str, ShuttlecockType] = field(default_factory=dict)


class ComputeSettlementUseCase:
    """
    Compute a settlement for the caller's group.

    Reads only. Running it twice on unchanged data returns the same report.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        type_store: ITypeStore | None = None,
    ):
        self._inventory_store = inventory_store
        self._type_store = type_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from shuttlestock.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_type_store(self) -> ITypeStore:
        if self._type_store is None:
            from shuttlestock.infrastructure.storage.sqlite import get_type_store

            self._type_store = await get_type_store()
        return self._type_store

    async def execute(self, group_id: str, request: SettlementRequest) -> SettlementResult:
        """Execute compute settlement use case."""
        window = request.to_window()
        logger.info(
            "settlement_started",
            group_id=group_id,
            start=window.start.isoformat() if window.start else None,
            end=window.end.isoformat() if window.end else None,
            picker_name=window.picker_name,
            type_id=window.type_id,
        )

        calculator = SettlementCalculator(await self._get_inventory_store())
        report = await calculator.compute(group_id, window)

        # Labels only; hidden types still settle
        type_store = await self._get_type_store()
        types = {
            t.id: t
            for t in await type_store.list_types(group_id, include_hidden=True)
            if t.id is not None
        }

        return SettlementResult(report=report, types=types)

    def to_response(self, result: SettlementResult) -> SettlementResponse:
        """Convert result to API response."""
        report = result.report
        details = []
        for detail in report.details:
            shuttle_type = result.types.get(detail.type_id)
            details.append(
                SettlementDetailResponse(
                    type_id=detail.type_id,
                    brand=shuttle_type.brand if shuttle_type else None,
                    name=shuttle_type.name if shuttle_type else None,
                    total_quantity=detail.total_quantity,
                    total_cost=detail.total_cost,
                    average_cost=round(detail.average_cost, 2),
                    used_batches=[
                        UsedBatchResponse(price=b.price, quantity=b.quantity)
                        for b in detail.used_batches
                    ],
                )
            )

        return SettlementResponse(
            period=SettlementPeriodResponse(
                start=report.window.start,
                end=report.window.end,
            ),
            grand_total_cost=report.grand_total_cost,
            details=details,
            warnings=[
                DepletionWarningResponse(
                    type_id=w.type_id,
                    pickup_id=w.pickup_id,
                    picker_name=w.picker_name,
                    created_at=w.created_at,
                    requested=w.requested,
                    consumed=w.consumed,
                    shortfall=w.shortfall,
                )
                for w in report.warnings
            ],
            skipped_types=[
                SkippedTypeResponse(type_id=s.type_id, reason=s.reason)
                for s in report.skipped_types
            ],
        )
