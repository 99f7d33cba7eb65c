"""Inventory endpoints: restocks, stock levels, history and types."""

from fastapi import APIRouter, Depends, Query, status

from shuttlestock.api.dependencies import (
    get_current_group_id,
    get_current_user_id,
    get_delete_records_use_case,
    get_history_use_case,
    get_inventory_summary_use_case,
    get_manage_types_use_case,
    get_record_restock_use_case,
)
from shuttlestock.application.dto.requests import (
    CreateTypeRequest,
    RestockRequest,
    UpdateTypeRequest,
)
from shuttlestock.application.dto.responses import (
    DeleteResponse,
    ErrorResponse,
    InventorySummaryResponse,
    RestockHistoryEntryResponse,
    RestockResponse,
    StockLevelResponse,
    TypeResponse,
)
from shuttlestock.application.use_cases import (
    DeleteRecordsUseCase,
    GetInventorySummaryUseCase,
    ListHistoryUseCase,
    ManageTypesUseCase,
    RecordRestockUseCase,
)

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("", response_model=InventorySummaryResponse)
async def get_inventory(
    all: bool = Query(default=False, description="Include hidden types"),
    group_id: str = Depends(get_current_group_id),
    use_case: GetInventorySummaryUseCase = Depends(get_inventory_summary_use_case),
) -> InventorySummaryResponse:
    """Current stock per type (restocked minus picked)."""
    rows = await use_case.execute(group_id, include_hidden=all)
    return use_case.to_response(rows)


@router.post(
    "/restock",
    response_model=RestockResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def record_restock(
    request: RestockRequest,
    group_id: str = Depends(get_current_group_id),
    use_case: RecordRestockUseCase = Depends(get_record_restock_use_case),
) -> RestockResponse:
    """Record a purchase of tubes at a fixed unit price."""
    result = await use_case.execute(group_id, request)
    return use_case.to_response(result)


@router.delete(
    "/restock/{restock_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_restock(
    restock_id: int,
    group_id: str = Depends(get_current_group_id),
    use_case: DeleteRecordsUseCase = Depends(get_delete_records_use_case),
) -> DeleteResponse:
    """Delete a restock batch nothing has been drawn from yet."""
    return await use_case.delete_restock(group_id, restock_id)


@router.get("/history", response_model=list[RestockHistoryEntryResponse])
async def restock_history(
    start_date: str | None = None,
    end_date: str | None = None,
    group_id: str = Depends(get_current_group_id),
    use_case: ListHistoryUseCase = Depends(get_history_use_case),
) -> list[RestockHistoryEntryResponse]:
    """Restock records, newest first."""
    return await use_case.restocks(group_id, start_date, end_date)


@router.get("/types", response_model=list[TypeResponse])
async def list_types(
    all: bool = Query(default=False, description="Include hidden types"),
    group_id: str = Depends(get_current_group_id),
    use_case: ManageTypesUseCase = Depends(get_manage_types_use_case),
) -> list[TypeResponse]:
    """Shuttlecock types of the group."""
    types = await use_case.list_types(group_id, include_hidden=all)
    return [use_case.to_response(t) for t in types]


@router.post(
    "/types",
    response_model=TypeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_type(
    request: CreateTypeRequest,
    user_id: str = Depends(get_current_user_id),
    group_id: str = Depends(get_current_group_id),
    use_case: ManageTypesUseCase = Depends(get_manage_types_use_case),
) -> TypeResponse:
    """Add a type owned by the current user."""
    shuttle_type = await use_case.create_type(group_id, user_id, request)
    return use_case.to_response(shuttle_type)


@router.patch(
    "/types/{type_id}",
    response_model=TypeResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_type(
    type_id: str,
    request: UpdateTypeRequest,
    user_id: str = Depends(get_current_user_id),
    group_id: str = Depends(get_current_group_id),
    use_case: ManageTypesUseCase = Depends(get_manage_types_use_case),
) -> TypeResponse:
    """Rename a type or toggle its visibility."""
    shuttle_type = await use_case.update_type(group_id, user_id, type_id, request)
    return use_case.to_response(shuttle_type)


@router.get(
    "/{type_id}/stock",
    response_model=StockLevelResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_current_stock(
    type_id: str,
    group_id: str = Depends(get_current_group_id),
    use_case: GetInventorySummaryUseCase = Depends(get_inventory_summary_use_case),
) -> StockLevelResponse:
    """Current stock of one type."""
    level = await use_case.current_stock(group_id, type_id)
    return use_case.stock_response(level)
