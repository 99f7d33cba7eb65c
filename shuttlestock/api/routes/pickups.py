"""Pickup endpoints."""

from fastapi import APIRouter, Depends, status

from shuttlestock.api.dependencies import (
    get_current_group_id,
    get_delete_records_use_case,
    get_history_use_case,
    get_record_pickup_use_case,
)
from shuttlestock.application.dto.requests import PickupRequest
from shuttlestock.application.dto.responses import (
    DeleteResponse,
    ErrorResponse,
    PickupResponse,
    RecordPickupResponse,
)
from shuttlestock.application.use_cases import (
    DeleteRecordsUseCase,
    ListHistoryUseCase,
    RecordPickupUseCase,
)

router = APIRouter(prefix="/api/pickups", tags=["pickups"])


@router.get("", response_model=list[PickupResponse])
async def list_pickups(
    group_id: str = Depends(get_current_group_id),
    use_case: ListHistoryUseCase = Depends(get_history_use_case),
) -> list[PickupResponse]:
    """Recent pickups, newest first."""
    return await use_case.pickups(group_id)


@router.post(
    "",
    response_model=RecordPickupResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def record_pickup(
    request: PickupRequest,
    group_id: str = Depends(get_current_group_id),
    use_case: RecordPickupUseCase = Depends(get_record_pickup_use_case),
) -> RecordPickupResponse:
    """Take tubes out of stock."""
    result = await use_case.execute(group_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{pickup_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_pickup(
    pickup_id: int,
    group_id: str = Depends(get_current_group_id),
    use_case: DeleteRecordsUseCase = Depends(get_delete_records_use_case),
) -> DeleteResponse:
    """Delete a pickup record."""
    return await use_case.delete_pickup(group_id, pickup_id)
