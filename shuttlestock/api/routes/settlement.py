"""Settlement endpoint."""

from fastapi import APIRouter, Depends

from shuttlestock.api.dependencies import get_current_group_id, get_settlement_use_case
from shuttlestock.application.dto.requests import SettlementRequest
from shuttlestock.application.dto.responses import ErrorResponse, SettlementResponse
from shuttlestock.application.use_cases import ComputeSettlementUseCase

router = APIRouter(prefix="/api/settlement", tags=["settlement"])


@router.post(
    "/calculate",
    response_model=SettlementResponse,
    responses={422: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def calculate_settlement(
    request: SettlementRequest,
    group_id: str = Depends(get_current_group_id),
    use_case: ComputeSettlementUseCase = Depends(get_settlement_use_case),
) -> SettlementResponse:
    """
    FIFO cost of the tubes picked up inside the window.

    The whole pickup history is replayed; the window only decides which
    pickups count towards the totals.
    """
    result = await use_case.execute(group_id, request)
    return use_case.to_response(result)
