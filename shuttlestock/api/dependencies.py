"""
Dependency injection container for FastAPI.

Provides use case instances and the caller's group to route handlers.
"""

from functools import lru_cache

from fastapi import Depends, Request

from shuttlestock.application.use_cases import (
    ComputeSettlementUseCase,
    DeleteRecordsUseCase,
    GetInventorySummaryUseCase,
    ListHistoryUseCase,
    ManageTypesUseCase,
    RecordPickupUseCase,
    RecordRestockUseCase,
)
from shuttlestock.config import Settings, get_logger, get_settings
from shuttlestock.core.exceptions import GroupNotAssignedError, UnauthorizedError
from shuttlestock.core.interfaces.identity_store import IIdentityStore
from shuttlestock.infrastructure.storage.sqlite import get_identity_store

logger = get_logger(__name__)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Identity
async def get_ident_store() -> IIdentityStore:
    """Get identity store."""
    return await get_identity_store()


async def get_current_user_id(request: Request) -> str:
    """User id set by the identity provider in front of the API."""
    header = get_app_settings().api.user_header
    user_id = (request.headers.get(header) or "").strip()
    if not user_id:
        raise UnauthorizedError(header)
    return user_id


async def get_current_group_id(
    user_id: str = Depends(get_current_user_id),
    store: IIdentityStore = Depends(get_ident_store),
) -> str:
    """Group every query of this request is scoped to."""
    group_id = await store.get_group_id_for_user(user_id)
    if group_id is None:
        logger.warning("group_not_assigned", user_id=user_id)
        raise GroupNotAssignedError(user_id)
    return group_id


# Use case dependencies
def get_record_restock_use_case() -> RecordRestockUseCase:
    """Get record restock use case."""
    return RecordRestockUseCase()


def get_record_pickup_use_case() -> RecordPickupUseCase:
    """Get record pickup use case."""
    return RecordPickupUseCase(serialize=get_app_settings().inventory.serialize_pickups)


def get_settlement_use_case() -> ComputeSettlementUseCase:
    """Get compute settlement use case."""
    return ComputeSettlementUseCase()


def get_inventory_summary_use_case() -> GetInventorySummaryUseCase:
    """Get inventory summary use case."""
    return GetInventorySummaryUseCase()


def get_history_use_case() -> ListHistoryUseCase:
    """Get history listing use case."""
    return ListHistoryUseCase(limit=get_app_settings().inventory.history_limit)


def get_manage_types_use_case() -> ManageTypesUseCase:
    """Get type management use case."""
    return ManageTypesUseCase()


def get_delete_records_use_case() -> DeleteRecordsUseCase:
    """Get record deletion use case."""
    return DeleteRecordsUseCase(serialize=get_app_settings().inventory.serialize_pickups)
