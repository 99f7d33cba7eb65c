"""Manage Types Use Case: create, list, edit and hide shuttlecock types."""

from shuttlestock.application.dto.requests import CreateTypeRequest, UpdateTypeRequest
from shuttlestock.application.dto.responses import TypeResponse
from shuttlestock.config import get_logger
from shuttlestock.core.entities.inventory import ShuttlecockType, UserOwner, utc_now
from shuttlestock.core.exceptions import OwnershipError, TypeNotFoundError
from shuttlestock.core.interfaces.type_store import ITypeStore

logger = get_logger(__name__)


class ManageTypesUseCase:
    """
    Type catalogue of a group.

    Editing brand or name of a system-owned type hands it to the editor.
    A user-owned type can only be renamed by its owner. Visibility can be
    toggled by any member and never changes ownership.
    """

    def __init__(self, type_store: ITypeStore | None = None):
        self._type_store = type_store

    async def _get_type_store(self) -> ITypeStore:
        if self._type_store is None:
            from shuttlestock.infrastructure.storage.sqlite import get_type_store

            self._type_store = await get_type_store()
        return self._type_store

    async def list_types(
        self, group_id: str, include_hidden: bool = False
    ) -> list[ShuttlecockType]:
        store = await self._get_type_store()
        return await store.list_types(group_id, include_hidden=include_hidden)

    async def create_type(
        self, group_id: str, user_id: str, request: CreateTypeRequest
    ) -> ShuttlecockType:
        store = await self._get_type_store()
        return await store.create_type(
            ShuttlecockType(
                group_id=group_id,
                brand=request.brand.strip(),
                name=request.name.strip(),
                owner=UserOwner(user_id=user_id),
                created_at=utc_now(),
            )
        )

    async def update_type(
        self,
        group_id: str,
        user_id: str,
        type_id: str,
        request: UpdateTypeRequest,
    ) -> ShuttlecockType:
        store = await self._get_type_store()
        current = await store.get_type(group_id, type_id)
        if current is None:
            raise TypeNotFoundError(type_id)

        updated = current
        if request.brand is not None or request.name is not None:
            if not current.can_edit(user_id):
                raise OwnershipError(type_id, current.owner.user_id)  # type: ignore[union-attr]
            updated = current.edited_by(
                user_id,
                brand=request.brand.strip() if request.brand else None,
                name=request.name.strip() if request.name else None,
            )

        if request.is_active is not None:
            updated = updated.model_copy(update={"is_active": request.is_active})

        if updated == current:
            return current

        if updated.owner != current.owner:
            logger.info("type_claimed", type_id=type_id, user_id=user_id)
        return await store.update_type(updated)

    @staticmethod
    def to_response(shuttle_type: ShuttlecockType) -> TypeResponse:
        return TypeResponse(
            id=shuttle_type.id,  # type: ignore[arg-type]
            brand=shuttle_type.brand,
            name=shuttle_type.name,
            is_active=shuttle_type.is_active,
            owner=shuttle_type.owner.kind,
            owner_user_id=getattr(shuttle_type.owner, "user_id", None),
            created_at=shuttle_type.created_at,
        )
