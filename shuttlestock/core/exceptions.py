"""
Domain exceptions for the shuttlecock inventory service.

Every error carries a machine-readable code and a details dict so the
API layer can render it without knowing the concrete type.
"""

from typing import Any


class ShuttleStockError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(ShuttleStockError):
    """Base exception for storage operations."""

    pass


class QueryError(StorageError):
    """Event store unreachable or returned rows that cannot be decoded."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Event store query failed during {operation}: {error}",
            code="QUERY_ERROR",
            details={"operation": operation, "error": error},
        )


class DatabaseError(StorageError):
    """Database write failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Lookup Exceptions
class NotFoundError(ShuttleStockError):
    """Base exception for entities missing from the caller's group."""

    pass


class TypeNotFoundError(NotFoundError):
    """Shuttlecock type not found."""

    def __init__(self, type_id: str):
        super().__init__(
            f"Shuttlecock type not found: {type_id}",
            code="TYPE_NOT_FOUND",
            details={"type_id": type_id},
        )


class RestockNotFoundError(NotFoundError):
    """Restock record not found."""

    def __init__(self, restock_id: int):
        super().__init__(
            f"Restock record not found: {restock_id}",
            code="RESTOCK_NOT_FOUND",
            details={"restock_id": restock_id},
        )


class PickupNotFoundError(NotFoundError):
    """Pickup record not found."""

    def __init__(self, pickup_id: int):
        super().__init__(
            f"Pickup record not found: {pickup_id}",
            code="PICKUP_NOT_FOUND",
            details={"pickup_id": pickup_id},
        )


# Inventory Exceptions
class InventoryError(ShuttleStockError):
    """Base exception for inventory rule violations."""

    pass


class InvalidInputError(InventoryError):
    """Malformed batch or pickup data met while replaying a type."""

    def __init__(self, reason: str, type_id: str | None = None, record_id: Any = None):
        super().__init__(
            f"Invalid inventory data: {reason}",
            code="INVALID_INPUT",
            details={"reason": reason, "type_id": type_id, "record_id": record_id},
        )


class InsufficientStockError(InventoryError):
    """Requested pickup quantity exceeds current stock."""

    def __init__(self, type_id: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for {type_id}: requested {requested}, only {available} left",
            code="INSUFFICIENT_STOCK",
            details={
                "type_id": type_id,
                "requested": requested,
                "available": available,
            },
        )


class TypeInactiveError(InventoryError):
    """Type is hidden and cannot take new restocks."""

    def __init__(self, type_id: str):
        super().__init__(
            f"Shuttlecock type is hidden: {type_id}",
            code="TYPE_INACTIVE",
            details={"type_id": type_id},
        )


class RecordInUseError(InventoryError):
    """Record is referenced by downstream consumption."""

    def __init__(self, record: str, record_id: Any, consumed: int):
        super().__init__(
            f"Cannot delete {record} {record_id}: {consumed} unit(s) already consumed",
            code="RECORD_IN_USE",
            details={"record": record, "record_id": record_id, "consumed": consumed},
        )


class OwnershipError(InventoryError):
    """Type is owned by another user."""

    def __init__(self, type_id: str, owner_id: str):
        super().__init__(
            f"Shuttlecock type {type_id} is owned by another user",
            code="TYPE_OWNED_BY_OTHER",
            details={"type_id": type_id, "owner_id": owner_id},
        )


# Identity Exceptions
class IdentityError(ShuttleStockError):
    """Base exception for caller identity resolution."""

    pass


class UnauthorizedError(IdentityError):
    """No user identity on the request."""

    def __init__(self, header: str):
        super().__init__(
            f"Missing user identity header: {header}",
            code="UNAUTHORIZED",
            details={"header": header},
        )


class GroupNotAssignedError(IdentityError):
    """User exists but belongs to no group."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User has no group assigned: {user_id}",
            code="GROUP_NOT_ASSIGNED",
            details={"user_id": user_id},
        )


# Validation Exceptions
class ValidationError(ShuttleStockError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )
