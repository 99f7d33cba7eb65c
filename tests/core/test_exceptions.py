"""Unit tests for domain exceptions."""

import pytest

from shuttlestock.core.exceptions import (
    DatabaseError,
    GroupNotAssignedError,
    IdentityError,
    InsufficientStockError,
    InvalidInputError,
    InventoryError,
    NotFoundError,
    OwnershipError,
    PickupNotFoundError,
    QueryError,
    RecordInUseError,
    RestockNotFoundError,
    ShuttleStockError,
    StorageError,
    TypeInactiveError,
    TypeNotFoundError,
    UnauthorizedError,
    ValidationError,
)


class TestShuttleStockError:
    def test_basic_initialization(self):
        error = ShuttleStockError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.code == "ShuttleStockError"
        assert error.details == {}

    def test_to_dict(self):
        error = ShuttleStockError("Boom", code="BOOM", details={"k": 1})
        assert error.to_dict() == {"error": "BOOM", "message": "Boom", "details": {"k": 1}}


class TestHierarchy:
    @pytest.mark.parametrize(
        ("error", "base"),
        [
            (QueryError("op", "e"), StorageError),
            (DatabaseError("op", "e"), StorageError),
            (TypeNotFoundError("t"), NotFoundError),
            (RestockNotFoundError(1), NotFoundError),
            (PickupNotFoundError(1), NotFoundError),
            (InvalidInputError("bad"), InventoryError),
            (InsufficientStockError("t", 5, 2), InventoryError),
            (TypeInactiveError("t"), InventoryError),
            (RecordInUseError("restock", 1, 3), InventoryError),
            (OwnershipError("t", "u"), InventoryError),
            (UnauthorizedError("X-User-Id"), IdentityError),
            (GroupNotAssignedError("u"), IdentityError),
            (ValidationError("f", "m"), ShuttleStockError),
        ],
    )
    def test_subclassing(self, error, base):
        assert isinstance(error, base)
        assert isinstance(error, ShuttleStockError)


class TestDetails:
    def test_query_error(self):
        error = QueryError("list_pickup_events", "database is locked")
        assert error.code == "QUERY_ERROR"
        assert error.details == {"operation": "list_pickup_events", "error": "database is locked"}

    def test_invalid_input(self):
        error = InvalidInputError("quantity must be at least 1", type_id="t", record_id=4)
        assert error.code == "INVALID_INPUT"
        assert error.details["record_id"] == 4
        assert "quantity" in error.message

    def test_insufficient_stock(self):
        error = InsufficientStockError("t", requested=5, available=2)
        assert error.details == {"type_id": "t", "requested": 5, "available": 2}

    def test_record_in_use(self):
        error = RecordInUseError("restock", 7, 3)
        assert error.code == "RECORD_IN_USE"
        assert error.details["consumed"] == 3

    def test_validation_error_truncates_value(self):
        error = ValidationError("field", "bad", value="x" * 500)
        assert len(error.details["value"]) == 100
