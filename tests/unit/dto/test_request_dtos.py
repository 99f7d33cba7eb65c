"""Tests for request DTO validation."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from shuttlestock.application.dto.requests import (
    PickupRequest,
    RestockRequest,
    SettlementRequest,
    UpdateTypeRequest,
    parse_bound,
)


class TestParseBound:
    def test_date_start_is_midnight(self):
        assert parse_bound("2024-03-01") == datetime(2024, 3, 1, 0, 0, 0)

    def test_date_end_covers_whole_day(self):
        assert parse_bound("2024-03-01", end_of_day=True) == datetime(
            2024, 3, 1, 23, 59, 59, 999999
        )

    def test_datetime_kept_as_is(self):
        assert parse_bound("2024-03-01T10:30:00", end_of_day=True) == datetime(2024, 3, 1, 10, 30)

    def test_aware_datetime_normalized_to_utc(self):
        assert parse_bound("2024-03-01T08:00:00+08:00") == datetime(2024, 3, 1, 0, 0)

    def test_garbage(self):
        with pytest.raises(ValueError):
            parse_bound("yesterday")


class TestRestockRequest:
    def test_valid(self):
        req = RestockRequest(type_id="t1", quantity=12, unit_price=450)
        assert req.unit_price == 450

    def test_price_defaults_to_zero(self):
        assert RestockRequest(type_id="t1", quantity=1).unit_price == 0

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_must_be_positive(self, quantity):
        with pytest.raises(ValidationError):
            RestockRequest(type_id="t1", quantity=quantity)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            RestockRequest(type_id="t1", quantity=1, unit_price=-5)

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            RestockRequest(type_id="t1", quantity=1, password="hunter2")


class TestPickupRequest:
    def test_name_is_stripped(self):
        req = PickupRequest(picker_name="  Alice ", quantity=2, type_id="t1")
        assert req.picker_name == "Alice"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            PickupRequest(picker_name="   ", quantity=2, type_id="t1")

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            PickupRequest(picker_name="Alice", quantity=0, type_id="t1")


class TestSettlementRequest:
    def test_empty_request_is_unbounded(self):
        window = SettlementRequest().to_window()
        assert window.start is None
        assert window.end is None
        assert window.picker_name is None

    def test_blank_values_become_none(self):
        req = SettlementRequest(start_date="", picker_name="  ", type_id="")
        assert req.start_date is None
        assert req.picker_name is None
        assert req.type_id is None

    def test_window_from_dates(self):
        window = SettlementRequest(
            start_date="2024-03-01", end_date="2024-03-31", picker_name="Bob"
        ).to_window()
        assert window.start == datetime(2024, 3, 1)
        assert window.end == datetime(2024, 3, 31, 23, 59, 59, 999999)
        assert window.picker_name == "Bob"

    def test_same_day_window(self):
        window = SettlementRequest(start_date="2024-03-01", end_date="2024-03-01").to_window()
        assert window.start < window.end

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError):
            SettlementRequest(start_date="2024-03-10", end_date="2024-03-01")

    def test_invalid_date_rejected(self):
        with pytest.raises(ValidationError):
            SettlementRequest(start_date="03/01/2024")


class TestUpdateTypeRequest:
    def test_all_optional(self):
        req = UpdateTypeRequest()
        assert req.brand is None and req.name is None and req.is_active is None

    def test_empty_brand_rejected(self):
        with pytest.raises(ValidationError):
            UpdateTypeRequest(brand="")
