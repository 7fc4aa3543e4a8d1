"""Tests for the response envelope, DTO serialization and request bodies."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from realestate_api.schemas import (
    ApiResponse,
    CreatePropertyRequest,
    PagedResult,
    PropertyDto,
    PropertyTraceDto,
    UpdatePropertyRequest,
)

VALID_OWNER_ID = "507f1f77bcf86cd799439011"


def _valid_body(**overrides: object) -> dict[str, object]:
    body: dict[str, object] = {
        "name": "Cozy Suburban House",
        "address": "789 Maple Street, Austin, TX 78701",
        "price": 450000,
        "codeInternal": "AUS001",
        "year": 2018,
        "ownerId": VALID_OWNER_ID,
    }
    body.update(overrides)
    return body


class TestApiResponse:
    def test_ok_envelope(self) -> None:
        resp = ApiResponse[int].ok(5)
        dumped = resp.model_dump(mode="json", by_alias=True)
        assert dumped == {"success": True, "message": "Success", "data": 5, "errors": []}

    def test_fail_envelope(self) -> None:
        resp = ApiResponse[None].fail("Property not found", ["id: unknown"])
        dumped = resp.model_dump(mode="json", by_alias=True)
        assert dumped["success"] is False
        assert dumped["data"] is None
        assert dumped["errors"] == ["id: unknown"]

    def test_fail_without_errors_has_empty_list(self) -> None:
        assert ApiResponse[None].fail("nope").errors == []


class TestPagedResult:
    def test_camel_case_keys_and_flags(self) -> None:
        page = PagedResult[int](items=[1, 2], total=12, page=2, page_size=5)
        dumped = page.model_dump(mode="json", by_alias=True)
        assert dumped == {
            "items": [1, 2],
            "total": 12,
            "page": 2,
            "pageSize": 5,
            "totalPages": 3,
            "hasPreviousPage": True,
            "hasNextPage": True,
        }

    def test_last_page_has_no_next(self) -> None:
        page = PagedResult[int](items=[1], total=11, page=2, page_size=10)
        assert page.has_next_page is False
        assert page.total_pages == 2


class TestMoneySerialization:
    def test_price_serialized_as_number(self) -> None:
        now = datetime(2024, 1, 1, tzinfo=UTC)
        dto = PropertyDto(
            id=VALID_OWNER_ID,
            name="x",
            address="y",
            price=Decimal("1250.50"),
            code_internal="C",
            year=2000,
            owner_id="",
            enabled=True,
            created_at=now,
            updated_at=now,
        )
        dumped = dto.model_dump(mode="json", by_alias=True)
        assert dumped["price"] == 1250.5
        assert dumped["codeInternal"] == "C"
        assert dumped["imageUrl"] is None
        assert dumped["images"] == []

    def test_decimal_kept_in_python_mode(self) -> None:
        dto = PropertyTraceDto(
            id=VALID_OWNER_ID,
            date_sale=datetime(2024, 1, 1, tzinfo=UTC),
            name="Sale",
            value=Decimal("100.00"),
            tax=Decimal("5.00"),
        )
        assert dto.model_dump()["tax"] == Decimal("5.00")
        assert "dateSale" in dto.model_dump(mode="json", by_alias=True)


class TestCreatePropertyRequest:
    def test_valid_body(self) -> None:
        req = CreatePropertyRequest.model_validate(_valid_body())
        assert req.code_internal == "AUS001"
        assert req.price == Decimal(450000)

    def test_owner_id_lowercased(self) -> None:
        req = CreatePropertyRequest.model_validate(_valid_body(ownerId=VALID_OWNER_ID.upper()))
        assert req.owner_id == VALID_OWNER_ID

    def test_whitespace_stripped(self) -> None:
        req = CreatePropertyRequest.model_validate(_valid_body(name="  Villa  "))
        assert req.name == "Villa"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": ""},
            {"name": "x" * 201},
            {"address": ""},
            {"address": "x" * 501},
            {"price": -1},
            {"codeInternal": ""},
            {"codeInternal": "x" * 51},
            {"year": 1799},
            {"year": 2101},
            {"ownerId": "not-an-id"},
        ],
    )
    def test_invalid_fields_rejected(self, overrides: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            CreatePropertyRequest.model_validate(_valid_body(**overrides))

    def test_invalid_owner_id_message(self) -> None:
        with pytest.raises(ValidationError, match="OwnerId must be a valid ObjectId"):
            CreatePropertyRequest.model_validate(_valid_body(ownerId="123"))


class TestUpdatePropertyRequest:
    def test_enabled_defaults_true(self) -> None:
        assert UpdatePropertyRequest.model_validate(_valid_body()).enabled is True

    def test_enabled_false(self) -> None:
        assert UpdatePropertyRequest.model_validate(_valid_body(enabled=False)).enabled is False
