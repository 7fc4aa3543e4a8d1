"""Transport models: response envelope, DTOs and request bodies.

JSON keys are camelCase on the wire; Python attributes stay snake_case.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Generic, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from realestate_api.models import MAX_YEAR, MIN_YEAR
from realestate_api.pagination import has_next_page, has_previous_page, total_pages
from realestate_api.utils.money import MAX_AMOUNT
from realestate_api.utils.object_id import is_object_id

T = TypeVar("T")

# Decimal in the domain, JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[T]):
    """Uniform envelope around every API response."""

    success: bool
    message: str = ""
    data: T | None = None
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def ok(cls, data: T, message: str = "Success") -> ApiResponse[T]:
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, errors: list[str] | None = None) -> ApiResponse[T]:
        return cls(success=False, message=message, errors=errors or [])


class PagedResult(CamelModel, Generic[T]):
    """One page of items plus the counts needed to navigate the rest."""

    items: list[T]
    total: int
    page: int
    page_size: int

    @computed_field(alias="totalPages")  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.page_size)

    @computed_field(alias="hasPreviousPage")  # type: ignore[prop-decorator]
    @property
    def has_previous_page(self) -> bool:
        return has_previous_page(self.page)

    @computed_field(alias="hasNextPage")  # type: ignore[prop-decorator]
    @property
    def has_next_page(self) -> bool:
        return has_next_page(self.page, self.total, self.page_size)


class OwnerDto(CamelModel):
    id: str
    name: str
    address: str
    photo: str
    birthday: date | None = None


class PropertyImageDto(CamelModel):
    id: str
    file: str
    enabled: bool


class PropertyTraceDto(CamelModel):
    id: str
    date_sale: datetime
    name: str
    value: Money
    tax: Money


class PropertyDto(CamelModel):
    id: str
    name: str
    address: str
    price: Money
    code_internal: str
    year: int
    owner_id: str
    enabled: bool
    created_at: datetime
    updated_at: datetime
    owner: OwnerDto | None = None
    # file of the earliest enabled image
    image_url: str | None = None
    images: list[PropertyImageDto] = Field(default_factory=list)


class PropertyDetailDto(PropertyDto):
    traces: list[PropertyTraceDto] = Field(default_factory=list)


class CreatePropertyRequest(CamelModel):
    """Body of ``POST /api/properties``."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    name: str = Field(min_length=1, max_length=200)
    address: str = Field(min_length=1, max_length=500)
    price: Decimal = Field(ge=0, le=MAX_AMOUNT)
    code_internal: str = Field(min_length=1, max_length=50)
    year: int = Field(ge=MIN_YEAR, le=MAX_YEAR)
    owner_id: str

    @field_validator("owner_id")
    @classmethod
    def validate_owner_id(cls, v: str) -> str:
        if not is_object_id(v):
            raise ValueError("OwnerId must be a valid ObjectId")
        return v.lower()


class UpdatePropertyRequest(CreatePropertyRequest):
    """Body of ``PUT /api/properties/{id}``; replaces every mutable field."""

    enabled: bool = True
