"""Pydantic domain models for properties, owners, images and traces."""

from datetime import UTC, date, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from realestate_api.utils.money import MAX_AMOUNT
from realestate_api.utils.object_id import new_object_id

MIN_YEAR: Final = 1800
MAX_YEAR: Final = 2100


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RecordStatus(StrEnum):
    """Soft-delete marker shared by properties and images."""

    ACTIVE = "active"
    DISABLED = "disabled"

    @classmethod
    def from_enabled(cls, enabled: bool) -> "RecordStatus":
        return cls.ACTIVE if enabled else cls.DISABLED


class Owner(BaseModel):
    """A person or entity referenced by properties."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_object_id)
    name: str
    address: str
    photo: str = ""
    birthday: date | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class Property(BaseModel):
    """A real-estate listing.

    Owner, images and traces are never stored on the property itself; read
    paths attach them through ``AggregatedProperty``.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_object_id)
    name: str
    address: str
    price: Decimal = Field(ge=0, le=MAX_AMOUNT)
    code_internal: str
    year: int
    owner_id: str = ""
    status: RecordStatus = RecordStatus.ACTIVE
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def enabled(self) -> bool:
        return self.status is RecordStatus.ACTIVE


class PropertyImage(BaseModel):
    """An image attached to a property."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_object_id)
    property_id: str
    file: str
    status: RecordStatus = RecordStatus.ACTIVE
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def enabled(self) -> bool:
        return self.status is RecordStatus.ACTIVE


class PropertyTrace(BaseModel):
    """Append-only history entry (sale, appraisal, tax assessment)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_object_id)
    property_id: str
    date_sale: datetime
    name: str
    value: Decimal = Field(ge=0, le=MAX_AMOUNT)
    tax: Decimal = Field(ge=0, le=MAX_AMOUNT)
    created_at: datetime = Field(default_factory=_utcnow)


class PropertyFilter(BaseModel):
    """Listing criteria. Every field left as None adds no constraint.

    ``enabled`` defaults to True so that soft-deleted listings stay hidden
    unless a caller asks for them explicitly.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    address: str | None = None
    price_min: Decimal | None = Field(default=None, ge=0, le=MAX_AMOUNT)
    price_max: Decimal | None = Field(default=None, ge=0, le=MAX_AMOUNT)
    owner_id: str | None = None
    year: int | None = Field(default=None, ge=MIN_YEAR, le=MAX_YEAR)
    enabled: bool | None = True

    @field_validator("name", "address", "owner_id", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> str | None:
        if v is None:
            return None
        s = str(v).strip()
        return s if s else None


class AggregatedProperty(BaseModel):
    """A property joined in memory with its owner, images and traces."""

    model_config = ConfigDict(frozen=True)

    listing: Property
    owner: Owner | None = None
    images: tuple[PropertyImage, ...] = ()
    traces: tuple[PropertyTrace, ...] = ()

    @property
    def main_image(self) -> PropertyImage | None:
        """Earliest-created enabled image, or None."""
        enabled = [img for img in self.images if img.enabled]
        if not enabled:
            return None
        return min(enabled, key=lambda img: img.created_at)
