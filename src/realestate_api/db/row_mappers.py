"""Shared row-mapping utilities for database modules."""

from __future__ import annotations

from datetime import UTC, date, datetime

import aiosqlite

from realestate_api.models import Owner, Property, PropertyImage, PropertyTrace, RecordStatus
from realestate_api.utils.money import from_cents


def to_db_timestamp(value: datetime) -> str:
    """Serialize a datetime as a sortable UTC ISO-8601 string."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def from_db_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def row_to_owner(row: aiosqlite.Row) -> Owner:
    """Convert a row from the owners table to an Owner."""
    return Owner(
        id=row["id"],
        name=row["name"],
        address=row["address"],
        photo=row["photo"],
        birthday=date.fromisoformat(row["birthday"]) if row["birthday"] else None,
        created_at=from_db_timestamp(row["created_at"]),
        updated_at=from_db_timestamp(row["updated_at"]),
    )


def row_to_property(row: aiosqlite.Row) -> Property:
    """Convert a row from the properties table to a Property."""
    return Property(
        id=row["id"],
        name=row["name"],
        address=row["address"],
        price=from_cents(row["price_cents"]),
        code_internal=row["code_internal"],
        year=row["year"],
        owner_id=row["owner_id"],
        status=RecordStatus(row["status"]),
        created_at=from_db_timestamp(row["created_at"]),
        updated_at=from_db_timestamp(row["updated_at"]),
    )


def row_to_image(row: aiosqlite.Row) -> PropertyImage:
    """Convert a row from the property_images table to a PropertyImage."""
    return PropertyImage(
        id=row["id"],
        property_id=row["property_id"],
        file=row["file"],
        status=RecordStatus(row["status"]),
        created_at=from_db_timestamp(row["created_at"]),
    )


def row_to_trace(row: aiosqlite.Row) -> PropertyTrace:
    """Convert a row from the property_traces table to a PropertyTrace."""
    return PropertyTrace(
        id=row["id"],
        property_id=row["property_id"],
        date_sale=from_db_timestamp(row["date_sale"]),
        name=row["name"],
        value=from_cents(row["value_cents"]),
        tax=from_cents(row["tax_cents"]),
        created_at=from_db_timestamp(row["created_at"]),
    )
