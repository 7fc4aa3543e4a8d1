"""Property repository: listing, lookup and replace-style writes."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from datetime import UTC, datetime
from typing import Any

import aiosqlite

from realestate_api.db.filters import build_filter_clauses
from realestate_api.db.row_mappers import row_to_property, to_db_timestamp
from realestate_api.logging import get_logger
from realestate_api.models import Property, PropertyFilter, RecordStatus
from realestate_api.pagination import PageRequest
from realestate_api.utils.money import to_cents
from realestate_api.utils.object_id import is_object_id

logger = get_logger(__name__)


class PropertyRepository:
    """Database operations for the properties table."""

    def __init__(
        self,
        get_connection: Callable[[], Coroutine[Any, Any, aiosqlite.Connection]],
    ) -> None:
        self._get_connection = get_connection

    async def count(self, filters: PropertyFilter) -> int:
        """Count properties matching filters, independent of any page."""
        conn = await self._get_connection()
        where_sql, params = build_filter_clauses(filters)
        cursor = await conn.execute(
            f"SELECT COUNT(*) FROM properties p WHERE {where_sql}",
            params,
        )
        row = await cursor.fetchone()
        return row[0] if row else 0

    async def find_page(self, filters: PropertyFilter, page: PageRequest) -> list[Property]:
        """Fetch one page of matching properties, newest first."""
        conn = await self._get_connection()
        where_sql, params = build_filter_clauses(filters)
        cursor = await conn.execute(
            f"""
            SELECT p.* FROM properties p
            WHERE {where_sql}
            ORDER BY p.created_at DESC, p.rowid DESC
            LIMIT ? OFFSET ?
            """,
            [*params, page.limit, page.offset],
        )
        rows = await cursor.fetchall()
        return [row_to_property(row) for row in rows]

    async def list_page(
        self, filters: PropertyFilter, page: PageRequest
    ) -> tuple[list[Property], int]:
        """Get a page of properties together with the total match count.

        The count and page queries have no ordering dependency and are
        issued concurrently.

        Returns:
            Tuple of (properties, total count).
        """
        items, total = await asyncio.gather(
            self.find_page(filters, page),
            self.count(filters),
        )
        return items, total

    async def get(self, property_id: str, *, include_disabled: bool = False) -> Property | None:
        """Get a property by id.

        Disabled rows are only returned when ``include_disabled`` is set.
        """
        if not is_object_id(property_id):
            return None
        conn = await self._get_connection()
        sql = "SELECT * FROM properties WHERE id = ?"
        params: list[Any] = [property_id.lower()]
        if not include_disabled:
            sql += " AND status = ?"
            params.append(RecordStatus.ACTIVE.value)
        cursor = await conn.execute(sql, params)
        row = await cursor.fetchone()
        return row_to_property(row) if row else None

    async def exists(self, property_id: str) -> bool:
        """Whether an enabled property with this id exists."""
        if not is_object_id(property_id):
            return False
        conn = await self._get_connection()
        cursor = await conn.execute(
            "SELECT 1 FROM properties WHERE id = ? AND status = ? LIMIT 1",
            (property_id.lower(), RecordStatus.ACTIVE.value),
        )
        return await cursor.fetchone() is not None

    async def create(self, prop: Property) -> Property:
        """Insert a property with fresh server-assigned timestamps."""
        now = datetime.now(UTC)
        created = prop.model_copy(update={"created_at": now, "updated_at": now})
        conn = await self._get_connection()
        await conn.execute(
            """
            INSERT INTO properties (
                id, name, address, price_cents, code_internal, year,
                owner_id, status, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                created.id,
                created.name,
                created.address,
                to_cents(created.price),
                created.code_internal,
                created.year,
                created.owner_id,
                created.status.value,
                to_db_timestamp(created.created_at),
                to_db_timestamp(created.updated_at),
            ),
        )
        await conn.commit()
        logger.debug("property_inserted", property_id=created.id)
        return created

    async def replace(self, prop: Property) -> Property:
        """Overwrite every mutable field of an existing property in one statement.

        Raises:
            LookupError: No row has this id.
        """
        updated = prop.model_copy(update={"updated_at": datetime.now(UTC)})
        conn = await self._get_connection()
        cursor = await conn.execute(
            """
            UPDATE properties
            SET name = ?, address = ?, price_cents = ?, code_internal = ?,
                year = ?, owner_id = ?, status = ?, updated_at = ?
            WHERE id = ?
            """,
            (
                updated.name,
                updated.address,
                to_cents(updated.price),
                updated.code_internal,
                updated.year,
                updated.owner_id,
                updated.status.value,
                to_db_timestamp(updated.updated_at),
                updated.id,
            ),
        )
        await conn.commit()
        if cursor.rowcount == 0:
            raise LookupError(f"Property with ID {updated.id} not found")
        return updated

    async def soft_delete(self, property_id: str) -> bool:
        """Flip an enabled property to disabled and touch updated_at.

        Returns:
            True if an enabled row was disabled.
        """
        if not is_object_id(property_id):
            return False
        conn = await self._get_connection()
        cursor = await conn.execute(
            """
            UPDATE properties SET status = ?, updated_at = ?
            WHERE id = ? AND status = ?
            """,
            (
                RecordStatus.DISABLED.value,
                to_db_timestamp(datetime.now(UTC)),
                property_id.lower(),
                RecordStatus.ACTIVE.value,
            ),
        )
        await conn.commit()
        return cursor.rowcount > 0
