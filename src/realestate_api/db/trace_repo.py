"""Property trace repository. Traces are append-only."""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from datetime import UTC, datetime
from typing import Any

import aiosqlite

from realestate_api.db.row_mappers import row_to_trace, to_db_timestamp
from realestate_api.models import PropertyTrace
from realestate_api.utils.money import to_cents
from realestate_api.utils.object_id import is_object_id


class TraceRepository:
    """Database operations for the property_traces table."""

    def __init__(
        self,
        get_connection: Callable[[], Coroutine[Any, Any, aiosqlite.Connection]],
    ) -> None:
        self._get_connection = get_connection

    async def list_for_property(self, property_id: str) -> list[PropertyTrace]:
        """All traces of a property, most recent sale first."""
        if not is_object_id(property_id):
            return []
        conn = await self._get_connection()
        cursor = await conn.execute(
            """
            SELECT * FROM property_traces
            WHERE property_id = ?
            ORDER BY date_sale DESC, rowid DESC
            """,
            (property_id.lower(),),
        )
        rows = await cursor.fetchall()
        return [row_to_trace(row) for row in rows]

    async def get(self, trace_id: str) -> PropertyTrace | None:
        if not is_object_id(trace_id):
            return None
        conn = await self._get_connection()
        cursor = await conn.execute(
            "SELECT * FROM property_traces WHERE id = ?", (trace_id.lower(),)
        )
        row = await cursor.fetchone()
        return row_to_trace(row) if row else None

    async def create(self, trace: PropertyTrace) -> PropertyTrace:
        created = trace.model_copy(update={"created_at": datetime.now(UTC)})
        conn = await self._get_connection()
        await conn.execute(
            """
            INSERT INTO property_traces (
                id, property_id, date_sale, name, value_cents, tax_cents, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                created.id,
                created.property_id.lower(),
                to_db_timestamp(created.date_sale),
                created.name,
                to_cents(created.value),
                to_cents(created.tax),
                to_db_timestamp(created.created_at),
            ),
        )
        await conn.commit()
        return created

    async def delete(self, trace_id: str) -> bool:
        """Physically remove a trace."""
        if not is_object_id(trace_id):
            return False
        conn = await self._get_connection()
        cursor = await conn.execute(
            "DELETE FROM property_traces WHERE id = ?", (trace_id.lower(),)
        )
        await conn.commit()
        return cursor.rowcount > 0

    async def count_all(self) -> int:
        conn = await self._get_connection()
        cursor = await conn.execute("SELECT COUNT(*) FROM property_traces")
        row = await cursor.fetchone()
        return row[0] if row else 0
