"""Property image repository."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Coroutine, Iterable
from datetime import UTC, datetime
from typing import Any

import aiosqlite

from realestate_api.db.row_mappers import row_to_image, to_db_timestamp
from realestate_api.models import PropertyImage, RecordStatus
from realestate_api.utils.object_id import is_object_id


class ImageRepository:
    """Database operations for the property_images table.

    Only enabled images are ever read back; deletion is a soft disable.
    """

    def __init__(
        self,
        get_connection: Callable[[], Coroutine[Any, Any, aiosqlite.Connection]],
    ) -> None:
        self._get_connection = get_connection

    async def list_for_property(self, property_id: str) -> list[PropertyImage]:
        """Enabled images of one property, oldest first."""
        by_property = await self.list_for_properties([property_id])
        return by_property.get(property_id.lower(), [])

    async def list_for_properties(
        self, property_ids: Iterable[str]
    ) -> dict[str, list[PropertyImage]]:
        """Enabled images for many properties in one query, oldest first per property."""
        ids = sorted({pid.lower() for pid in property_ids if is_object_id(pid)})
        if not ids:
            return {}
        conn = await self._get_connection()
        placeholders = ", ".join("?" for _ in ids)
        cursor = await conn.execute(
            f"""
            SELECT * FROM property_images
            WHERE property_id IN ({placeholders}) AND status = ?
            ORDER BY created_at ASC, rowid ASC
            """,
            [*ids, RecordStatus.ACTIVE.value],
        )
        rows = await cursor.fetchall()
        grouped: dict[str, list[PropertyImage]] = defaultdict(list)
        for row in rows:
            grouped[row["property_id"]].append(row_to_image(row))
        return dict(grouped)

    async def get(self, image_id: str) -> PropertyImage | None:
        if not is_object_id(image_id):
            return None
        conn = await self._get_connection()
        cursor = await conn.execute(
            "SELECT * FROM property_images WHERE id = ? AND status = ?",
            (image_id.lower(), RecordStatus.ACTIVE.value),
        )
        row = await cursor.fetchone()
        return row_to_image(row) if row else None

    async def create(self, image: PropertyImage) -> PropertyImage:
        created = image.model_copy(update={"created_at": datetime.now(UTC)})
        conn = await self._get_connection()
        await conn.execute(
            """
            INSERT INTO property_images (id, property_id, file, status, created_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                created.id,
                created.property_id.lower(),
                created.file,
                created.status.value,
                to_db_timestamp(created.created_at),
            ),
        )
        await conn.commit()
        return created

    async def disable(self, image_id: str) -> bool:
        """Soft-delete an image.

        Returns:
            True if a row with this id exists.
        """
        if not is_object_id(image_id):
            return False
        conn = await self._get_connection()
        cursor = await conn.execute(
            "UPDATE property_images SET status = ? WHERE id = ?",
            (RecordStatus.DISABLED.value, image_id.lower()),
        )
        await conn.commit()
        return cursor.rowcount > 0

    async def count_all(self) -> int:
        """Count every image row, enabled or not."""
        conn = await self._get_connection()
        cursor = await conn.execute("SELECT COUNT(*) FROM property_images")
        row = await cursor.fetchone()
        return row[0] if row else 0
