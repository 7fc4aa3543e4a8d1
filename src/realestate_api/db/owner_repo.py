"""Owner repository."""

from __future__ import annotations

from collections.abc import Callable, Coroutine, Iterable
from datetime import UTC, datetime
from typing import Any

import aiosqlite

from realestate_api.db.row_mappers import row_to_owner, to_db_timestamp
from realestate_api.models import Owner
from realestate_api.utils.object_id import is_object_id


class OwnerRepository:
    """Database operations for the owners table."""

    def __init__(
        self,
        get_connection: Callable[[], Coroutine[Any, Any, aiosqlite.Connection]],
    ) -> None:
        self._get_connection = get_connection

    async def list_all(self) -> list[Owner]:
        """All owners sorted by name."""
        conn = await self._get_connection()
        cursor = await conn.execute("SELECT * FROM owners ORDER BY name ASC")
        rows = await cursor.fetchall()
        return [row_to_owner(row) for row in rows]

    async def get(self, owner_id: str) -> Owner | None:
        if not is_object_id(owner_id):
            return None
        conn = await self._get_connection()
        cursor = await conn.execute("SELECT * FROM owners WHERE id = ?", (owner_id.lower(),))
        row = await cursor.fetchone()
        return row_to_owner(row) if row else None

    async def get_many(self, owner_ids: Iterable[str]) -> dict[str, Owner]:
        """Fetch owners for a set of ids in a single query.

        Returns:
            Mapping of owner id to Owner; unknown ids are absent.
        """
        ids = sorted({oid.lower() for oid in owner_ids if is_object_id(oid)})
        if not ids:
            return {}
        conn = await self._get_connection()
        placeholders = ", ".join("?" for _ in ids)
        cursor = await conn.execute(
            f"SELECT * FROM owners WHERE id IN ({placeholders})",
            ids,
        )
        rows = await cursor.fetchall()
        return {row["id"]: row_to_owner(row) for row in rows}

    async def exists(self, owner_id: str) -> bool:
        if not is_object_id(owner_id):
            return False
        conn = await self._get_connection()
        cursor = await conn.execute(
            "SELECT 1 FROM owners WHERE id = ? LIMIT 1", (owner_id.lower(),)
        )
        return await cursor.fetchone() is not None

    async def create(self, owner: Owner) -> Owner:
        now = datetime.now(UTC)
        created = owner.model_copy(update={"created_at": now, "updated_at": now})
        conn = await self._get_connection()
        await conn.execute(
            """
            INSERT INTO owners (id, name, address, photo, birthday, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                created.id,
                created.name,
                created.address,
                created.photo,
                created.birthday.isoformat() if created.birthday else None,
                to_db_timestamp(created.created_at),
                to_db_timestamp(created.updated_at),
            ),
        )
        await conn.commit()
        return created

    async def replace(self, owner: Owner) -> Owner:
        """Overwrite every mutable field of an existing owner.

        Raises:
            LookupError: No row has this id.
        """
        updated = owner.model_copy(update={"updated_at": datetime.now(UTC)})
        conn = await self._get_connection()
        cursor = await conn.execute(
            """
            UPDATE owners SET name = ?, address = ?, photo = ?, birthday = ?, updated_at = ?
            WHERE id = ?
            """,
            (
                updated.name,
                updated.address,
                updated.photo,
                updated.birthday.isoformat() if updated.birthday else None,
                to_db_timestamp(updated.updated_at),
                updated.id,
            ),
        )
        await conn.commit()
        if cursor.rowcount == 0:
            raise LookupError(f"Owner with ID {updated.id} not found")
        return updated

    async def delete(self, owner_id: str) -> bool:
        """Physically remove an owner. Properties referencing it are left as is."""
        if not is_object_id(owner_id):
            return False
        conn = await self._get_connection()
        cursor = await conn.execute("DELETE FROM owners WHERE id = ?", (owner_id.lower(),))
        await conn.commit()
        return cursor.rowcount > 0
