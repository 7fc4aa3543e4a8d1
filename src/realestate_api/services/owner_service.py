"""Read-only owner use cases."""

from __future__ import annotations

import aiosqlite

from realestate_api.db import RealEstateStorage
from realestate_api.errors import NotFoundError, StorageError
from realestate_api.logging import get_logger
from realestate_api.schemas import ApiResponse, OwnerDto
from realestate_api.services.mappers import to_owner_dto

logger = get_logger(__name__)


class OwnerService:
    def __init__(self, storage: RealEstateStorage) -> None:
        self._storage = storage

    async def list_owners(self) -> ApiResponse[list[OwnerDto]]:
        """All owners sorted by name."""
        try:
            owners = await self._storage.owners.list_all()
        except aiosqlite.Error as e:
            logger.error("owner_list_failed", exc_info=True)
            raise StorageError("Error retrieving owners") from e
        return ApiResponse[list[OwnerDto]].ok([to_owner_dto(o) for o in owners])

    async def get_owner(self, owner_id: str) -> ApiResponse[OwnerDto]:
        """Raises NotFoundError for unknown or malformed ids."""
        try:
            owner = await self._storage.owners.get(owner_id)
        except aiosqlite.Error as e:
            logger.error("owner_fetch_failed", owner_id=owner_id, exc_info=True)
            raise StorageError("Error retrieving owner") from e
        if owner is None:
            raise NotFoundError("Owner not found")
        return ApiResponse[OwnerDto].ok(to_owner_dto(owner))
