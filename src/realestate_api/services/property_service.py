"""Property use cases: listing, detail, create, update and soft delete."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import aiosqlite

from realestate_api.db import RealEstateStorage
from realestate_api.errors import NotFoundError, OwnerNotFoundError, StorageError
from realestate_api.logging import get_logger
from realestate_api.models import (
    AggregatedProperty,
    Owner,
    Property,
    PropertyFilter,
    RecordStatus,
)
from realestate_api.pagination import PageRequest
from realestate_api.schemas import (
    ApiResponse,
    CreatePropertyRequest,
    PagedResult,
    PropertyDetailDto,
    PropertyDto,
    UpdatePropertyRequest,
)
from realestate_api.services.mappers import to_detail_dto, to_property_dto

logger = get_logger(__name__)

PROPERTY_NOT_FOUND = "Property not found"


@contextmanager
def _wrap_storage_errors(message: str) -> Iterator[None]:
    """Turn driver failures into StorageError, logging the original."""
    try:
        yield
    except aiosqlite.Error as e:
        logger.error("storage_operation_failed", operation=message, exc_info=True)
        raise StorageError(message) from e


class PropertyService:
    """Orchestrates repositories and the aggregator for property endpoints."""

    def __init__(self, storage: RealEstateStorage) -> None:
        self._storage = storage

    async def get_properties(
        self, filters: PropertyFilter, page: PageRequest
    ) -> ApiResponse[PagedResult[PropertyDto]]:
        """List one page of properties matching ``filters``, with owner and images."""
        with _wrap_storage_errors("Error retrieving properties"):
            items, total = await self._storage.properties.list_page(filters, page)
            aggregated = await self._storage.aggregator.attach(items)

        result = PagedResult[PropertyDto](
            items=[to_property_dto(a) for a in aggregated],
            total=total,
            page=page.page,
            page_size=page.page_size,
        )
        logger.debug(
            "properties_listed",
            page=page.page,
            page_size=page.page_size,
            returned=len(result.items),
            total=total,
        )
        return ApiResponse[PagedResult[PropertyDto]].ok(result)

    async def get_property(self, property_id: str) -> ApiResponse[PropertyDetailDto]:
        """Fetch an enabled property with owner, images and traces.

        Raises:
            NotFoundError: The id is malformed, unknown or disabled.
        """
        with _wrap_storage_errors("Error retrieving property"):
            prop = await self._storage.properties.get(property_id)
            if prop is None:
                raise NotFoundError(PROPERTY_NOT_FOUND)
            aggregated = await self._storage.aggregator.attach_detail(prop)
        return ApiResponse[PropertyDetailDto].ok(to_detail_dto(aggregated))

    async def create_property(self, request: CreatePropertyRequest) -> ApiResponse[PropertyDto]:
        """Create an enabled property for an existing owner.

        Raises:
            OwnerNotFoundError: ``owner_id`` does not reference an owner;
                nothing is written.
        """
        with _wrap_storage_errors("Error creating property"):
            owner = await self._require_owner(request.owner_id)
            created = await self._storage.properties.create(
                Property(
                    name=request.name,
                    address=request.address,
                    price=request.price,
                    code_internal=request.code_internal,
                    year=request.year,
                    owner_id=request.owner_id,
                    status=RecordStatus.ACTIVE,
                )
            )

        logger.info("property_created", property_id=created.id, owner_id=created.owner_id)
        dto = to_property_dto(AggregatedProperty(listing=created, owner=owner))
        return ApiResponse[PropertyDto].ok(dto, "Property created successfully")

    async def update_property(
        self, property_id: str, request: UpdatePropertyRequest
    ) -> ApiResponse[PropertyDto]:
        """Replace every mutable field of an enabled property.

        Concurrent updates are last-writer-wins.

        Raises:
            NotFoundError: The property is missing or disabled.
            OwnerNotFoundError: The new ``owner_id`` does not reference an owner.
        """
        with _wrap_storage_errors("Error updating property"):
            existing = await self._storage.properties.get(property_id)
            if existing is None:
                raise NotFoundError(PROPERTY_NOT_FOUND)
            owner = await self._require_owner(request.owner_id)

            replacement = existing.model_copy(
                update={
                    "name": request.name,
                    "address": request.address,
                    "price": request.price,
                    "code_internal": request.code_internal,
                    "year": request.year,
                    "owner_id": request.owner_id,
                    "status": RecordStatus.from_enabled(request.enabled),
                }
            )
            try:
                updated = await self._storage.properties.replace(replacement)
            except LookupError as e:
                raise NotFoundError(PROPERTY_NOT_FOUND) from e
            images = await self._storage.images.list_for_property(updated.id)

        logger.info("property_updated", property_id=updated.id, enabled=updated.enabled)
        dto = to_property_dto(
            AggregatedProperty(listing=updated, owner=owner, images=tuple(images))
        )
        return ApiResponse[PropertyDto].ok(dto, "Property updated successfully")

    async def delete_property(self, property_id: str) -> ApiResponse[bool]:
        """Soft-delete an enabled property.

        Images and traces of the property are left untouched.

        Raises:
            NotFoundError: The property is missing or already disabled.
        """
        with _wrap_storage_errors("Error deleting property"):
            if not await self._storage.properties.exists(property_id):
                raise NotFoundError(PROPERTY_NOT_FOUND)
            # A concurrent delete may win between the check and the update
            if not await self._storage.properties.soft_delete(property_id):
                raise NotFoundError(PROPERTY_NOT_FOUND)

        logger.info("property_deleted", property_id=property_id)
        return ApiResponse[bool].ok(True, "Property deleted successfully")

    async def _require_owner(self, owner_id: str) -> Owner:
        owner = await self._storage.owners.get(owner_id)
        if owner is None:
            logger.info("owner_reference_rejected", owner_id=owner_id)
            raise OwnerNotFoundError("Owner not found", [f"No owner with id {owner_id}"])
        return owner
