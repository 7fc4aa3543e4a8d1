"""JSON API routes."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from realestate_api.db import RealEstateStorage
from realestate_api.logging import get_logger
from realestate_api.schemas import (
    ApiResponse,
    CreatePropertyRequest,
    OwnerDto,
    PagedResult,
    PropertyDetailDto,
    PropertyDto,
    UpdatePropertyRequest,
)
from realestate_api.services import OwnerService, PropertyService
from realestate_api.web.filters import PropertyQueryDep

logger = get_logger(__name__)

router = APIRouter()


def _get_storage(request: Request) -> RealEstateStorage:
    return request.app.state.storage  # type: ignore[no-any-return]


def get_property_service(request: Request) -> PropertyService:
    return PropertyService(_get_storage(request))


def get_owner_service(request: Request) -> OwnerService:
    return OwnerService(_get_storage(request))


PropertyServiceDep = Annotated[PropertyService, Depends(get_property_service)]
OwnerServiceDep = Annotated[OwnerService, Depends(get_owner_service)]


@router.get("/health")
async def health_check() -> JSONResponse:
    """Liveness probe."""
    return JSONResponse({"status": "Healthy", "timestamp": datetime.now(UTC).isoformat()})


@router.get("/api/properties", response_model=ApiResponse[PagedResult[PropertyDto]])
async def list_properties(
    query: PropertyQueryDep, service: PropertyServiceDep
) -> ApiResponse[PagedResult[PropertyDto]]:
    return await service.get_properties(query.filters, query.page)


@router.get("/api/properties/{property_id}", response_model=ApiResponse[PropertyDetailDto])
async def get_property(
    property_id: str, service: PropertyServiceDep
) -> ApiResponse[PropertyDetailDto]:
    return await service.get_property(property_id)


@router.post(
    "/api/properties", status_code=201, response_model=ApiResponse[PropertyDto]
)
async def create_property(
    body: CreatePropertyRequest, service: PropertyServiceDep
) -> ApiResponse[PropertyDto]:
    return await service.create_property(body)


@router.put("/api/properties/{property_id}", response_model=ApiResponse[PropertyDto])
async def update_property(
    property_id: str, body: UpdatePropertyRequest, service: PropertyServiceDep
) -> ApiResponse[PropertyDto]:
    return await service.update_property(property_id, body)


@router.delete("/api/properties/{property_id}", response_model=ApiResponse[bool])
async def delete_property(property_id: str, service: PropertyServiceDep) -> ApiResponse[bool]:
    return await service.delete_property(property_id)


@router.get("/api/owners", response_model=ApiResponse[list[OwnerDto]])
async def list_owners(service: OwnerServiceDep) -> ApiResponse[list[OwnerDto]]:
    return await service.list_owners()


@router.get("/api/owners/{owner_id}", response_model=ApiResponse[OwnerDto])
async def get_owner(owner_id: str, service: OwnerServiceDep) -> ApiResponse[OwnerDto]:
    return await service.get_owner(owner_id)
