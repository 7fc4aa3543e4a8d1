"""Map domain records onto transport DTOs."""

from __future__ import annotations

from realestate_api.models import AggregatedProperty, Owner, PropertyImage, PropertyTrace
from realestate_api.schemas import (
    OwnerDto,
    PropertyDetailDto,
    PropertyDto,
    PropertyImageDto,
    PropertyTraceDto,
)


def to_owner_dto(owner: Owner) -> OwnerDto:
    return OwnerDto(
        id=owner.id,
        name=owner.name,
        address=owner.address,
        photo=owner.photo,
        birthday=owner.birthday,
    )


def to_image_dto(image: PropertyImage) -> PropertyImageDto:
    return PropertyImageDto(id=image.id, file=image.file, enabled=image.enabled)


def to_trace_dto(trace: PropertyTrace) -> PropertyTraceDto:
    return PropertyTraceDto(
        id=trace.id,
        date_sale=trace.date_sale,
        name=trace.name,
        value=trace.value,
        tax=trace.tax,
    )


def to_property_dto(aggregated: AggregatedProperty) -> PropertyDto:
    """Flatten an aggregated property into its list DTO.

    ``image_url`` is the file of the earliest enabled image, or None.
    """
    prop = aggregated.listing
    main_image = aggregated.main_image
    return PropertyDto(
        id=prop.id,
        name=prop.name,
        address=prop.address,
        price=prop.price,
        code_internal=prop.code_internal,
        year=prop.year,
        owner_id=prop.owner_id,
        enabled=prop.enabled,
        created_at=prop.created_at,
        updated_at=prop.updated_at,
        owner=to_owner_dto(aggregated.owner) if aggregated.owner else None,
        image_url=main_image.file if main_image else None,
        images=[to_image_dto(img) for img in aggregated.images if img.enabled],
    )


def to_detail_dto(aggregated: AggregatedProperty) -> PropertyDetailDto:
    """Like ``to_property_dto`` but with traces included."""
    base = to_property_dto(aggregated)
    return PropertyDetailDto(
        **base.model_dump(),
        traces=[to_trace_dto(t) for t in aggregated.traces],
    )
