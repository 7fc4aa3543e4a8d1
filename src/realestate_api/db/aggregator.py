"""Attach owners, images and traces to properties read from storage."""

from __future__ import annotations

from collections.abc import Sequence

from realestate_api.db.image_repo import ImageRepository
from realestate_api.db.owner_repo import OwnerRepository
from realestate_api.db.trace_repo import TraceRepository
from realestate_api.models import AggregatedProperty, Property


class PropertyAggregator:
    """Joins properties with their related records in memory.

    A page of N properties costs one owner query and one image query rather
    than two lookups per row.
    """

    def __init__(
        self,
        owners: OwnerRepository,
        images: ImageRepository,
        traces: TraceRepository,
    ) -> None:
        self._owners = owners
        self._images = images
        self._traces = traces

    async def attach(self, properties: Sequence[Property]) -> list[AggregatedProperty]:
        """Attach owner and enabled images to each property, preserving order.

        A property whose owner id is empty or unknown gets no owner.
        """
        if not properties:
            return []
        owners = await self._owners.get_many(p.owner_id for p in properties if p.owner_id)
        images = await self._images.list_for_properties(p.id for p in properties)
        return [
            AggregatedProperty(
                listing=p,
                owner=owners.get(p.owner_id.lower()) if p.owner_id else None,
                images=tuple(images.get(p.id, ())),
            )
            for p in properties
        ]

    async def attach_detail(self, prop: Property) -> AggregatedProperty:
        """Attach owner, enabled images and all traces to one property."""
        (aggregated,) = await self.attach([prop])
        traces = await self._traces.list_for_property(prop.id)
        return aggregated.model_copy(update={"traces": tuple(traces)})
