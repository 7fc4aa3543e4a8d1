"""Tests for attaching owners, images and traces to properties."""

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from realestate_api.db import RealEstateStorage
from realestate_api.models import Owner, Property, PropertyImage, PropertyTrace

AddProperty = Callable[..., Awaitable[Property]]
AddImage = Callable[..., Awaitable[PropertyImage]]


class TestAttach:
    @pytest.mark.asyncio
    async def test_empty_page(self, storage: RealEstateStorage) -> None:
        assert await storage.aggregator.attach([]) == []

    @pytest.mark.asyncio
    async def test_owner_and_images_attached_in_order(
        self,
        storage: RealEstateStorage,
        owner: Owner,
        add_property: AddProperty,
        add_image: AddImage,
    ) -> None:
        with_owner = await add_property(owner_id=owner.id)
        orphan = await add_property(owner_id="507f1f77bcf86cd799439099")
        no_owner = await add_property(owner_id="")
        await add_image(with_owner.id, "first.jpg")
        await add_image(with_owner.id, "second.jpg")

        aggregated = await storage.aggregator.attach([no_owner, orphan, with_owner])

        assert [a.listing.id for a in aggregated] == [no_owner.id, orphan.id, with_owner.id]
        assert aggregated[0].owner is None
        assert aggregated[1].owner is None
        assert aggregated[2].owner == owner
        assert [img.file for img in aggregated[2].images] == ["first.jpg", "second.jpg"]
        assert aggregated[2].main_image is not None
        assert aggregated[2].main_image.file == "first.jpg"
        assert aggregated[0].images == ()
        assert aggregated[0].traces == ()

    @pytest.mark.asyncio
    async def test_disabled_images_not_attached(
        self, storage: RealEstateStorage, add_property: AddProperty, add_image: AddImage
    ) -> None:
        prop = await add_property()
        first = await add_image(prop.id, "first.jpg")
        await add_image(prop.id, "second.jpg")
        await storage.images.disable(first.id)

        (aggregated,) = await storage.aggregator.attach([prop])
        assert [img.file for img in aggregated.images] == ["second.jpg"]
        assert aggregated.main_image is not None
        assert aggregated.main_image.file == "second.jpg"


class TestAttachDetail:
    @pytest.mark.asyncio
    async def test_traces_sorted_by_sale_date(
        self, storage: RealEstateStorage, owner: Owner, add_property: AddProperty
    ) -> None:
        prop = await add_property(owner_id=owner.id)
        base = datetime(2024, 6, 1, tzinfo=UTC)
        for days in (10, 1, 100):
            await storage.traces.create(
                PropertyTrace(
                    property_id=prop.id,
                    date_sale=base - timedelta(days=days),
                    name=f"T-{days}",
                    value=Decimal("1000"),
                    tax=Decimal("50"),
                )
            )

        detail = await storage.aggregator.attach_detail(prop)
        assert detail.owner == owner
        assert [t.name for t in detail.traces] == ["T-1", "T-10", "T-100"]
