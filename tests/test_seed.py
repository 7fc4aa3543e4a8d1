"""Tests for demo data seeding."""

import random
from decimal import Decimal

import pytest

from realestate_api.db import RealEstateStorage
from realestate_api.models import Owner, PropertyFilter
from realestate_api.pagination import MAX_PAGE_SIZE, PageRequest
from realestate_api.seed import (
    DEMO_OWNERS,
    DEMO_PROPERTIES,
    TRACE_TAX_RATE,
    TRACE_VALUE_FLOOR,
    seed_database,
    trace_value,
)


async def _all_properties(storage: RealEstateStorage):
    return await storage.properties.find_page(
        PropertyFilter(enabled=None), PageRequest(page_size=MAX_PAGE_SIZE)
    )


class TestTraceValue:
    def test_variation_applied(self) -> None:
        assert trace_value(Decimal("850000"), -50_000) == Decimal("800000")

    def test_floored(self) -> None:
        assert trace_value(Decimal("120000"), -90_000) == TRACE_VALUE_FLOOR


class TestSeedDatabase:
    @pytest.mark.asyncio
    async def test_seeds_every_collection(self, storage: RealEstateStorage) -> None:
        await seed_database(storage, random.Random(42))

        owners = await storage.owners.list_all()
        properties = await _all_properties(storage)
        assert len(owners) == len(DEMO_OWNERS) == 5
        assert len(properties) == len(DEMO_PROPERTIES) == 8

        owner_ids = {o.id for o in owners}
        for prop in properties:
            assert prop.owner_id in owner_ids
            assert prop.enabled is True
            images = await storage.images.list_for_property(prop.id)
            traces = await storage.traces.list_for_property(prop.id)
            assert 1 <= len(images) <= 3
            assert 1 <= len(traces) <= 2
            for trace in traces:
                assert trace.value >= TRACE_VALUE_FLOOR
                assert abs(trace.value - prop.price) <= 100_000 or trace.value == TRACE_VALUE_FLOOR
                assert trace.tax == (trace.value * TRACE_TAX_RATE).quantize(Decimal("0.01"))

    @pytest.mark.asyncio
    async def test_idempotent(self, storage: RealEstateStorage) -> None:
        await seed_database(storage, random.Random(1))
        images_before = await storage.images.count_all()
        traces_before = await storage.traces.count_all()

        await seed_database(storage, random.Random(2))

        assert len(await storage.owners.list_all()) == 5
        assert len(await _all_properties(storage)) == 8
        assert await storage.images.count_all() == images_before
        assert await storage.traces.count_all() == traces_before

    @pytest.mark.asyncio
    async def test_deterministic_with_seeded_rng(self) -> None:
        counts = []
        for _ in range(2):
            storage = RealEstateStorage(":memory:")
            try:
                await storage.initialize()
                await seed_database(storage, random.Random(7))
                counts.append(
                    (await storage.images.count_all(), await storage.traces.count_all())
                )
            finally:
                await storage.close()
        assert counts[0] == counts[1]

    @pytest.mark.asyncio
    async def test_existing_owners_reused(self, storage: RealEstateStorage) -> None:
        existing = await storage.owners.create(Owner(name="Solo Owner", address="x"))
        await seed_database(storage, random.Random(3))

        owners = await storage.owners.list_all()
        assert [o.id for o in owners] == [existing.id]
        assert all(p.owner_id == existing.id for p in await _all_properties(storage))
