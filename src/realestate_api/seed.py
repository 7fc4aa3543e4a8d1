"""Demo data for local development.

Each collection is only seeded while it is empty, so running the seeder
repeatedly is harmless.
"""

from __future__ import annotations

import random
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from typing import Final

from realestate_api.db import RealEstateStorage
from realestate_api.logging import get_logger
from realestate_api.models import Owner, Property, PropertyFilter, PropertyImage, PropertyTrace
from realestate_api.pagination import MAX_PAGE_SIZE, PageRequest

logger = get_logger(__name__)

TRACE_TAX_RATE: Final = Decimal("0.05")
TRACE_VALUE_FLOOR: Final = Decimal(100_000)
TRACE_VALUE_SPREAD: Final = 100_000

DEMO_OWNERS: Final = (
    (
        "John Smith",
        "123 Main St, New York, NY",
        "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=150&h=150&fit=crop&crop=face",
        date(1980, 5, 15),
    ),
    (
        "Maria Garcia",
        "456 Oak Ave, Los Angeles, CA",
        "https://images.unsplash.com/photo-1494790108755-2616b612b786?w=150&h=150&fit=crop&crop=face",
        date(1975, 8, 22),
    ),
    (
        "Robert Johnson",
        "789 Pine St, Chicago, IL",
        "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=150&h=150&fit=crop&crop=face",
        date(1968, 12, 3),
    ),
    (
        "Emily Davis",
        "321 Elm Dr, Houston, TX",
        "https://images.unsplash.com/photo-1438761681033-6461ffad8d80?w=150&h=150&fit=crop&crop=face",
        date(1985, 3, 28),
    ),
    (
        "Michael Brown",
        "654 Cedar Ln, Phoenix, AZ",
        "https://images.unsplash.com/photo-1500648767791-00dcc994a43e?w=150&h=150&fit=crop&crop=face",
        date(1972, 7, 11),
    ),
)

# (name, address, price, code, year, owner index)
DEMO_PROPERTIES: Final = (
    ("Modern Downtown Apartment", "555 Broadway, New York, NY 10012", 850_000, "NYC001", 2020, 0),
    ("Luxury Beachfront Villa", "1234 Ocean Drive, Miami, FL 33139", 2_500_000, "MIA001", 2019, 1),
    ("Cozy Suburban House", "789 Maple Street, Austin, TX 78701", 450_000, "AUS001", 2018, 2),
    ("Historic Brownstone", "101 Commonwealth Ave, Boston, MA 02116", 1_200_000, "BOS001", 1920, 3),
    ("Mountain Cabin Retreat", "456 Pine Ridge Trail, Aspen, CO 81611", 3_200_000, "ASP001", 2021, 4),
    ("Urban Loft Studio", "888 Industrial Blvd, Seattle, WA 98101", 675_000, "SEA001", 2017, 0),
    ("Victorian Style Home", "222 Victorian Way, San Francisco, CA 94102", 1_800_000, "SF001", 1895, 1),
    ("Desert Modern House", "777 Cactus Drive, Phoenix, AZ 85001", 725_000, "PHX001", 2022, 2),
)

DEMO_IMAGE_URLS: Final = (
    "https://images.unsplash.com/photo-1560518883-ce09059eeffa?w=800&h=600&fit=crop",
    "https://images.unsplash.com/photo-1570129477492-45c003edd2be?w=800&h=600&fit=crop",
    "https://images.unsplash.com/photo-1484154218962-a197022b5858?w=800&h=600&fit=crop",
    "https://images.unsplash.com/photo-1449844908441-8829872d2607?w=800&h=600&fit=crop",
    "https://images.unsplash.com/photo-1502672260266-1c1ef2d93688?w=800&h=600&fit=crop",
)

TRACE_NAMES: Final = ("Purchase", "Sale", "Appraisal", "Tax Assessment", "Insurance Claim")


def trace_value(price: Decimal, variation: int) -> Decimal:
    """Trace value derived from a listing price, never below the floor."""
    return max(price + variation, TRACE_VALUE_FLOOR)


async def _seed_owners(storage: RealEstateStorage) -> list[Owner]:
    existing = await storage.owners.list_all()
    if existing:
        return existing
    created = [
        await storage.owners.create(Owner(name=name, address=address, photo=photo, birthday=bday))
        for name, address, photo, bday in DEMO_OWNERS
    ]
    logger.info("seeded_owners", count=len(created))
    return created


async def _seed_properties(storage: RealEstateStorage, owners: list[Owner]) -> list[Property]:
    everything = PropertyFilter(enabled=None)
    page = PageRequest(page_size=MAX_PAGE_SIZE)
    if await storage.properties.count(everything) > 0 or not owners:
        return await storage.properties.find_page(everything, page)

    created = []
    for name, address, price, code, year, owner_index in DEMO_PROPERTIES:
        owner = owners[owner_index % len(owners)]
        created.append(
            await storage.properties.create(
                Property(
                    name=name,
                    address=address,
                    price=Decimal(price),
                    code_internal=code,
                    year=year,
                    owner_id=owner.id,
                )
            )
        )
    logger.info("seeded_properties", count=len(created))
    return created


async def _seed_images(
    storage: RealEstateStorage, properties: list[Property], rng: random.Random
) -> None:
    if await storage.images.count_all() > 0 or not properties:
        return
    count = 0
    for prop in properties:
        for _ in range(rng.randint(1, 3)):
            await storage.images.create(
                PropertyImage(property_id=prop.id, file=rng.choice(DEMO_IMAGE_URLS))
            )
            count += 1
    logger.info("seeded_images", count=count)


async def _seed_traces(
    storage: RealEstateStorage, properties: list[Property], rng: random.Random
) -> None:
    if await storage.traces.count_all() > 0 or not properties:
        return
    now = datetime.now(UTC)
    count = 0
    for prop in properties:
        for _ in range(rng.randint(1, 2)):
            value = trace_value(
                prop.price, rng.randint(-TRACE_VALUE_SPREAD, TRACE_VALUE_SPREAD - 1)
            )
            await storage.traces.create(
                PropertyTrace(
                    property_id=prop.id,
                    date_sale=now - timedelta(days=rng.randint(1, 364)),
                    name=rng.choice(TRACE_NAMES),
                    value=value,
                    tax=value * TRACE_TAX_RATE,
                )
            )
            count += 1
    logger.info("seeded_traces", count=count)


async def seed_database(storage: RealEstateStorage, rng: random.Random | None = None) -> None:
    """Insert demo owners, properties, images and traces into empty collections.

    Args:
        storage: Initialized storage.
        rng: Source of randomness for image and trace choices. Pass a seeded
            ``random.Random`` for reproducible output.
    """
    rng = rng or random.Random()
    owners = await _seed_owners(storage)
    properties = await _seed_properties(storage, owners)
    await _seed_images(storage, properties, rng)
    await _seed_traces(storage, properties, rng)
    logger.info("seed_complete")
