"""Shared pytest fixtures."""

import gc
import os
import sys
import threading
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import date
from decimal import Decimal
from typing import Any

import pytest
import pytest_asyncio
from hypothesis import HealthCheck, settings

from realestate_api.config import Settings
from realestate_api.db import RealEstateStorage
from realestate_api.models import Owner, Property, PropertyImage


def pytest_configure(config: pytest.Config) -> None:
    """Force line-buffered stdout when piped."""
    if hasattr(sys.stdout, "reconfigure") and not sys.stdout.isatty():
        sys.stdout.reconfigure(line_buffering=True)
    if hasattr(sys.stderr, "reconfigure") and not sys.stderr.isatty():
        sys.stderr.reconfigure(line_buffering=True)


# Hypothesis settings profiles for different environments
settings.register_profile("fast", max_examples=10)
settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "fast"))


@pytest.fixture(autouse=True)
def _isolate_settings_from_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    """Prevent the local .env file from leaking into test Settings instances."""
    monkeypatch.setattr(
        Settings,
        "model_config",
        {**Settings.model_config, "env_file": None},
    )


@pytest.fixture(autouse=True)
def _cleanup_aiosqlite_threads():
    """Safety net: detect and stop leaked aiosqlite worker threads.

    aiosqlite creates a non-daemon worker thread per connection that blocks
    on its queue indefinitely. If a test leaks a connection, the thread
    prevents clean process exit.
    """
    yield

    from aiosqlite.core import _STOP_RUNNING_SENTINEL, Connection

    leaked = False

    # Strategy 1: find leaked Connection objects via gc, call stop()
    gc.collect()
    for obj in gc.get_objects():
        if isinstance(obj, Connection) and obj._connection is not None:
            leaked = True
            obj.stop()

    # Strategy 2: inject sentinel directly for orphaned threads
    for thread in threading.enumerate():
        if "_connection_worker_thread" in (thread.name or "") and thread.is_alive():
            leaked = True
            tx = getattr(thread, "_args", (None,))[0]
            if tx is not None and hasattr(tx, "put_nowait"):
                tx.put_nowait((None, lambda: _STOP_RUNNING_SENTINEL))
                thread.join(timeout=1.0)

    if leaked:
        import warnings

        warnings.warn(
            "Test leaked aiosqlite connection(s); add 'await storage.close()' to fixture teardown",
            ResourceWarning,
            stacklevel=1,
        )


@pytest_asyncio.fixture
async def storage() -> AsyncGenerator[RealEstateStorage, None]:
    """Create an in-memory storage instance."""
    s = RealEstateStorage(":memory:")
    await s.initialize()
    yield s
    await s.close()


@pytest.fixture
def sample_owner() -> Owner:
    return Owner(
        name="John Smith",
        address="123 Main St, New York, NY",
        photo="https://example.com/john.jpg",
        birthday=date(1980, 5, 15),
    )


@pytest_asyncio.fixture
async def owner(storage: RealEstateStorage, sample_owner: Owner) -> Owner:
    """An owner persisted in the storage fixture."""
    return await storage.owners.create(sample_owner)


@pytest.fixture
def make_property() -> Callable[..., Property]:
    """Factory for properties with sensible defaults."""

    def _make(**overrides: Any) -> Property:
        fields: dict[str, Any] = {
            "name": "Modern Downtown Apartment",
            "address": "555 Broadway, New York, NY 10012",
            "price": Decimal("850000"),
            "code_internal": "NYC001",
            "year": 2020,
        }
        fields.update(overrides)
        return Property(**fields)

    return _make


@pytest.fixture
def add_property(
    storage: RealEstateStorage, make_property: Callable[..., Property]
) -> Callable[..., Awaitable[Property]]:
    """Persist a property built by ``make_property``."""

    async def _add(**overrides: Any) -> Property:
        return await storage.properties.create(make_property(**overrides))

    return _add


@pytest.fixture
def add_image(storage: RealEstateStorage) -> Callable[..., Awaitable[PropertyImage]]:
    async def _add(property_id: str, file: str) -> PropertyImage:
        return await storage.images.create(PropertyImage(property_id=property_id, file=file))

    return _add
