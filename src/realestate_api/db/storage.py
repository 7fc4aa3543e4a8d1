"""SQLite storage for listings, owners, images and traces."""

from __future__ import annotations

import asyncio
from pathlib import Path

import aiosqlite

from realestate_api.db.aggregator import PropertyAggregator
from realestate_api.db.image_repo import ImageRepository
from realestate_api.db.owner_repo import OwnerRepository
from realestate_api.db.property_repo import PropertyRepository
from realestate_api.db.trace_repo import TraceRepository
from realestate_api.logging import get_logger

logger = get_logger(__name__)


def casefold(value: str | None) -> str | None:
    """SQL function for Unicode-aware case-insensitive matching."""
    return value.casefold() if value is not None else None


class RealEstateStorage:
    """Owns the shared database connection and wires the repositories to it.

    Related records reference each other by id only. There are no foreign
    keys, so soft-deleting a property leaves its images and traces in place.
    """

    def __init__(self, db_path: str) -> None:
        """Initialize storage with database path.

        Args:
            db_path: Path to SQLite database file, or ":memory:" for in-memory.
        """
        self.db_path = db_path
        self._conn: aiosqlite.Connection | None = None
        self._connect_lock = asyncio.Lock()
        self._ensure_directory()
        self.properties = PropertyRepository(self._get_connection)
        self.owners = OwnerRepository(self._get_connection)
        self.images = ImageRepository(self._get_connection)
        self.traces = TraceRepository(self._get_connection)
        self.aggregator = PropertyAggregator(self.owners, self.images, self.traces)

    def _ensure_directory(self) -> None:
        """Ensure the directory for the database exists."""
        if self.db_path != ":memory:":
            path = Path(self.db_path)
            path.parent.mkdir(parents=True, exist_ok=True)

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get or create the database connection.

        Concurrent first calls share a single connection.
        """
        if self._conn is None:
            async with self._connect_lock:
                if self._conn is None:
                    conn = await aiosqlite.connect(self.db_path)
                    conn.row_factory = aiosqlite.Row
                    await conn.execute("PRAGMA journal_mode=WAL")
                    await conn.execute("PRAGMA busy_timeout=5000")
                    await conn.execute("PRAGMA synchronous=NORMAL")
                    await conn.execute("PRAGMA cache_size=-64000")
                    await conn.create_function("casefold", 1, casefold, deterministic=True)
                    self._conn = conn
        return self._conn

    async def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None

    async def initialize(self) -> None:
        """Create tables and indexes if they do not exist yet."""
        conn = await self._get_connection()
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS owners (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                address TEXT NOT NULL,
                photo TEXT NOT NULL DEFAULT '',
                birthday TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS properties (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                address TEXT NOT NULL,
                price_cents INTEGER NOT NULL,
                code_internal TEXT NOT NULL,
                year INTEGER NOT NULL,
                owner_id TEXT NOT NULL DEFAULT '',
                status TEXT NOT NULL DEFAULT 'active',
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS property_images (
                id TEXT PRIMARY KEY,
                property_id TEXT NOT NULL,
                file TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'active',
                created_at TEXT NOT NULL
            )
        """)
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS property_traces (
                id TEXT PRIMARY KEY,
                property_id TEXT NOT NULL,
                date_sale TEXT NOT NULL,
                name TEXT NOT NULL,
                value_cents INTEGER NOT NULL,
                tax_cents INTEGER NOT NULL,
                created_at TEXT NOT NULL
            )
        """)

        # Indexes for the listing filters and per-property lookups
        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_properties_status_created
            ON properties(status, created_at)
        """)
        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_properties_owner_id
            ON properties(owner_id)
        """)
        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_properties_year
            ON properties(year)
        """)
        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_owners_name
            ON owners(name)
        """)
        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_property_images_property
            ON property_images(property_id, status, created_at)
        """)
        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_property_traces_property
            ON property_traces(property_id, date_sale)
        """)
        await conn.commit()
        logger.info("storage_initialized", db_path=self.db_path)
