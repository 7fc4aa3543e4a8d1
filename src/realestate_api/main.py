"""Command-line entry point for the real-estate API."""

import argparse
import asyncio
import logging
import sys

from realestate_api.config import Settings
from realestate_api.db import RealEstateStorage
from realestate_api.logging import configure_logging, get_logger
from realestate_api.seed import seed_database

logger = get_logger(__name__)


async def run_seed(settings: Settings) -> None:
    """Seed the configured database and close it again."""
    storage = RealEstateStorage(settings.database_path)
    try:
        await storage.initialize()
        await seed_database(storage)
    finally:
        await storage.close()


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Real Estate API - listings, owners, images and sale traces"
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Seed empty collections with demo data and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug-level logging for troubleshooting",
    )
    args = parser.parse_args()

    level = logging.DEBUG if args.debug else logging.INFO

    try:
        settings = Settings()
    except Exception as e:
        configure_logging(json_output=False, level=level)
        logger.error("failed_to_load_settings", error=str(e))
        print(f"Error: Failed to load settings. {e}")
        print("Settings are read from REALESTATE_* environment variables or a .env file.")
        sys.exit(1)

    configure_logging(json_output=settings.log_json, level=level)

    if args.seed:
        logger.info("seeding_database", database=settings.database_path)
        asyncio.run(run_seed(settings))
        return

    import uvicorn

    from realestate_api.web.app import create_app

    logger.info("starting_realestate_api", host=settings.web_host, port=settings.web_port)
    app = create_app(settings, log_level=level)
    uvicorn.run(app, host=settings.web_host, port=settings.web_port, log_level="info")


if __name__ == "__main__":
    main()
