"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from realestate_api import __version__
from realestate_api.config import Settings
from realestate_api.db import RealEstateStorage
from realestate_api.logging import configure_logging, get_logger
from realestate_api.seed import seed_database
from realestate_api.web.errors import register_exception_handlers

logger = get_logger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


def create_app(settings: Settings | None = None, *, log_level: int = logging.INFO) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Application settings. Loaded from env if not provided.
        log_level: Minimum level passed to the structlog configuration.
    """
    if settings is None:
        settings = Settings()

    configure_logging(json_output=settings.log_json, level=log_level)

    storage = RealEstateStorage(settings.database_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await storage.initialize()
        app.state.storage = storage
        app.state.settings = settings

        if settings.seed_on_startup:
            await seed_database(storage)

        logger.info(
            "web_server_started",
            database=settings.database_path,
            seeded=settings.seed_on_startup,
        )

        yield

        await storage.close()
        logger.info("web_server_stopped")

    app = FastAPI(title="Real Estate API", version=__version__, lifespan=lifespan)

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    from realestate_api.web.routes import router

    app.include_router(router)

    return app
