"""Application factory shared by the product and user services."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from common.config import ServiceConfig
from common.db import DatabaseClient
from common.errors import register_error_handlers
from common.health import build_health_router
from common.logging import configure_logging

logger = logging.getLogger(__name__)


def create_service_app(
    *,
    config: ServiceConfig,
    title: str,
    version: str,
    routers: Sequence[APIRouter],
    db: DatabaseClient | None = None,
) -> FastAPI:
    """Build a service app.

    When `db` is None the app owns its client: it is created on startup and
    its pool disposed on shutdown. An injected client is left to the caller.
    """

    configure_logging(config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owns_client = app.state.db is None
        if owns_client:
            app.state.db = DatabaseClient.from_config(config)
        try:
            yield
        finally:
            if owns_client:
                app.state.db.close()
                app.state.db = None

    app = FastAPI(title=title, version=version, lifespan=lifespan)
    app.state.config = config
    app.state.db = db

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app, expose_detail=config.expose_error_detail)

    app.include_router(build_health_router(config.service_name))
    for router in routers:
        app.include_router(router)

    return app


def run(app: FastAPI, config: ServiceConfig) -> None:
    """Serve `app` until interrupted."""

    logger.info("%s on http://%s:%d", config.service_name, config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
