"""Pokedex sync service main application module.

This module builds the FastAPI application and wires the source API
client, the bulk loader, the connectivity monitor and the sync
controller into its lifespan.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from pokedex_sync.api.catalog import router as catalog_router
from pokedex_sync.api.health import router as health_router
from pokedex_sync.api.schemas import ErrorResponse
from pokedex_sync.application.sync_controller import SyncController
from pokedex_sync.catalog.loader import BulkLoader
from pokedex_sync.infrastructure.config import Settings, settings
from pokedex_sync.infrastructure.connectivity import ConnectivityMonitor
from pokedex_sync.infrastructure.logging_config import configure_logging
from pokedex_sync.infrastructure.pokeapi_client import PokeAPIClient

logger = structlog.get_logger()


def build_controller(
    config: Settings, client: PokeAPIClient
) -> tuple[SyncController, ConnectivityMonitor]:
    """Create the controller and its connectivity monitor from settings.

    Args:
        config: Application settings.
        client: Source API client shared by loader and monitor.

    Returns:
        Controller and monitor, neither started.
    """
    monitor = ConnectivityMonitor(
        probe=client.ping,
        interval=config.connectivity_probe_interval_seconds,
    )
    controller = SyncController(
        loader=BulkLoader(client, max_concurrency=config.max_concurrent_details),
        limit=config.index_limit,
        retry_interval=config.retry_interval_seconds,
        connectivity=monitor,
        max_attempts=config.retry_max_attempts,
    )
    return controller, monitor


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Start catalog sync on startup and tear it down on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting pokedex-sync",
        version=settings.api_version,
        source=settings.pokeapi_base_url,
        index_limit=settings.index_limit,
    )

    client = PokeAPIClient(settings.pokeapi_base_url, timeout=settings.request_timeout_seconds)
    controller, monitor = build_controller(settings, client)
    app.state.sync_controller = controller

    monitor.start()
    controller.start()

    yield

    logger.info("Shutting down pokedex-sync")
    await controller.stop()
    await monitor.stop()
    await client.close()


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    configure_logging(settings.log_level, json_logs=settings.log_json)

    application = FastAPI(
        title="Pokedex Sync",
        description="In-memory Pokedex catalog synced from PokeAPI",
        version=settings.api_version,
        lifespan=lifespan,
        debug=settings.debug,
    )
    application.include_router(health_router, tags=["Health"])
    application.include_router(catalog_router)

    @application.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Handle HTTP exceptions with consistent format."""
        detail = exc.detail
        if isinstance(detail, dict):
            error_code = detail.get("error_code", "ERROR")
            message = detail.get("message", str(detail))
            details = detail.get("details", [])
        else:
            error_code = "ERROR"
            message = str(detail)
            details = []

        body = ErrorResponse(error_code=error_code, message=message, details=details)
        return JSONResponse(status_code=exc.status_code, content=body.model_dump())

    @application.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle uncaught exceptions with consistent format."""
        logger.exception(
            "Unhandled exception in handler",
            path=request.url.path,
            method=request.method,
            error=str(exc),
        )
        body = ErrorResponse(error_code="INTERNAL_ERROR", message="An internal error occurred")
        return JSONResponse(status_code=500, content=body.model_dump())

    return application


app = create_app()
