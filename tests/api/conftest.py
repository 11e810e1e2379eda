"""Shared fixtures for API tests."""

import asyncio

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pokedex_sync.application.sync_controller import SyncController
from pokedex_sync.domain.models import CatalogSnapshot
from pokedex_sync.main import create_app
from tests.fakes import ScriptedLoader, index_failure


@pytest.fixture
def app() -> FastAPI:
    """Fresh application without a running lifespan."""
    return create_app()


@pytest.fixture
def ready_controller(sample_snapshot: CatalogSnapshot) -> SyncController:
    """Controller that has completed one successful load."""
    controller = SyncController(ScriptedLoader(sample_snapshot))

    async def prime() -> None:
        await controller.start()

    asyncio.run(prime())
    return controller


@pytest.fixture
def degraded_controller() -> SyncController:
    """Controller whose initial load failed, with retry triggers released."""
    controller = SyncController(ScriptedLoader(index_failure("Unexpected status 503")))

    async def prime() -> None:
        await controller.start()
        await controller.stop()

    asyncio.run(prime())
    return controller


@pytest.fixture
def client(app: FastAPI, ready_controller: SyncController) -> TestClient:
    """Test client over a ready catalog."""
    app.state.sync_controller = ready_controller
    return TestClient(app)
