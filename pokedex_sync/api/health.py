"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from pokedex_sync.api.dependencies import get_sync_controller
from pokedex_sync.application.sync_controller import SyncController
from pokedex_sync.domain.state_machines import SyncStatus
from pokedex_sync.infrastructure.config import settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    return HealthResponse(
        status="healthy",
        service="pokedex-sync",
        version=settings.api_version,
    )


@router.get("/ready")
async def readiness_check(
    controller: SyncController = Depends(get_sync_controller),
) -> dict[str, str]:
    """Check if the catalog has been loaded.

    Raises:
        HTTPException: 503 while loading or degraded.
    """
    state = controller.get_sync_state()
    if state.status is not SyncStatus.READY:
        raise HTTPException(
            status_code=503,
            detail={
                "error_code": "CATALOG_NOT_READY",
                "message": f"Catalog sync is {state.status.value}",
            },
        )
    return {"status": "ready"}
