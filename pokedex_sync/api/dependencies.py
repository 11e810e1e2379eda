"""FastAPI dependencies."""

from fastapi import HTTPException, Request

from pokedex_sync.application.sync_controller import SyncController


def get_sync_controller(request: Request) -> SyncController:
    """Get the controller attached to the application.

    Raises:
        HTTPException: 503 if the application has no controller yet.
    """
    controller = getattr(request.app.state, "sync_controller", None)
    if controller is None:
        raise HTTPException(
            status_code=503,
            detail={
                "error_code": "SYNC_NOT_STARTED",
                "message": "Catalog sync has not been started",
            },
        )
    return controller
