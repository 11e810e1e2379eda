"""Application layer - orchestrates catalog loading over time."""

from pokedex_sync.application.sync_controller import CatalogLoader, SyncController

__all__ = [
    "CatalogLoader",
    "SyncController",
]
