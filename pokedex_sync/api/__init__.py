"""API layer - HTTP routes over the sync controller."""

from pokedex_sync.api.catalog import router as catalog_router
from pokedex_sync.api.health import router as health_router

__all__ = [
    "catalog_router",
    "health_router",
]
