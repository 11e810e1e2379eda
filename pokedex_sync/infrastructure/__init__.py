"""Infrastructure layer - configuration, logging, HTTP access, connectivity."""

from pokedex_sync.infrastructure.config import Settings, settings
from pokedex_sync.infrastructure.connectivity import ConnectivityMonitor
from pokedex_sync.infrastructure.logging_config import configure_logging
from pokedex_sync.infrastructure.pokeapi_client import (
    IndexEntry,
    PokeAPIClient,
    PokeAPIClientError,
)

__all__ = [
    "ConnectivityMonitor",
    "IndexEntry",
    "PokeAPIClient",
    "PokeAPIClientError",
    "Settings",
    "configure_logging",
    "settings",
]
