"""Bulk catalog loader.

Turns one index response into a fully populated catalog snapshot by
fetching every detail record concurrently, with a cap on the number
of requests in flight.
"""

import asyncio
from typing import Any

import structlog

from pokedex_sync.domain.exceptions import DetailFetchFailedError, IndexFetchFailedError
from pokedex_sync.domain.models import CatalogRecord, CatalogSnapshot
from pokedex_sync.infrastructure.pokeapi_client import (
    IndexEntry,
    PokeAPIClient,
    PokeAPIClientError,
)

logger = structlog.get_logger()


def resolve_image_ref(sprites: dict[str, Any] | None) -> str:
    """Pick the high-resolution artwork, falling back to the default sprite.

    Args:
        sprites: The ``sprites`` object of a detail response.

    Returns:
        Image reference, or an empty string if neither source has one.
    """
    if not sprites:
        return ""
    other = sprites.get("other") or {}
    artwork = (other.get("official-artwork") or {}).get("front_default")
    return artwork or sprites.get("front_default") or ""


def record_from_detail(data: dict[str, Any]) -> CatalogRecord:
    """Build a CatalogRecord from a detail response.

    Args:
        data: Raw detail payload.

    Returns:
        Immutable record.

    Raises:
        KeyError, TypeError, ValueError: If the payload is malformed.
    """
    categories = tuple(entry["type"]["name"] for entry in data["types"])
    return CatalogRecord(
        id=data["id"],
        name=data["name"],
        categories=categories,
        image_ref=resolve_image_ref(data.get("sprites")),
    )


class BulkLoader:
    """Loads the whole catalog from the index and detail endpoints.

    Example usage:
        async with PokeAPIClient("https://pokeapi.co/api/v2/") as client:
            loader = BulkLoader(client, max_concurrency=20)
            snapshot = await loader.load(limit=151)
    """

    def __init__(self, client: PokeAPIClient, max_concurrency: int = 20) -> None:
        """Initialize loader.

        Args:
            client: Source API client.
            max_concurrency: Maximum detail requests in flight at once.
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.client = client
        self.max_concurrency = max_concurrency

    async def load(self, limit: int) -> CatalogSnapshot:
        """Fetch the index and every detail record.

        Returns only once all detail requests have settled. Records whose
        detail request failed are dropped.

        Args:
            limit: Maximum number of index references to request.

        Returns:
            Snapshot with records in index order and the derived categories.

        Raises:
            IndexFetchFailedError: If the index request fails.
        """
        try:
            entries = await self.client.fetch_index(limit)
        except PokeAPIClientError as e:
            logger.warning(
                "Index fetch failed",
                limit=limit,
                status_code=e.status_code,
                error=e.message,
            )
            raise IndexFetchFailedError(limit, e.message, e.status_code) from e

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def fetch_bounded(entry: IndexEntry) -> CatalogRecord:
            async with semaphore:
                return await self._fetch_record(entry)

        results = await asyncio.gather(
            *(fetch_bounded(entry) for entry in entries),
            return_exceptions=True,
        )

        records: list[CatalogRecord] = []
        dropped = 0
        for result in results:
            if isinstance(result, DetailFetchFailedError):
                dropped += 1
                logger.debug("Dropped record", url=result.url, reason=result.reason)
            elif isinstance(result, BaseException):
                raise result
            else:
                records.append(result)

        snapshot = CatalogSnapshot.from_records(records)
        logger.info(
            "Catalog loaded",
            index_count=len(entries),
            record_count=len(snapshot),
            dropped_count=dropped,
            category_count=len(snapshot.categories),
        )
        return snapshot

    async def _fetch_record(self, entry: IndexEntry) -> CatalogRecord:
        try:
            data = await self.client.fetch_detail(entry.url)
        except PokeAPIClientError as e:
            raise DetailFetchFailedError(entry.url, e.message) from e
        except Exception as e:
            raise DetailFetchFailedError(entry.url, f"Unexpected error: {e!r}") from e

        try:
            return record_from_detail(data)
        except (KeyError, TypeError, ValueError) as e:
            raise DetailFetchFailedError(entry.url, f"Malformed detail: {e!r}") from e
