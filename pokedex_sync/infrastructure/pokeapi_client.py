"""PokeAPI HTTP client.

Thin read-only client for the index and detail endpoints of the
source API. All failures surface as PokeAPIClientError.
"""

from dataclasses import dataclass
from typing import Any

import httpx
import structlog

logger = structlog.get_logger()


@dataclass(frozen=True)
class IndexEntry:
    """Lightweight reference returned by the index endpoint."""

    name: str
    url: str

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "IndexEntry":
        """Create from one element of the index ``results`` list.

        Raises:
            KeyError: If ``name`` or ``url`` is missing.
            TypeError: If ``name`` or ``url`` is not a string.
        """
        name, url = data["name"], data["url"]
        if not isinstance(name, str) or not isinstance(url, str):
            raise TypeError(f"Index entry fields must be strings, got {data!r}")
        return cls(name=name, url=url)


class PokeAPIClientError(Exception):
    """Error from a PokeAPI call."""

    def __init__(
        self, message: str, status_code: int | None = None, url: str | None = None
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class PokeAPIClient:
    """HTTP client for the PokeAPI.

    Provides index, detail and reachability calls with error handling
    and response normalization.
    """

    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        """Initialize the client.

        Args:
            base_url: API base URL, e.g. ``https://pokeapi.co/api/v2/``.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "Accept": "application/json",
                    "User-Agent": "pokedex-sync",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "PokeAPIClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        try:
            client = await self._get_client()
            response = await client.get(url, params=params)
        except httpx.RequestError as e:
            raise PokeAPIClientError(f"Request failed: {e}", url=url) from e
        except (httpx.InvalidURL, TypeError) as e:
            raise PokeAPIClientError(f"Invalid URL {url!r}: {e}", url=str(url)) from e

        if response.status_code != 200:
            raise PokeAPIClientError(
                f"Unexpected status {response.status_code}",
                status_code=response.status_code,
                url=url,
            )

        try:
            return response.json()
        except ValueError as e:
            raise PokeAPIClientError(
                "Response body is not valid JSON",
                status_code=response.status_code,
                url=url,
            ) from e

    async def fetch_index(self, limit: int) -> list[IndexEntry]:
        """Fetch up to ``limit`` lightweight references.

        Args:
            limit: Maximum number of references.

        Returns:
            Index entries in API order.

        Raises:
            PokeAPIClientError: On transport error, non-200 or malformed body.
        """
        data = await self._get_json("pokemon", params={"limit": limit})
        try:
            entries = [IndexEntry.from_api_response(item) for item in data["results"]]
        except (KeyError, TypeError) as e:
            raise PokeAPIClientError(
                f"Malformed index response: {e!r}", status_code=200, url="pokemon"
            ) from e

        logger.debug("Fetched index", limit=limit, entry_count=len(entries))
        return entries

    async def fetch_detail(self, url: str) -> dict[str, Any]:
        """Fetch one detail record.

        Args:
            url: Detail locator from an index entry.

        Returns:
            Raw detail payload.

        Raises:
            PokeAPIClientError: On transport error, non-200 or non-object body.
        """
        data = await self._get_json(url)
        if not isinstance(data, dict):
            raise PokeAPIClientError("Detail response is not an object", status_code=200, url=url)
        return data

    async def ping(self) -> bool:
        """Check whether the API is reachable.

        Returns:
            True if the API root answered with 200.
        """
        try:
            client = await self._get_client()
            response = await client.get("")
            return response.status_code == 200
        except httpx.HTTPError as e:
            logger.debug("PokeAPI ping failed", error=str(e))
            return False
