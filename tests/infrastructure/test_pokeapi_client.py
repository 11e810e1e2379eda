"""Tests for the PokeAPI client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from pokedex_sync.infrastructure.pokeapi_client import (
    IndexEntry,
    PokeAPIClient,
    PokeAPIClientError,
)


def mock_response(status_code: int = 200, json_data: object = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    return response


class TestPokeAPIClient:
    """Tests for PokeAPIClient."""

    @pytest.fixture
    def client(self) -> PokeAPIClient:
        """Create a test client."""
        return PokeAPIClient(base_url="https://pokeapi.test/api/v2", timeout=2.0)

    def test_client_initialization(self, client: PokeAPIClient) -> None:
        """Base URL is normalized to end with a slash."""
        assert client.base_url == "https://pokeapi.test/api/v2/"
        assert client.timeout == 2.0
        assert client._client is None

    @pytest.mark.asyncio
    async def test_fetch_index_success(self, client: PokeAPIClient) -> None:
        response = mock_response(
            json_data={
                "count": 2,
                "results": [
                    {"name": "bulbasaur", "url": "https://pokeapi.test/api/v2/pokemon/1/"},
                    {"name": "ivysaur", "url": "https://pokeapi.test/api/v2/pokemon/2/"},
                ],
            }
        )

        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.get = AsyncMock(return_value=response)
            mock_get_client.return_value = mock_http_client

            entries = await client.fetch_index(limit=2)

            assert entries == [
                IndexEntry("bulbasaur", "https://pokeapi.test/api/v2/pokemon/1/"),
                IndexEntry("ivysaur", "https://pokeapi.test/api/v2/pokemon/2/"),
            ]
            mock_http_client.get.assert_awaited_once_with("pokemon", params={"limit": 2})

    @pytest.mark.asyncio
    async def test_fetch_index_non_success_status(self, client: PokeAPIClient) -> None:
        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.get = AsyncMock(return_value=mock_response(status_code=503))
            mock_get_client.return_value = mock_http_client

            with pytest.raises(PokeAPIClientError) as exc_info:
                await client.fetch_index(limit=10)

            assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_fetch_index_malformed_body(self, client: PokeAPIClient) -> None:
        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.get = AsyncMock(return_value=mock_response(json_data={"count": 0}))
            mock_get_client.return_value = mock_http_client

            with pytest.raises(PokeAPIClientError, match="Malformed index"):
                await client.fetch_index(limit=10)

    @pytest.mark.asyncio
    async def test_invalid_json_body(self, client: PokeAPIClient) -> None:
        response = mock_response()
        response.json.side_effect = ValueError("Expecting value")

        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.get = AsyncMock(return_value=response)
            mock_get_client.return_value = mock_http_client

            with pytest.raises(PokeAPIClientError, match="not valid JSON"):
                await client.fetch_index(limit=10)

    @pytest.mark.asyncio
    async def test_transport_error(self, client: PokeAPIClient) -> None:
        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.get = AsyncMock(
                side_effect=httpx.ConnectError("Connection refused")
            )
            mock_get_client.return_value = mock_http_client

            with pytest.raises(PokeAPIClientError) as exc_info:
                await client.fetch_detail("https://pokeapi.test/api/v2/pokemon/1/")

            assert exc_info.value.status_code is None
            assert exc_info.value.url == "https://pokeapi.test/api/v2/pokemon/1/"

    @pytest.mark.asyncio
    async def test_fetch_detail_success(self, client: PokeAPIClient) -> None:
        detail = {"id": 25, "name": "pikachu", "types": []}

        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.get = AsyncMock(return_value=mock_response(json_data=detail))
            mock_get_client.return_value = mock_http_client

            result = await client.fetch_detail("https://pokeapi.test/api/v2/pokemon/25/")

            assert result == detail

    @pytest.mark.asyncio
    async def test_fetch_detail_rejects_non_object(self, client: PokeAPIClient) -> None:
        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.get = AsyncMock(return_value=mock_response(json_data=[1, 2]))
            mock_get_client.return_value = mock_http_client

            with pytest.raises(PokeAPIClientError):
                await client.fetch_detail("https://pokeapi.test/api/v2/pokemon/25/")

    @pytest.mark.asyncio
    async def test_ping(self, client: PokeAPIClient) -> None:
        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.get = AsyncMock(return_value=mock_response(status_code=200))
            mock_get_client.return_value = mock_http_client

            assert await client.ping() is True

            mock_http_client.get = AsyncMock(side_effect=httpx.ConnectTimeout("timeout"))
            assert await client.ping() is False

    @pytest.mark.asyncio
    async def test_close(self, client: PokeAPIClient) -> None:
        await client._get_client()
        assert client._client is not None

        await client.close()

        assert client._client is None

    @pytest.mark.asyncio
    async def test_fetch_index_rejects_non_string_fields(self, client: PokeAPIClient) -> None:
        body = {"results": [{"name": "bulbasaur", "url": None}]}

        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.get = AsyncMock(return_value=mock_response(json_data=body))
            mock_get_client.return_value = mock_http_client

            with pytest.raises(PokeAPIClientError, match="Malformed index"):
                await client.fetch_index(limit=1)

    @pytest.mark.asyncio
    async def test_invalid_detail_url_is_client_error(self, client: PokeAPIClient) -> None:
        """URL handling errors surface as PokeAPIClientError, not TypeError."""
        with pytest.raises(PokeAPIClientError, match="Invalid URL"):
            await client.fetch_detail(None)  # type: ignore[arg-type]

        await client.close()


class TestIndexEntry:
    """Tests for IndexEntry parsing."""

    def test_from_api_response(self) -> None:
        entry = IndexEntry.from_api_response({"name": "mew", "url": "https://x/151/"})
        assert entry == IndexEntry("mew", "https://x/151/")

    @pytest.mark.parametrize(
        "data",
        [{"name": "mew", "url": None}, {"name": 151, "url": "https://x/151/"}],
    )
    def test_non_string_fields_rejected(self, data: dict) -> None:
        with pytest.raises(TypeError):
            IndexEntry.from_api_response(data)

    def test_missing_field_rejected(self) -> None:
        with pytest.raises(KeyError):
            IndexEntry.from_api_response({"name": "mew"})
