"""Tests for the bus directory HTTP client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from busseva_mcp.data.config import BusSevaConfig
from busseva_mcp.data.routes_client import RoutesClient


def create_routes_response() -> list[dict]:
    """Create a sample /buses response for testing."""
    return [
        {
            "_id": "65f001",
            "name": "L238",
            "route": "Champadali Bus Stand - Howrah Station",
            "stops": ["Champadali Bus Stand", "Howrah Station"],
            "imageUrl": "https://example.com/default-bus.jpg",
            "status": "active",
            "schedule": "Every 15-20 minutes",
            "fare": "₹10-₹30",
            "totalStops": "14 stops",
            "__v": 0,
        },
        {
            "_id": "65f002",
            "name": "44A",
            "route": "Howrah Station - Saltlake",
            "stops": ["Howrah Station", "Saltlake"],
            "schedule": "Every 10-15 minutes",
            "fare": "₹10-₹25",
        },
    ]


@pytest.fixture
def config() -> BusSevaConfig:
    """Create a test config."""
    return BusSevaConfig(BUSSEVA_API_URL="https://example.com/api/")


@pytest.mark.asyncio
async def test_fetch_routes_parses_json(config: BusSevaConfig):
    """Test parsing the route listing from JSON."""
    mock_response = MagicMock()
    mock_response.json.return_value = create_routes_response()

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(return_value=mock_response)
        mock_client_class.return_value = mock_client

        async with RoutesClient(config) as client:
            routes = await client.fetch_routes()

    mock_client.get.assert_awaited_once_with("https://example.com/api/buses")
    assert len(routes) == 2
    assert routes[0].route_id == "65f001"
    assert routes[0].stops == ["Champadali Bus Stand", "Howrah Station"]
    assert routes[0].total_stops == "14 stops"
    assert routes[1].image_url is None


@pytest.mark.asyncio
async def test_fetch_route_by_id(config: BusSevaConfig):
    """Test fetching a single route."""
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.json.return_value = create_routes_response()[1]

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(return_value=mock_response)
        mock_client_class.return_value = mock_client

        async with RoutesClient(config) as client:
            route = await client.fetch_route("65f002")

    mock_client.get.assert_awaited_once_with("https://example.com/api/buses/65f002")
    assert route is not None
    assert route.name == "44A"


@pytest.mark.asyncio
async def test_fetch_route_not_found(config: BusSevaConfig):
    """Test that a 404 yields None."""
    mock_response = MagicMock()
    mock_response.status_code = 404

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(return_value=mock_response)
        mock_client_class.return_value = mock_client

        async with RoutesClient(config) as client:
            route = await client.fetch_route("missing")

    assert route is None
    mock_response.raise_for_status.assert_not_called()


@pytest.mark.asyncio
async def test_fetch_routes_propagates_http_error(config: BusSevaConfig):
    """Test that HTTP errors propagate to the caller."""
    mock_response = MagicMock()
    mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
        "500 Server Error", request=MagicMock(), response=MagicMock()
    )

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(return_value=mock_response)
        mock_client_class.return_value = mock_client

        with pytest.raises(httpx.HTTPStatusError):
            async with RoutesClient(config) as client:
                await client.fetch_routes()


@pytest.mark.asyncio
async def test_client_requires_async_context(config: BusSevaConfig):
    """Test that client methods fail without async context."""
    client = RoutesClient(config)

    with pytest.raises(RuntimeError, match="Client not initialized"):
        await client.fetch_routes()


@pytest.mark.asyncio
async def test_client_uses_configured_timeout():
    """Test that the client passes the configured timeout."""
    config = BusSevaConfig(BUSSEVA_HTTP_TIMEOUT=5)
    mock_response = MagicMock()
    mock_response.json.return_value = []

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(return_value=mock_response)
        mock_client_class.return_value = mock_client

        async with RoutesClient(config) as client:
            await client.fetch_routes()

        mock_client_class.assert_called_once()
        call_kwargs = mock_client_class.call_args.kwargs
        assert call_kwargs["timeout"] == 5.0


def directory_transport(requested: list[bytes]) -> httpx.MockTransport:
    """Create a transport answering like the directory backend.

    Only the listing and route "abc" exist; any other path is answered with
    the 500 the backend gives for an ID it cannot parse.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.raw_path)
        if request.url.raw_path == b"/api/buses":
            return httpx.Response(200, json=create_routes_response())
        if request.url.raw_path == b"/api/buses/abc":
            return httpx.Response(200, json={"_id": "abc", "name": "ABC", "stops": []})
        return httpx.Response(500, json={"message": "Cast to ObjectId failed"})

    return httpx.MockTransport(handler)


class TestFetchRouteEscaping:
    """Tests that route IDs cannot reach another endpoint."""

    @pytest.fixture
    def requested(self) -> list[bytes]:
        return []

    @pytest.fixture
    def patched_client(self, requested: list[bytes]):
        real_client = httpx.AsyncClient
        transport = directory_transport(requested)
        with patch(
            "httpx.AsyncClient",
            side_effect=lambda **kwargs: real_client(transport=transport, **kwargs),
        ):
            yield

    async def test_plain_id(self, config: BusSevaConfig, requested, patched_client) -> None:
        """Test a plain ID is requested as-is."""
        async with RoutesClient(config) as client:
            route = await client.fetch_route("abc")

        assert route is not None
        assert route.route_id == "abc"
        assert requested == [b"/api/buses/abc"]

    async def test_slash_and_dots_are_encoded(
        self, config: BusSevaConfig, requested, patched_client
    ) -> None:
        """Test "abc/.." stays one path segment instead of hitting the listing."""
        async with RoutesClient(config) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.fetch_route("abc/..")

        assert requested == [b"/api/buses/abc%2F.."]

    async def test_query_string_is_encoded(
        self, config: BusSevaConfig, requested, patched_client
    ) -> None:
        """Test "?x=1" is not sent as a query string on the listing."""
        async with RoutesClient(config) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.fetch_route("?x=1")

        assert requested == [b"/api/buses/%3Fx%3D1"]

    async def test_traversal_does_not_resolve_to_other_route(
        self, config: BusSevaConfig, requested, patched_client
    ) -> None:
        """Test "abc/../abc" is not treated as route "abc"."""
        async with RoutesClient(config) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.fetch_route("abc/../abc")

        assert requested == [b"/api/buses/abc%2F..%2Fabc"]

    @pytest.mark.parametrize("route_id", ["", " ", ".", ".."])
    async def test_blank_and_dot_ids_are_not_requested(
        self, config: BusSevaConfig, requested, patched_client, route_id: str
    ) -> None:
        """Test IDs that would resolve to the listing return None without a request."""
        async with RoutesClient(config) as client:
            assert await client.fetch_route(route_id) is None

        assert requested == []
