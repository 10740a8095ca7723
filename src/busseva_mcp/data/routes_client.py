import logging
from urllib.parse import quote

import httpx

from busseva_mcp.data.config import BusSevaConfig
from busseva_mcp.models.routes import ROUTE_LIST, Route

logger = logging.getLogger(__name__)


class RoutesClient:
    """Async HTTP client for the bus directory's route listing.

    Usage:
        async with RoutesClient(config) as client:
            routes = await client.fetch_routes()
    """

    def __init__(self, config: BusSevaConfig):
        """Initialize the client.

        Args:
            config: Configuration with the directory API base URL.
        """
        self._config = config
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "RoutesClient":
        """Enter async context - create HTTP client."""
        self._client = httpx.AsyncClient(
            headers={"Accept": "application/json"},
            timeout=self._config.http_timeout_seconds,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context - close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_routes(self) -> list[Route]:
        """Fetch and parse every route in the directory.

        Returns:
            Routes in the order the backend lists them.

        Raises:
            RuntimeError: If client not initialized.
            httpx.HTTPError: If the HTTP request fails.
        """
        if not self._client:
            raise RuntimeError("Client not initialized - use 'async with'")

        response = await self._client.get(self._config.routes_url)
        response.raise_for_status()

        routes = ROUTE_LIST.validate_python(response.json())
        logger.debug(f"Fetched {len(routes)} routes from {self._config.routes_url}")
        return routes

    async def fetch_route(self, route_id: str) -> Route | None:
        """Fetch a single route by ID.

        The ID is percent-encoded as a single path segment, so "/", "?" and
        dot segments cannot reach another endpoint.

        Returns:
            The route, or None for a blank or dot-only ID or a 404 answer.

        Raises:
            RuntimeError: If client not initialized.
            httpx.HTTPError: If the HTTP request fails for any other reason.
        """
        if not self._client:
            raise RuntimeError("Client not initialized - use 'async with'")

        # "." and ".." survive quoting and would resolve to the listing
        if route_id.strip() in ("", ".", ".."):
            return None

        url = f"{self._config.routes_url}/{quote(route_id, safe='')}"
        response = await self._client.get(url)
        if response.status_code == 404:
            return None
        response.raise_for_status()

        return Route.model_validate(response.json())
