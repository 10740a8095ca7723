"""Route corpus loading from a JSON file or the directory API."""

import json
import logging
from pathlib import Path

from busseva_mcp.data.config import BusSevaConfig, get_config
from busseva_mcp.data.routes_client import RoutesClient
from busseva_mcp.models.routes import ROUTE_LIST, Route

logger = logging.getLogger(__name__)

_ID_KEYS = ("route_id", "_id", "id")


def load_routes_file(path: Path) -> list[Route]:
    """Load route records from a JSON array file.

    Records without an ID (e.g. seed data written before the backend
    assigned one) get a positional ID "route-1", "route-2", ...

    Args:
        path: Path to the JSON file.

    Returns:
        Routes in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file is not a JSON array of route records.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Routes file not found at {path}. Set BUSSEVA_ROUTES_FILE or unset it to use the API."
        )

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in routes file {path}: {e}") from e

    if not isinstance(raw, list):
        raise ValueError(f"Routes file {path} must contain a JSON array")

    for position, record in enumerate(raw, start=1):
        if isinstance(record, dict) and not any(key in record for key in _ID_KEYS):
            record["route_id"] = f"route-{position}"

    # pydantic.ValidationError is a ValueError subclass
    routes = ROUTE_LIST.validate_python(raw)
    logger.info(f"Loaded {len(routes)} routes from {path}")
    return routes


async def get_corpus(config: BusSevaConfig | None = None) -> list[Route]:
    """Get the full route corpus for one request.

    The corpus is read fresh on every call; nothing is cached.

    Args:
        config: Optional configuration override.

    Raises:
        FileNotFoundError: If a routes file is configured but missing.
        httpx.HTTPError: If the directory API request fails.
        pydantic.ValidationError: If a route record is malformed.
    """
    if config is None:
        config = get_config()

    if config.routes_file is not None:
        return load_routes_file(config.routes_file)

    async with RoutesClient(config) as client:
        return await client.fetch_routes()


async def get_route_record(route_id: str, config: BusSevaConfig | None = None) -> Route | None:
    """Look up one route by ID from the configured source."""
    if config is None:
        config = get_config()

    if config.routes_file is not None:
        for route in load_routes_file(config.routes_file):
            if route.route_id == route_id:
                return route
        return None

    async with RoutesClient(config) as client:
        return await client.fetch_route(route_id)
