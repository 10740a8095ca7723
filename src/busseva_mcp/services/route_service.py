"""Route listing and lookup over the bus directory."""

import logging

import httpx
from pydantic import ValidationError

from busseva_mcp.data.config import BusSevaConfig
from busseva_mcp.data.corpus import get_corpus, get_route_record
from busseva_mcp.matching.labels import bus_type_label
from busseva_mcp.models.responses import ListRoutesResponse, RouteResult
from busseva_mcp.models.routes import Route, RouteStatus

logger = logging.getLogger(__name__)


def route_to_result(route: Route) -> RouteResult:
    """Convert a directory Route to a RouteResult."""
    return RouteResult(
        route_id=route.route_id,
        name=route.name,
        route=route.route,
        stops=list(route.stops),
        schedule=route.schedule,
        fare=route.fare,
        image_url=route.image_url,
        status=route.status,
        total_stops=route.total_stops or str(len(route.stops)),
        type_label=bus_type_label(route.bus_type),
    )


def _matches_text(route: Route, text: str) -> bool:
    """Plain case-insensitive containment on name, description and stops."""
    needle = text.lower()
    return (
        needle in route.name.lower()
        or (route.route is not None and needle in route.route.lower())
        or any(needle in stop.lower() for stop in route.stops)
    )


async def list_routes(
    text: str | None = None,
    status: RouteStatus | None = None,
    limit: int = 20,
    offset: int = 0,
    config: BusSevaConfig | None = None,
) -> ListRoutesResponse:
    """List routes in directory order, optionally filtered.

    Args:
        text: Keep routes whose name, description or any stop contains this text.
        status: Keep only routes with this status.
        limit: Maximum number of routes to return.
        offset: Number of matching routes to skip (for paging).
        config: Optional configuration override.

    Returns:
        ListRoutesResponse with the requested page; api_available=False if
        the directory could not be reached.
    """
    try:
        corpus = await get_corpus(config)
    except (httpx.HTTPError, ValidationError) as e:
        logger.warning(f"Failed to fetch routes: {e}")
        return ListRoutesResponse(routes=[], count=0, api_available=False)

    text = text.strip() if text else None
    matching = [
        route
        for route in corpus
        if (status is None or route.status == status)
        and (not text or _matches_text(route, text))
    ]

    page = matching[offset : offset + limit]
    routes = [route_to_result(route) for route in page]
    return ListRoutesResponse(routes=routes, count=len(routes), total_matches=len(matching))


async def get_route(
    route_id: str,
    config: BusSevaConfig | None = None,
) -> RouteResult | None:
    """Get a single route by its ID.

    Args:
        route_id: The route ID to look up.
        config: Optional configuration override.

    Returns:
        RouteResult if found, None if unknown or the directory could not
        answer (e.g. the backend rejects a malformed ID with a 500).
    """
    try:
        route = await get_route_record(route_id, config)
    except (httpx.HTTPError, ValidationError) as e:
        logger.warning(f"Failed to fetch route {route_id!r}: {e}")
        return None

    if route is None:
        return None
    return route_to_result(route)
