"""MCP tools for browsing bus routes."""

from busseva_mcp.app import mcp
from busseva_mcp.models.responses import ListRoutesResponse, RouteResult
from busseva_mcp.models.routes import RouteStatus
from busseva_mcp.services.route_service import get_route as _get_route
from busseva_mcp.services.route_service import list_routes as _list_routes


@mcp.tool()
async def list_routes(
    text: str | None = None,
    status: RouteStatus | None = None,
    limit: int = 20,
    offset: int = 0,
) -> ListRoutesResponse:
    """List bus routes in the directory.

    Examples:
        list_routes()  # First 20 routes
        list_routes(text="L238")  # Routes named or stopping at "L238"
        list_routes(status="active", offset=20)  # Second page of active routes

    Args:
        text: Case-insensitive text to find in the bus name, route or stops.
        status: Only routes with this status ("active" or "inactive").
        limit: Maximum number of routes to return (default 20, max 100).
        offset: Number of routes to skip, for paging.

    Returns:
        ListRoutesResponse with routes, count and total_matches.
    """
    if limit < 1:
        limit = 1
    elif limit > 100:
        limit = 100

    if offset < 0:
        offset = 0

    return await _list_routes(text=text, status=status, limit=limit, offset=offset)


@mcp.tool()
async def get_route(route_id: str) -> RouteResult | None:
    """Get full details of one bus route.

    Args:
        route_id: Route ID as returned by search_buses or list_routes.

    Returns:
        RouteResult with stops, schedule and fare, or None if not found
        or the directory could not answer.
    """
    return await _get_route(route_id)
