"""MCP tools for destination search and stop autocomplete."""

from busseva_mcp.app import mcp
from busseva_mcp.models.responses import RecommendStopsResponse, SearchBusesResponse
from busseva_mcp.services.search_service import recommend_stops as _recommend_stops
from busseva_mcp.services.search_service import search_buses as _search_buses


@mcp.tool()
async def search_buses(
    destination: str,
    suggestion_limit: int = 3,
) -> SearchBusesResponse:
    """Find buses that stop at a destination, tolerating typos.

    Matching rules:
    - Destinations under 3 characters must appear verbatim in a stop name
    - Otherwise each word may be off by about one edit per three letters
      (e.g. "Howra" finds "Howrah Station")
    - A bare generic word like "college" or "station" returns
      status=too_general with more specific stops to pick from

    Examples:
        search_buses("Howrah")  # status=found, routes through Howrah Station
        search_buses("Santragchi")  # Typo -> still finds Santragachi
        search_buses("college")  # status=too_general, suggestions=["BT College", ...]

    Args:
        destination: Stop or place name to travel to.
        suggestion_limit: Maximum "did you mean" suggestions when nothing matches (1-10).

    Returns:
        SearchBusesResponse with:
        - status: found, not_found, too_general, too_short or unavailable
        - routes: Matching buses in directory order
        - suggestions: Stop names to try when status is not_found or too_general
    """
    if suggestion_limit < 1:
        suggestion_limit = 1
    elif suggestion_limit > 10:
        suggestion_limit = 10

    return await _search_buses(query=destination, suggestion_limit=suggestion_limit)


@mcp.tool()
async def recommend_stops(
    partial: str,
    limit: int = 5,
) -> RecommendStopsResponse:
    """Autocomplete stop names from partially typed text.

    Examples:
        recommend_stops("how")  # ["Howrah Station", ...]
        recommend_stops("champa")  # ["Champadali Bus Stand"]

    Args:
        partial: Text typed so far (at least 2 characters).
        limit: Maximum number of stops to return (default 5, max 20).

    Returns:
        RecommendStopsResponse with stops ranked best first.
    """
    if limit < 1:
        limit = 1
    elif limit > 20:
        limit = 20

    return await _recommend_stops(query=partial, limit=limit)
