"""Tests for MCP tool argument handling."""

from unittest.mock import AsyncMock, patch

from busseva_mcp.models.responses import (
    ListRoutesResponse,
    RecommendStopsResponse,
    SearchBusesResponse,
    SearchStatus,
)
from busseva_mcp.tools.route_tools import list_routes
from busseva_mcp.tools.search_tools import recommend_stops, search_buses


async def test_search_buses_clamps_suggestion_limit():
    """Suggestion limit should be clamped to 1-10."""
    response = SearchBusesResponse(
        query="howra", status=SearchStatus.NOT_FOUND, routes=[], count=0
    )
    with patch(
        "busseva_mcp.tools.search_tools._search_buses", new=AsyncMock(return_value=response)
    ) as mock_search:
        await search_buses("howra", suggestion_limit=50)
        await search_buses("howra", suggestion_limit=0)

    assert mock_search.await_args_list[0].kwargs == {"query": "howra", "suggestion_limit": 10}
    assert mock_search.await_args_list[1].kwargs == {"query": "howra", "suggestion_limit": 1}


async def test_recommend_stops_clamps_limit():
    """Recommendation limit should be clamped to 1-20."""
    response = RecommendStopsResponse(query="how", stops=[], count=0)
    with patch(
        "busseva_mcp.tools.search_tools._recommend_stops", new=AsyncMock(return_value=response)
    ) as mock_recommend:
        await recommend_stops("how", limit=100)

    assert mock_recommend.await_args.kwargs == {"query": "how", "limit": 20}


async def test_list_routes_clamps_paging():
    """Listing limit and offset should be clamped."""
    response = ListRoutesResponse(routes=[], count=0)
    with patch(
        "busseva_mcp.tools.route_tools._list_routes", new=AsyncMock(return_value=response)
    ) as mock_list:
        await list_routes(limit=500, offset=-3)

    assert mock_list.await_args.kwargs == {
        "text": None,
        "status": None,
        "limit": 100,
        "offset": 0,
    }
