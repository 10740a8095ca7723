"""Destination search over the bus directory.

Fetches the route corpus fresh for each request and runs the stop matcher
over it. Directory fetch failures and invalid route records are logged and
reported with api_available=False rather than raised.
"""

import logging

import httpx
from pydantic import ValidationError

from busseva_mcp.data.config import BusSevaConfig, get_config
from busseva_mcp.data.corpus import get_corpus
from busseva_mcp.matching.stop_matcher import MIN_FUZZY_LENGTH, MatchPolicy, StopMatcher
from busseva_mcp.models.responses import (
    RecommendStopsResponse,
    SearchBusesResponse,
    SearchStatus,
)
from busseva_mcp.services.route_service import route_to_result

logger = logging.getLogger(__name__)

# How many specific stops to offer for a bare common-word query
GENERAL_SUGGESTION_LIMIT = 5


async def search_buses(
    query: str,
    suggestion_limit: int | None = None,
    policy: MatchPolicy | None = None,
    config: BusSevaConfig | None = None,
) -> SearchBusesResponse:
    """Find buses that stop at a destination.

    Search strategy (priority order):
    1. Bare common word ("college") with more specific stops -> too_general
    2. Query under 3 chars that no stop contains -> too_short
    3. Fuzzy stop matching -> found, with matching routes
    4. Nothing matched -> not_found, with "did you mean" suggestions

    Args:
        query: Destination text typed by the user.
        suggestion_limit: Maximum suggestions for not_found (config default if None).
        policy: Matching rules (configured flags if None).
        config: Optional configuration override.

    Returns:
        SearchBusesResponse describing the outcome.

    Raises:
        ValueError: If the query is empty after trimming.
    """
    query = query.strip()
    if not query:
        raise ValueError("Search query must not be empty")

    if config is None:
        config = get_config()
    if suggestion_limit is None:
        suggestion_limit = config.suggestion_limit
    if policy is None:
        policy = config.match_policy

    try:
        corpus = await get_corpus(config)
    except (httpx.HTTPError, ValidationError) as e:
        logger.warning(f"Failed to fetch routes for search: {e}")
        return SearchBusesResponse(
            query=query,
            status=SearchStatus.UNAVAILABLE,
            routes=[],
            count=0,
            api_available=False,
        )

    matcher = StopMatcher(policy)

    if matcher.is_common_word(query):
        general = matcher.general_stops(corpus, query, limit=GENERAL_SUGGESTION_LIMIT)
        if general:
            logger.debug(f"Query {query!r} is too general, offering {len(general)} stops")
            return SearchBusesResponse(
                query=query,
                status=SearchStatus.TOO_GENERAL,
                routes=[],
                count=0,
                suggestions=general,
            )

    query_normalized = matcher.normalize(query)
    if len(query_normalized) < MIN_FUZZY_LENGTH and not any(
        query_normalized in matcher.normalize(stop) for stop in matcher.distinct_stops(corpus)
    ):
        return SearchBusesResponse(
            query=query,
            status=SearchStatus.TOO_SHORT,
            routes=[],
            count=0,
        )

    matching = matcher.find_matching_routes(corpus, query)
    if not matching:
        suggestions = matcher.suggest_stops(corpus, query, limit=suggestion_limit)
        logger.debug(f"No routes for {query!r}, {len(suggestions)} suggestions")
        return SearchBusesResponse(
            query=query,
            status=SearchStatus.NOT_FOUND,
            routes=[],
            count=0,
            suggestions=suggestions,
        )

    routes = [route_to_result(route) for route in matching]
    logger.debug(f"Found {len(routes)} routes for {query!r}")
    return SearchBusesResponse(
        query=query,
        status=SearchStatus.FOUND,
        routes=routes,
        count=len(routes),
        exact_stop=matcher.is_exact_stop(corpus, query),
    )


async def recommend_stops(
    query: str,
    limit: int = 5,
    policy: MatchPolicy | None = None,
    config: BusSevaConfig | None = None,
) -> RecommendStopsResponse:
    """Suggest stop names for a partially typed destination.

    Args:
        query: Text typed so far.
        limit: Maximum number of stops to return.
        policy: Matching rules (configured flags if None).
        config: Optional configuration override.

    Returns:
        RecommendStopsResponse; empty for queries under 2 characters.
    """
    query = query.strip()
    if len(query) < 2:
        return RecommendStopsResponse(query=query, stops=[], count=0)

    if config is None:
        config = get_config()
    if policy is None:
        policy = config.match_policy

    try:
        corpus = await get_corpus(config)
    except (httpx.HTTPError, ValidationError) as e:
        logger.warning(f"Failed to fetch routes for recommendations: {e}")
        return RecommendStopsResponse(query=query, stops=[], count=0, api_available=False)

    stops = StopMatcher(policy).recommend_stops(corpus, query, limit=limit)
    return RecommendStopsResponse(query=query, stops=stops, count=len(stops))
