"""Fuzzy matching of destinations against bus stop names."""

from busseva_mcp.matching.labels import BusType, bus_type_label
from busseva_mcp.matching.stop_matcher import (
    COMMON_WORDS,
    MatchPolicy,
    StopMatcher,
    edit_distance,
    find_matching_routes,
    is_fuzzy_match,
    normalize,
    suggest_stops,
)

__all__ = [
    # Matcher
    "StopMatcher",
    "MatchPolicy",
    "COMMON_WORDS",
    # Operations
    "normalize",
    "edit_distance",
    "is_fuzzy_match",
    "find_matching_routes",
    "suggest_stops",
    # Labels
    "BusType",
    "bus_type_label",
]
