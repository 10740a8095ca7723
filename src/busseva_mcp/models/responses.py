from enum import Enum

from pydantic import BaseModel, Field

from busseva_mcp.matching.labels import BusType
from busseva_mcp.models.routes import RouteStatus


class SearchStatus(str, Enum):
    """Outcome of a destination search."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    TOO_GENERAL = "too_general"  # bare common word like "college"
    TOO_SHORT = "too_short"  # under 3 chars and not part of any stop
    UNAVAILABLE = "unavailable"  # route directory could not be reached


class RouteResult(BaseModel):
    route_id: str
    name: str = Field(description="Bus number or service name, e.g. 'L238'")
    route: str | None = Field(default=None, description="Route description, e.g. 'A - B'")
    stops: list[str] = Field(description="Stop names in physical stop order")
    schedule: str
    fare: str
    image_url: str | None = None
    status: RouteStatus
    total_stops: str | None = None
    type_label: BusType = Field(description="AC, Mini, Express or Regular")


class SearchBusesResponse(BaseModel):
    query: str = Field(description="Original query string (trimmed)")
    status: SearchStatus
    routes: list[RouteResult] = Field(description="Matching routes in directory order")
    count: int = Field(description="Number of routes returned")
    suggestions: list[str] = Field(
        default_factory=list,
        description="Stop names to try instead (not_found and too_general only)",
    )
    exact_stop: bool = Field(
        default=False, description="True if the query is exactly a known stop name"
    )
    api_available: bool = Field(
        default=True, description="False if the route directory could not be reached"
    )


class RecommendStopsResponse(BaseModel):
    query: str
    stops: list[str] = Field(description="Stop names, best candidates first")
    count: int = Field(description="Number of stops returned")
    api_available: bool = True


class ListRoutesResponse(BaseModel):
    routes: list[RouteResult]
    count: int = Field(description="Number of routes returned")
    total_matches: int | None = Field(
        default=None, description="Total matches before limit/offset applied"
    )
    api_available: bool = True
