from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class RouteStatus(str, Enum):
    """Service status of a route in the directory."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Route(BaseModel):
    """A bus route record as served by the directory backend.

    Accepts both the backend's camelCase JSON (``_id``, ``imageUrl``,
    ``totalStops``) and snake_case field names. Unknown fields are ignored.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    route_id: str = Field(validation_alias=AliasChoices("route_id", "_id", "id"))
    name: str
    route: str | None = Field(default=None, description="Route description, e.g. 'A - B'")
    stops: list[str] = Field(
        default_factory=list, description="Stop names in physical stop order"
    )
    schedule: str = ""
    fare: str = Field(default="", description="Free-form fare text, e.g. '₹10-₹30'")
    image_url: str | None = Field(
        default=None, validation_alias=AliasChoices("image_url", "imageUrl")
    )
    status: RouteStatus = RouteStatus.ACTIVE
    total_stops: str | None = Field(
        default=None, validation_alias=AliasChoices("total_stops", "totalStops")
    )
    bus_type: str | None = Field(
        default=None, validation_alias=AliasChoices("bus_type", "type")
    )

    @field_validator("stops", mode="before")
    @classmethod
    def _split_stops(cls, value: object) -> object:
        """Accept the admin form's comma-separated stop string and trim names."""
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, list):
            return [stop.strip() for stop in value if isinstance(stop, str) and stop.strip()]
        return value

    @field_validator("name", "route", "schedule", "fare", mode="before")
    @classmethod
    def _strip_text(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


# Validator for the JSON array of routes served by the backend
ROUTE_LIST = TypeAdapter(list[Route])
