from enum import Enum


class BusType(str, Enum):
    """Display category of a bus service."""

    AC = "AC"
    MINI = "Mini"
    EXPRESS = "Express"
    REGULAR = "Regular"


def bus_type_label(bus_type: str | None) -> BusType:
    """Classify a free-text bus type hint.

    Checks are substring based and ordered, so "AC Express" is AC.

    Examples:
        "AC Deluxe" -> BusType.AC
        "mini bus" -> BusType.MINI
        None -> BusType.REGULAR
    """
    if not bus_type:
        return BusType.REGULAR

    lowered = bus_type.lower()
    if "ac" in lowered:
        return BusType.AC
    if "mini" in lowered:
        return BusType.MINI
    if "express" in lowered:
        return BusType.EXPRESS
    return BusType.REGULAR
