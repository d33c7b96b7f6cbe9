"""Coordinate utilities, reverse geocoding and current-location retrieval."""

from geoclock.geo.coordinates import (
    calculate_distance,
    format_coordinates,
    generate_maps_url,
    get_sample_coordinates,
    parse_coordinates,
    validate_coordinates,
)
from geoclock.geo.geocoding import reverse_geocode
from geoclock.geo.position import (
    IpApiPositionProvider,
    PositionProvider,
    StaticPositionProvider,
    get_current_location,
)

__all__ = [
    "validate_coordinates",
    "parse_coordinates",
    "format_coordinates",
    "calculate_distance",
    "generate_maps_url",
    "get_sample_coordinates",
    "reverse_geocode",
    "get_current_location",
    "PositionProvider",
    "IpApiPositionProvider",
    "StaticPositionProvider",
]
