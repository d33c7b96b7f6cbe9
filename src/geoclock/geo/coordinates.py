"""Coordinate validation, formatting and great-circle helpers."""

import math
import typing as t
from numbers import Real

from geoclock.catalog import load_catalog
from geoclock.config import get_config
from geoclock.models import Coordinates, CoordinateValidation

EARTH_RADIUS_KM = 6371.0
MAPS_URL = "https://www.google.com/maps?q={latitude},{longitude}"


def _bounds(axis: str) -> tuple[float, float]:
    bounds = get_config(f"coordinates.bounds.{axis}", None) or {}
    default = 90 if axis == "latitude" else 180
    return bounds.get("min", -default), bounds.get("max", default)


def _is_real(value: t.Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def validate_coordinates(latitude: t.Any, longitude: t.Any) -> CoordinateValidation:
    """Check a latitude/longitude pair.

    All checks run, so several messages may come back at once.
    """
    errors: list[str] = []
    lat_min, lat_max = _bounds("latitude")
    lng_min, lng_max = _bounds("longitude")
    lat_ok, lng_ok = _is_real(latitude), _is_real(longitude)

    if not (lat_ok and lng_ok):
        errors.append("Coordinates must be valid numbers")
    if lat_ok and not lat_min <= latitude <= lat_max:
        errors.append(f"Latitude must be between {lat_min} and {lat_max}")
    if lng_ok and not lng_min <= longitude <= lng_max:
        errors.append(f"Longitude must be between {lng_min} and {lng_max}")

    return CoordinateValidation(is_valid=not errors, errors=errors)


def parse_coordinates(lat_text: str, lng_text: str) -> Coordinates | None:
    """Parse two text fields into Coordinates, or None if either is not a real number."""
    # float() takes digit group underscores ("1_0"), plain decimal input does not
    if "_" in str(lat_text) or "_" in str(lng_text):
        return None
    try:
        lat = float(str(lat_text).strip())
        lng = float(str(lng_text).strip())
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return None
    return Coordinates(lat, lng)


def format_coordinates(coordinates: Coordinates) -> str:
    """Format as ``40.712800°N, 74.006000°W``."""
    lat, lng = coordinates.latitude, coordinates.longitude
    lat_dir = "N" if lat >= 0 else "S"
    lng_dir = "E" if lng >= 0 else "W"
    return f"{abs(lat):.6f}°{lat_dir}, {abs(lng):.6f}°{lng_dir}"


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometers."""
    radius = float(get_config("coordinates.earth_radius_km", EARTH_RADIUS_KM))
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return radius * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def calculate_distance(coord1: Coordinates, coord2: Coordinates) -> float:
    """Haversine distance between two Coordinates in kilometers."""
    return haversine_km(coord1.latitude, coord1.longitude, coord2.latitude, coord2.longitude)


def generate_maps_url(coordinates: Coordinates) -> str:
    """Return a map viewer link for the point. The URL is not fetched."""
    template = get_config("coordinates.maps_url", MAPS_URL)
    return template.format(latitude=coordinates.latitude, longitude=coordinates.longitude)


def get_sample_coordinates() -> list[tuple[str, Coordinates]]:
    """Return (name, Coordinates) pairs of well-known places from the catalog."""
    return [
        (sample.name, Coordinates(float(sample.latitude), float(sample.longitude)))
        for sample in load_catalog().sample_coordinates
    ]
