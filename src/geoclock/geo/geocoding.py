"""
Reverse geocoding
-----------------
Converts geographic coordinates to a human-readable address with
OpenStreetMap's Nominatim API. One request per call, no cache, no retries.
"""

import logging
import typing as t

import requests

from geoclock.config import get_config
from geoclock.geo.coordinates import validate_coordinates
from geoclock.models import Coordinates, ErrorCode, LocationInfo, LocationResponse
from geoclock.utils.trace_utils import str_exc

NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org/reverse"
USER_AGENT = "geoclock/0.1.0"
DEFAULT_ZOOM = 18
# Nominatim reports no accuracy score
NOMINATIM_ACCURACY = 1

logger = logging.getLogger(__name__)


def _first(address: dict[str, t.Any], *keys: str) -> str:
    return next((str(address[key]) for key in keys if address.get(key)), "")


def _to_float(value: t.Any, fallback: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return fallback


def parse_nominatim_response(data: dict[str, t.Any], requested: Coordinates) -> LocationInfo:
    """Decompose a Nominatim reverse response into a LocationInfo.

    The timezone is the one of the nearest catalog city.
    """
    # geoclock.tz.search imports this package
    from geoclock.tz.search import get_timezone_from_coordinates  # pylint: disable=import-outside-toplevel

    address = data.get("address") or {}
    coordinates = Coordinates(
        latitude=_to_float(data.get("lat"), requested.latitude),
        longitude=_to_float(data.get("lon"), requested.longitude),
    )
    return LocationInfo(
        coordinates=coordinates,
        address=_first(address, "road"),
        city=_first(address, "city", "town", "village"),
        state=_first(address, "state", "region"),
        country=_first(address, "country"),
        postal_code=_first(address, "postcode"),
        formatted_address=str(data["display_name"]),
        accuracy=NOMINATIM_ACCURACY,
        timezone=get_timezone_from_coordinates(coordinates.latitude, coordinates.longitude),
    )


def reverse_geocode(coordinates: Coordinates, *, session: requests.Session | None = None) -> LocationResponse:
    """Resolve coordinates to an address.

    Returns a LocationResponse; failures are reported in it, never raised.

    Args:
        coordinates: Point to resolve.
        session: Optional requests session (connection reuse, custom adapters).
    """
    validation = validate_coordinates(coordinates.latitude, coordinates.longitude)
    if not validation.is_valid:
        return LocationResponse.fail(
            ErrorCode.INVALID_COORDINATES, "Invalid coordinates", details=", ".join(validation.errors)
        )

    params = {
        "format": "json",
        "lat": coordinates.latitude,
        "lon": coordinates.longitude,
        "zoom": get_config("geocoding.zoom", DEFAULT_ZOOM),
        "addressdetails": 1,
    }
    headers = {"User-Agent": get_config("geocoding.user_agent", USER_AGENT)}
    url = get_config("geocoding.url", NOMINATIM_BASE_URL)

    try:
        response = (session or requests).get(
            url, params=params, headers=headers, timeout=get_config("geocoding.timeout", None)
        )

        if response.status_code == 429:
            logger.warning("Geocoding rate limited for %s", coordinates)
            return LocationResponse.fail(
                ErrorCode.RATE_LIMIT,
                "Too many requests to the geocoding service",
                details=f"HTTP {response.status_code}: {response.reason}",
            )
        if not response.ok:
            logger.warning("Geocoding HTTP error (%s) for %s", response.status_code, coordinates)
            return LocationResponse.fail(
                ErrorCode.API_ERROR,
                "Failed to fetch location information",
                details=f"HTTP {response.status_code}: {response.reason}",
            )

        try:
            data = response.json()
        except ValueError:
            data = None

        if not isinstance(data, dict) or not data.get("display_name"):
            logger.info("No address found for %s", coordinates)
            return LocationResponse.fail(ErrorCode.NOT_FOUND, "No location found for the provided coordinates")

        logger.info("Successfully geocoded %s", coordinates)
        return LocationResponse.ok(parse_nominatim_response(data, coordinates))

    except (requests.ConnectionError, requests.Timeout) as e:
        logger.error("Network error while geocoding %s: %s", coordinates, str_exc(e))
        return LocationResponse.fail(
            ErrorCode.NETWORK_ERROR,
            "Network error occurred. Please check your internet connection.",
            details=str(e),
        )
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Unexpected error during geocoding %s: %s", coordinates, str_exc(e))
        return LocationResponse.fail(ErrorCode.API_ERROR, "Failed to fetch location information", details=str(e))
