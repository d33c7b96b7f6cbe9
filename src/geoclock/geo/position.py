"""Current-location retrieval through a pluggable location provider.

A provider stands in for the host's location capability. It either returns
a fix or raises ``PositionError`` with one of the ``ErrorCode`` position
codes; ``get_current_location`` turns both into a ``LocationResponse``.
"""

import logging
import time
from abc import ABC, abstractmethod

import requests

from geoclock.config import get_config
from geoclock.exceptions import PositionError
from geoclock.models import Coordinates, ErrorCode, LocationResponse, PositionOptions
from geoclock.utils.trace_utils import str_exc

IP_API_URL = "http://ip-api.com/json/"

POSITION_ERROR_MESSAGES = {
    ErrorCode.PERMISSION_DENIED: "Location access denied by user",
    ErrorCode.POSITION_UNAVAILABLE: "Location information unavailable",
    ErrorCode.TIMEOUT: "Location request timed out",
}
GENERIC_POSITION_MESSAGE = "Failed to get current location"

logger = logging.getLogger(__name__)


class PositionProvider(ABC):
    """Source of one-shot position fixes."""

    @abstractmethod
    def get_position(self, options: PositionOptions) -> Coordinates:
        """Return the current position or raise PositionError."""


class StaticPositionProvider(PositionProvider):
    """Always reports the same position (pinned location, tests)."""

    def __init__(self, coordinates: Coordinates):
        self.coordinates = coordinates

    def get_position(self, options: PositionOptions) -> Coordinates:
        return self.coordinates


class IpApiPositionProvider(PositionProvider):
    """Approximate position from the public IP address via ip-api.com.

    The last fix is reused while it is younger than ``options.maximum_age_ms``.
    """

    def __init__(self, url: str | None = None, session: requests.Session | None = None, clock=time.monotonic):
        self.url = url or get_config("geolocation.ip_api_url", IP_API_URL)
        self.session = session
        self._clock = clock
        self._last_fix: tuple[float, Coordinates] | None = None

    def get_position(self, options: PositionOptions) -> Coordinates:
        now = self._clock()
        if self._last_fix is not None:
            fixed_at, coordinates = self._last_fix
            if (now - fixed_at) * 1000 < options.maximum_age_ms:
                return coordinates

        try:
            response = (self.session or requests).get(self.url, timeout=options.timeout_ms / 1000)
        except requests.Timeout as e:
            raise PositionError(ErrorCode.TIMEOUT, str(e)) from e
        except requests.RequestException as e:
            raise PositionError(ErrorCode.POSITION_UNAVAILABLE, str(e)) from e

        if response.status_code == 403:
            raise PositionError(ErrorCode.PERMISSION_DENIED, f"HTTP {response.status_code}: {response.reason}")
        if not response.ok:
            raise PositionError(ErrorCode.POSITION_UNAVAILABLE, f"HTTP {response.status_code}: {response.reason}")

        try:
            data = response.json()
            if data.get("status") != "success":
                reason = data.get("message") or data.get("status") or "unexpected response"
                raise PositionError(ErrorCode.POSITION_UNAVAILABLE, str(reason))
            coordinates = Coordinates(float(data["lat"]), float(data["lon"]))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise PositionError(ErrorCode.POSITION_UNAVAILABLE, f"Malformed position response: {e!r}") from e

        self._last_fix = (now, coordinates)
        return coordinates


def default_position_options() -> PositionOptions:
    """Position options from the ``geolocation`` config section."""
    return PositionOptions(
        enable_high_accuracy=bool(get_config("geolocation.enable_high_accuracy", True)),
        timeout_ms=int(get_config("geolocation.timeout_ms", 10_000)),
        maximum_age_ms=int(get_config("geolocation.maximum_age_ms", 300_000)),
    )


def get_current_location(
    provider: PositionProvider | None = None, options: PositionOptions | None = None
) -> LocationResponse:
    """Ask ``provider`` for one position fix.

    Returns a LocationResponse whose ``data`` is Coordinates on success.
    Without a provider the host has no location capability and the result
    is an UNSUPPORTED failure.
    """
    if provider is None:
        return LocationResponse.fail(ErrorCode.UNSUPPORTED, "Geolocation is not supported by this host")

    try:
        return LocationResponse.ok(provider.get_position(options or default_position_options()))
    except PositionError as e:
        try:
            code = ErrorCode(e.code)
        except ValueError:
            code = ErrorCode.API_ERROR
        logger.warning("Position provider %s failed: %s", type(provider).__name__, str_exc(e))
        return LocationResponse.fail(code, POSITION_ERROR_MESSAGES.get(code, GENERIC_POSITION_MESSAGE), details=str(e))
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Position provider %s crashed: %s", type(provider).__name__, str_exc(e))
        return LocationResponse.fail(ErrorCode.API_ERROR, GENERIC_POSITION_MESSAGE, details=str_exc(e))
