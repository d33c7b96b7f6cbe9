"""Typed result models for geoclock."""

from __future__ import annotations

import datetime as dt
import enum
import typing as t
from dataclasses import asdict, dataclass, field


class ErrorCode(str, enum.Enum):
    """Failure kinds carried by a failed ``LocationResponse``."""

    INVALID_COORDINATES = "INVALID_COORDINATES"
    NOT_FOUND = "NOT_FOUND"
    NETWORK_ERROR = "NETWORK_ERROR"
    API_ERROR = "API_ERROR"
    RATE_LIMIT = "RATE_LIMIT"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    POSITION_UNAVAILABLE = "POSITION_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"
    UNSUPPORTED = "UNSUPPORTED"


class _DictMixin:  # pylint: disable=too-few-public-methods
    def to_dict(self) -> dict[str, t.Any]:
        """Convert to a plain dictionary (useful for YAML/JSON serialisation)."""
        return asdict(self)  # type: ignore[call-overload]


@dataclass(frozen=True)
class Coordinates(_DictMixin):
    """A point on Earth in signed WGS84 degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class CoordinateValidation(_DictMixin):
    is_valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class LocationInfo(_DictMixin):
    """Address resolved for a coordinate pair."""

    coordinates: Coordinates
    address: str
    city: str
    state: str
    country: str
    postal_code: str
    formatted_address: str
    accuracy: float = 1
    timezone: str | None = None


@dataclass(frozen=True)
class LocationError(_DictMixin):
    code: ErrorCode
    message: str
    details: str | None = None


@dataclass(frozen=True)
class LocationResponse(_DictMixin):
    """Outcome of a geocoding or positioning attempt.

    Either ``success`` is True and ``data`` holds the payload, or it is False
    and ``error`` says why. Never both.
    """

    success: bool
    data: t.Any = None
    error: LocationError | None = None

    @classmethod
    def ok(cls, data: t.Any) -> LocationResponse:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, code: ErrorCode, message: str, details: str | None = None) -> LocationResponse:
        return cls(success=False, error=LocationError(code=code, message=message, details=details))


@dataclass(frozen=True)
class PositionOptions(_DictMixin):
    """What a caller asks of a location provider."""

    enable_high_accuracy: bool = True
    timeout_ms: int = 10_000
    maximum_age_ms: int = 300_000


@dataclass(frozen=True)
class TimezoneInfo(_DictMixin):
    """Facts about an IANA timezone at one instant."""

    timezone: str
    abbreviation: str
    gmt_offset: float  # hours, signed, may be fractional
    is_dst: bool
    utc_offset: str  # "UTC+05:30"


@dataclass(frozen=True)
class LocationTime(_DictMixin):
    """A named place with its clock, all time fields taken from one snapshot."""

    id: str
    name: str
    country: str
    coordinates: Coordinates
    timezone: TimezoneInfo
    current_time: dt.datetime  # aware, in the location's zone
    formatted_time: str
    formatted_date: str
    is_business_hours: bool


@dataclass(frozen=True)
class TimeDifference(_DictMixin):
    location_id: str
    location_name: str
    hours_difference: int
    minutes_difference: int
    days_difference: int
    formatted_difference: str


@dataclass(frozen=True)
class TimezoneSearchResult(_DictMixin):
    """Catalog entry for a popular timezone."""

    timezone: str
    city: str
    country: str
    coordinates: Coordinates
    gmt_offset: float  # standard offset as listed in the catalog


@dataclass(frozen=True)
class TimezoneComparison(_DictMixin):
    timezone: str
    time_difference: str
    hours_diff: float
    days_diff: int


@dataclass(frozen=True)
class TimezoneMatrix(_DictMixin):
    base_timezone: str
    comparisons: list[TimezoneComparison]


@dataclass(frozen=True)
class TimezoneComparisonData(_DictMixin):
    timezone: str
    abbreviation: str
    current_time: dt.datetime
    offset_from_utc: float
    offset_string: str
    is_dst: bool
    city: str
    country: str
