"""Location clocks and time differences between them.

A ``LocationTime`` is built from one snapshot of the current instant; updating
it returns a new instance. Differences compare the *wall clocks* of two
locations, so two records taken at the same instant in New York and Tokyo
differ by the 13 or 14 hours their clocks show, not by zero.
"""

import datetime as dt
import math
import typing as t
import uuid
from dataclasses import replace
from zoneinfo import ZoneInfo

from geoclock.catalog import load_catalog
from geoclock.config import get_config
from geoclock.models import (
    Coordinates,
    LocationTime,
    TimeDifference,
    TimezoneComparison,
    TimezoneComparisonData,
    TimezoneMatrix,
)
from geoclock.tz.tzinfo import TzLoader, describe_zone, load_zone, utc_now

IdFactory = t.Callable[[str, dt.datetime], str]

TIME_FORMATS = {
    "12_HOUR": "%I:%M %p",
    "24_HOUR": "%H:%M",
    "12_HOUR_SECONDS": "%I:%M:%S %p",
    "24_HOUR_SECONDS": "%H:%M:%S",
}
SAME_TIME = "Same time"


def default_location_id(timezone: str, now: dt.datetime) -> str:
    """``America_New_York_1792330000000_1a2b3c4d``: zone, epoch millis and a random suffix."""
    millis = int(now.timestamp() * 1000)
    return f"{timezone.replace('/', '_')}_{millis}_{uuid.uuid4().hex[:8]}"


def format_time(value: dt.datetime, format_24_hour: bool = False, show_seconds: bool = False) -> str:
    """Format a clock time, e.g. ``03:04:05 PM`` or ``15:04``."""
    key = ("24_HOUR" if format_24_hour else "12_HOUR") + ("_SECONDS" if show_seconds else "")
    pattern = get_config(f"time_formats.{key}", None) or TIME_FORMATS[key]
    return value.strftime(pattern)


def format_date(value: dt.datetime | dt.date) -> str:
    """Format like ``Sunday, October 18, 2026``."""
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def is_within_business_hours(value: dt.datetime, start: int | None = None, end: int | None = None) -> bool:
    """True if the local hour of ``value`` is in the ``[start, end)`` business window."""
    start = int(get_config("business_hours.start", 9)) if start is None else start
    end = int(get_config("business_hours.end", 17)) if end is None else end
    return start <= value.hour < end


def _snapshot_fields(timezone: str, now: dt.datetime, tz_loader: TzLoader) -> dict[str, t.Any]:
    zone = load_zone(timezone, tz_loader)
    current_time = now.astimezone(zone or dt.timezone.utc)
    return {
        "timezone": describe_zone(timezone, zone, now),
        "current_time": current_time,
        "formatted_time": format_time(current_time, show_seconds=True),
        "formatted_date": format_date(current_time),
        "is_business_hours": is_within_business_hours(current_time),
    }


def create_location_time(
    timezone: str,
    name: str,
    country: str,
    coordinates: Coordinates,
    now: dt.datetime | None = None,
    tz_loader: TzLoader = ZoneInfo,
    id_factory: IdFactory | None = None,
) -> LocationTime:
    """Build a LocationTime for ``timezone`` from a single snapshot of ``now``."""
    now = utc_now(now)
    return LocationTime(
        id=(id_factory or default_location_id)(timezone, now),
        name=name,
        country=country,
        coordinates=coordinates,
        **_snapshot_fields(timezone, now, tz_loader),
    )


def update_location_time(
    location: LocationTime, now: dt.datetime | None = None, tz_loader: TzLoader = ZoneInfo
) -> LocationTime:
    """Return a copy of ``location`` with its time fields recomputed; the input is left untouched."""
    return replace(location, **_snapshot_fields(location.timezone.timezone, utc_now(now), tz_loader))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _wall(value: dt.datetime) -> dt.datetime:
    return value.replace(tzinfo=None)


def format_difference(total_minutes: int, days: int) -> str:
    """``+5h 30m``, ``-9h 0m (-1 day)`` or ``Same time``."""
    if total_minutes == 0:
        return SAME_TIME
    sign = "+" if total_minutes > 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    text = f"{sign}{hours}h {minutes}m"
    if days:
        day_sign = "+" if days > 0 else "-"
        day_text = "day" if abs(days) == 1 else "days"
        text += f" ({day_sign}{abs(days)} {day_text})"
    return text


def _wall_difference(base: dt.datetime, compare: dt.datetime) -> tuple[dt.timedelta, int]:
    """Wall-clock delta and calendar-day offset between two local times."""
    base_wall, compare_wall = _wall(base), _wall(compare)
    return compare_wall - base_wall, (compare_wall.date() - base_wall.date()).days


def calculate_time_difference(base_location: LocationTime, compare_location: LocationTime) -> TimeDifference:
    """How far ``compare_location``'s clock is ahead of (or behind) ``base_location``'s.

    The hour/minute figures are absolute values of the rounded minute delta;
    the day offset compares calendar dates and is computed separately.
    """
    delta, days = _wall_difference(base_location.current_time, compare_location.current_time)
    total_minutes = _round_half_up(delta.total_seconds() / 60)
    hours, minutes = divmod(abs(total_minutes), 60)
    return TimeDifference(
        location_id=compare_location.id,
        location_name=compare_location.name,
        hours_difference=hours,
        minutes_difference=minutes,
        days_difference=days,
        formatted_difference=format_difference(total_minutes, days),
    )


def generate_timezone_matrix(
    base_timezone: str,
    compare_timezones: t.Iterable[str],
    now: dt.datetime | None = None,
    tz_loader: TzLoader = ZoneInfo,
) -> TimezoneMatrix:
    """Compare ``base_timezone``'s clock with each of ``compare_timezones`` at one instant."""
    now = utc_now(now)

    def local(timezone: str) -> dt.datetime:
        return now.astimezone(load_zone(timezone, tz_loader) or dt.timezone.utc)

    base_time = local(base_timezone)
    comparisons = []
    for timezone in compare_timezones:
        delta, days = _wall_difference(base_time, local(timezone))
        hours_diff = delta.total_seconds() / 3600
        comparisons.append(
            TimezoneComparison(
                timezone=timezone,
                time_difference=format_difference(_round_half_up(delta.total_seconds() / 60), days),
                hours_diff=_round_half_up(hours_diff * 100) / 100,
                days_diff=days,
            )
        )
    return TimezoneMatrix(base_timezone=base_timezone, comparisons=comparisons)


def get_timezone_comparison_data(
    timezones: t.Iterable[str], now: dt.datetime | None = None, tz_loader: TzLoader = ZoneInfo
) -> list[TimezoneComparisonData]:
    """Side-by-side facts for several zones, labelled with catalog city/country where known."""
    now = utc_now(now)
    catalog = load_catalog()
    result = []
    for timezone in timezones:
        zone = load_zone(timezone, tz_loader)
        info = describe_zone(timezone, zone, now)
        entry = catalog.find(timezone)
        result.append(
            TimezoneComparisonData(
                timezone=timezone,
                abbreviation=info.abbreviation,
                current_time=now.astimezone(zone or dt.timezone.utc),
                offset_from_utc=info.gmt_offset,
                offset_string=info.utc_offset,
                is_dst=info.is_dst,
                city=entry.city if entry else timezone.rsplit("/", 1)[-1],
                country=entry.country if entry else "",
            )
        )
    return result
