"""Timezone facts at a given instant: local time, UTC offset, abbreviation, DST.

Every function takes an optional ``now`` (aware datetime; naive values are
read as UTC) and an optional ``tz_loader`` (IANA id -> tzinfo, default
``ZoneInfo``), so results can be pinned in tests without patching clocks.
Unknown timezone ids fall back to UTC with a logged warning.
"""

import datetime as dt
import logging
import re
import typing as t
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from geoclock.models import TimezoneInfo

TzLoader = t.Callable[[str], dt.tzinfo]

NUMERIC_TZNAME = re.compile(r"^(?P<sign>[+-])(?P<hh>\d{2})(?P<mm>\d{2})?$")

logger = logging.getLogger(__name__)


def utc_now(now: dt.datetime | None = None) -> dt.datetime:
    """Return ``now`` as an aware UTC datetime, defaulting to the current instant."""
    if now is None:
        return dt.datetime.now(dt.timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=dt.timezone.utc)
    return now.astimezone(dt.timezone.utc)


def load_zone(timezone: str, tz_loader: TzLoader = ZoneInfo) -> dt.tzinfo | None:
    """Return the tzinfo for an IANA id, or None (with a warning) if it is unknown."""
    try:
        return tz_loader(timezone)
    except (ZoneInfoNotFoundError, ValueError, TypeError, OSError) as e:
        logger.warning("Invalid timezone: %r, falling back to UTC (%s)", timezone, e)
        return None


def get_time_in_timezone(
    timezone: str, now: dt.datetime | None = None, tz_loader: TzLoader = ZoneInfo
) -> dt.datetime:
    """Current time as an aware datetime in ``timezone`` (UTC if the id is unknown)."""
    zone = load_zone(timezone, tz_loader)
    return utc_now(now).astimezone(zone or dt.timezone.utc)


def _fallback_abbreviation(timezone: str) -> str:
    return str(timezone).rsplit("/", 1)[-1] or "UTC"


def _abbreviation(local: dt.datetime, timezone: str) -> str:
    name = local.tzname()
    if not name:
        return _fallback_abbreviation(timezone)
    # zones without a letter abbreviation report "+04" / "-0330"; render them as "GMT+4" / "GMT-3:30"
    if match := NUMERIC_TZNAME.match(name):
        hours = int(match["hh"])
        minutes = int(match["mm"] or 0)
        return f"GMT{match['sign']}{hours}" + (f":{minutes:02d}" if minutes else "")
    return name


def get_timezone_abbreviation(
    timezone: str, now: dt.datetime | None = None, tz_loader: TzLoader = ZoneInfo
) -> str:
    """Short display name of the zone at ``now`` (e.g. "PDT"), or the last path segment of the id."""
    zone = load_zone(timezone, tz_loader)
    if zone is None:
        return _fallback_abbreviation(timezone)
    return _abbreviation(utc_now(now).astimezone(zone), timezone)


def offset_hours(offset: dt.timedelta | None) -> float:
    return offset.total_seconds() / 3600 if offset is not None else 0.0


def format_utc_offset(hours: float) -> str:
    """Format an offset in hours as ``UTC+05:30`` / ``UTC-08:00``."""
    sign = "+" if hours >= 0 else "-"
    total_minutes = round(abs(hours) * 60)
    hh, mm = divmod(total_minutes, 60)
    return f"UTC{sign}{hh:02d}:{mm:02d}"


def is_dst_by_reference_offsets(zone: dt.tzinfo, now: dt.datetime) -> bool:
    """Guess DST by comparing the current offset with the smaller of the Jan 1 and Jul 1 offsets.

    Approximate: wrong for zones with several transitions a year or a rule
    change during the year.
    """
    local = now.astimezone(zone)
    january = dt.datetime(local.year, 1, 1, tzinfo=zone).utcoffset()
    july = dt.datetime(local.year, 7, 1, tzinfo=zone).utcoffset()
    if january is None or july is None:
        return False
    return local.utcoffset() != min(january, july)


def is_dst(zone: dt.tzinfo, now: dt.datetime) -> bool:
    """DST flag of ``zone`` at ``now``.

    Uses the zone's own ``dst()``. Zones that report nothing, or a negative
    DST at ``now`` or at either reference date (Europe/Dublin, whose summer
    time is its standard time), fall back to the reference-offset check.
    """
    local = now.astimezone(zone)
    dst = local.dst()
    if dst is None or _reports_negative_dst(zone, local.year, dst):
        return is_dst_by_reference_offsets(zone, now)
    return dst > dt.timedelta(0)


def _reports_negative_dst(zone: dt.tzinfo, year: int, current: dt.timedelta) -> bool:
    references = [dt.datetime(year, month, 1, tzinfo=zone).dst() for month in (1, 7)]
    return any(value is not None and value < dt.timedelta(0) for value in [current, *references])


def describe_zone(timezone: str, zone: dt.tzinfo | None, now: dt.datetime) -> TimezoneInfo:
    """Build TimezoneInfo for an already loaded ``zone`` (None means the id was invalid)."""
    if zone is None:
        return TimezoneInfo(
            timezone=timezone,
            abbreviation=_fallback_abbreviation(timezone),
            gmt_offset=0.0,
            is_dst=False,
            utc_offset=format_utc_offset(0.0),
        )

    local = now.astimezone(zone)
    hours = offset_hours(local.utcoffset())
    return TimezoneInfo(
        timezone=timezone,
        abbreviation=_abbreviation(local, timezone),
        gmt_offset=hours,
        is_dst=is_dst(zone, now),
        utc_offset=format_utc_offset(hours),
    )


def get_timezone_info(timezone: str, now: dt.datetime | None = None, tz_loader: TzLoader = ZoneInfo) -> TimezoneInfo:
    """Return offset, abbreviation and DST flag of ``timezone`` at ``now``."""
    return describe_zone(timezone, load_zone(timezone, tz_loader), utc_now(now))
