"""Timezone lookup over the static catalog: text search, abbreviations, nearest zone, presets."""

import datetime as dt
import logging
from zoneinfo import ZoneInfo

from munch import Munch

from geoclock.catalog import load_catalog
from geoclock.geo.coordinates import haversine_km
from geoclock.models import LocationTime, TimezoneSearchResult
from geoclock.tz.location_time import IdFactory, create_location_time
from geoclock.tz.tzinfo import TzLoader, utc_now

DEFAULT_RESULTS = 15
MAX_RESULTS = 20
FALLBACK_TIMEZONE = "UTC"

logger = logging.getLogger(__name__)


def search_by_abbreviation(abbreviation: str) -> list[TimezoneSearchResult]:
    """Catalog entries whose id is listed under ``abbreviation`` (case-insensitive), in catalog order."""
    catalog = load_catalog()
    timezones = catalog.abbreviations.get(str(abbreviation).strip().upper())
    if not timezones:
        return []
    return [entry for entry in catalog.popular_timezones if entry.timezone in timezones]


def _matches(entry: TimezoneSearchResult, term: str) -> bool:
    return term in entry.city.lower() or term in entry.country.lower() or term in entry.timezone.lower()


def search_timezones(query: str) -> list[TimezoneSearchResult]:
    """Find catalog timezones for a free-text query.

    An empty query returns the first popular entries as they are. Otherwise
    abbreviation hits come first, then substring hits on city, country or
    timezone id; each id appears once and the list is capped.
    """
    catalog = load_catalog()
    term = (query or "").strip().lower()
    if not term:
        return list(catalog.popular_timezones[:DEFAULT_RESULTS])

    candidates = search_by_abbreviation(term)
    candidates += [entry for entry in catalog.popular_timezones if _matches(entry, term)]

    seen: set[str] = set()
    results = []
    for entry in candidates:
        if entry.timezone in seen:
            continue
        seen.add(entry.timezone)
        results.append(entry)
    return results[:MAX_RESULTS]


def get_timezone_from_coordinates(latitude: float, longitude: float) -> str:
    """Timezone id of the catalog city closest to the point (great-circle distance).

    This is a nearest-city approximation, not a timezone boundary lookup.
    """
    closest, min_distance = None, float("inf")
    for entry in load_catalog().popular_timezones:
        distance = haversine_km(latitude, longitude, entry.coordinates.latitude, entry.coordinates.longitude)
        if distance < min_distance:
            closest, min_distance = entry, distance
    if closest is None:
        logger.warning("Timezone catalog is empty, using %s", FALLBACK_TIMEZONE)
        return FALLBACK_TIMEZONE
    return closest.timezone


def create_locations_from_preset(
    preset_name: str,
    now: dt.datetime | None = None,
    tz_loader: TzLoader = ZoneInfo,
    id_factory: IdFactory | None = None,
) -> list[LocationTime]:
    """LocationTimes for every preset member that is in the catalog; unknown presets give []."""
    catalog = load_catalog()
    now = utc_now(now)
    locations = []
    for item in catalog.presets.get(preset_name, ()):
        entry = catalog.find(item.timezone)
        if entry is None:
            logger.debug("Preset %r: %s is not in the catalog, skipped", preset_name, item.timezone)
            continue
        locations.append(
            create_location_time(
                entry.timezone,
                entry.city,
                entry.country,
                entry.coordinates,
                now=now,
                tz_loader=tz_loader,
                id_factory=id_factory,
            )
        )
    return locations


def get_popular_timezones() -> list[TimezoneSearchResult]:
    return list(load_catalog().popular_timezones)


def get_timezone_presets() -> dict[str, list[Munch]]:
    """Preset name -> list of ``{timezone, name}`` members."""
    return {name: list(items) for name, items in load_catalog().presets.items()}


def get_all_timezone_abbreviations() -> list[str]:
    return sorted(load_catalog().abbreviations)


def get_major_timezones() -> list[Munch]:
    """Standard and daylight names and offsets of the major world zones, in catalog order."""
    return list(load_catalog().major_timezones)
