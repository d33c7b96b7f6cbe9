"""Static timezone/location reference data.

The catalog lives in a YAML file (``catalog.path`` in the config) and holds
the popular timezone list, the abbreviation table, the named presets, the
major timezone naming table and a few sample coordinates. It is loaded once
and never modified afterwards.
"""

import typing as t
from dataclasses import dataclass
from functools import lru_cache

from munch import Munch

from geoclock.config import get_config
from geoclock.exceptions import ConfigError
from geoclock.models import Coordinates, TimezoneSearchResult
from geoclock.utils.fs_utils import resolve_path
from geoclock.utils.yaml_utils import yaml_safe_load_file


@dataclass(frozen=True)
class Catalog:
    popular_timezones: tuple[TimezoneSearchResult, ...]
    abbreviations: dict[str, tuple[str, ...]]
    presets: dict[str, tuple[Munch, ...]]
    major_timezones: tuple[Munch, ...]
    sample_coordinates: tuple[Munch, ...]

    def find(self, timezone: str) -> TimezoneSearchResult | None:
        """Return the first popular entry with the given IANA id."""
        return next((entry for entry in self.popular_timezones if entry.timezone == timezone), None)


def _entry(raw: dict[str, t.Any]) -> TimezoneSearchResult:
    return TimezoneSearchResult(
        timezone=str(raw["timezone"]),
        city=str(raw["city"]),
        country=str(raw["country"]),
        coordinates=Coordinates(float(raw["latitude"]), float(raw["longitude"])),
        gmt_offset=float(raw.get("gmt_offset", 0)),
    )


def parse_catalog(data: dict[str, t.Any]) -> Catalog:
    """Build a Catalog from the raw YAML structure."""
    try:
        return Catalog(
            popular_timezones=tuple(_entry(raw) for raw in data.get("popular_timezones") or []),
            abbreviations={
                str(abbr).upper(): tuple(ids or []) for abbr, ids in (data.get("abbreviations") or {}).items()
            },
            presets={
                str(name): tuple(Munch(item) for item in items or [])
                for name, items in (data.get("presets") or {}).items()
            },
            major_timezones=tuple(Munch(item) for item in data.get("major_timezones") or []),
            sample_coordinates=tuple(Munch(item) for item in data.get("sample_coordinates") or []),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ConfigError(f"Malformed timezone catalog: {e!r}") from e


@lru_cache
def load_catalog(path: str | None = None) -> Catalog:
    """Load and cache the catalog from ``path`` or the configured location."""
    catalog_path = resolve_path(path or get_config("catalog.path", "data/catalog.yaml"))
    try:
        data = yaml_safe_load_file(catalog_path)
    except RuntimeError as e:
        raise ConfigError(str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError(f"Timezone catalog '{catalog_path}' must contain a mapping")
    return parse_catalog(data)
