"""geoclock: reverse geocoding and world clock helpers.

Coordinates are validated, formatted and resolved to addresses through
OpenStreetMap's Nominatim (``geoclock.geo``); timezones are described,
compared and searched against a static catalog (``geoclock.tz``).
"""

__version__ = "0.1.0"
