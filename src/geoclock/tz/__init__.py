"""Timezone facts, location clocks, time differences and catalog search."""

from geoclock.tz.location_time import (
    calculate_time_difference,
    create_location_time,
    format_date,
    format_time,
    generate_timezone_matrix,
    get_timezone_comparison_data,
    is_within_business_hours,
    update_location_time,
)
from geoclock.tz.search import (
    create_locations_from_preset,
    get_all_timezone_abbreviations,
    get_major_timezones,
    get_popular_timezones,
    get_timezone_from_coordinates,
    get_timezone_presets,
    search_by_abbreviation,
    search_timezones,
)
from geoclock.tz.tzinfo import (
    get_time_in_timezone,
    get_timezone_abbreviation,
    get_timezone_info,
    is_dst_by_reference_offsets,
)

__all__ = [
    "get_time_in_timezone",
    "get_timezone_abbreviation",
    "get_timezone_info",
    "is_dst_by_reference_offsets",
    "create_location_time",
    "update_location_time",
    "calculate_time_difference",
    "format_time",
    "format_date",
    "is_within_business_hours",
    "generate_timezone_matrix",
    "get_timezone_comparison_data",
    "search_timezones",
    "search_by_abbreviation",
    "get_timezone_from_coordinates",
    "create_locations_from_preset",
    "get_popular_timezones",
    "get_timezone_presets",
    "get_all_timezone_abbreviations",
    "get_major_timezones",
]
