"""geoclock command line.

Reverse geocode a point: geoclock geocode 40.7128 -74.0060
Where am I (IP based):   geoclock here --reverse
Clock facts of a zone:   geoclock tz Asia/Kolkata
Compare clocks:          geoclock diff America/New_York Europe/London Asia/Tokyo
"""

import sys
import typing as t

import click

from geoclock.config import get_config
from geoclock.geo.coordinates import (
    calculate_distance,
    format_coordinates,
    generate_maps_url,
    validate_coordinates,
)
from geoclock.geo.geocoding import reverse_geocode
from geoclock.geo.position import IpApiPositionProvider, get_current_location
from geoclock.models import Coordinates, LocationResponse
from geoclock.tz.location_time import generate_timezone_matrix, get_timezone_comparison_data
from geoclock.tz.search import (
    create_locations_from_preset,
    get_timezone_from_coordinates,
    get_timezone_presets,
    search_by_abbreviation,
    search_timezones,
)
from geoclock.tz.tzinfo import get_timezone_info
from geoclock.utils.log_utils import get_logger, setup_logging
from geoclock.utils.yaml_utils import yaml_dump_cozy

# negative coordinates ("-74.0060") must not be parsed as options
COORDINATE_ARGS = {"ignore_unknown_options": True}

logger = get_logger(__name__)


def _echo_yaml(data: t.Any) -> None:
    click.echo(yaml_dump_cozy(data).strip())


def _echo_response(response: LocationResponse) -> None:
    """Print a LocationResponse; a failed one ends the process with status 1."""
    _echo_yaml(response.to_dict())
    if not response.success:
        sys.exit(1)


def _checked_coordinates(latitude: float, longitude: float) -> Coordinates:
    validation = validate_coordinates(latitude, longitude)
    if not validation.is_valid:
        raise click.BadParameter("; ".join(validation.errors))
    return Coordinates(latitude, longitude)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Log level on stderr (default: logging.level from config)",
)
def cli(log_level):
    """Reverse geocoding and world clock tools.

    Output is YAML on stdout; logs go to stderr.
    """
    setup_logging(log_level or get_config("logging.level", "WARNING"))


@cli.command(name="geocode", context_settings=COORDINATE_ARGS)
@click.argument("latitude", type=float)
@click.argument("longitude", type=float)
def cli_command_geocode(latitude, longitude):
    """Resolve a point to an address (OpenStreetMap Nominatim).

    Examples:
        geoclock geocode 51.5074 -0.1278
    """
    _echo_response(reverse_geocode(Coordinates(latitude, longitude)))


@cli.command(name="here")
@click.option("--reverse", "-r", is_flag=True, help="Also resolve the position to an address")
def cli_command_here(reverse):
    """Approximate current position from the public IP address."""
    response = get_current_location(IpApiPositionProvider())
    if reverse and response.success:
        response = reverse_geocode(response.data)
    _echo_response(response)


@cli.command(name="distance", context_settings=COORDINATE_ARGS)
@click.argument("lat1", type=float)
@click.argument("lon1", type=float)
@click.argument("lat2", type=float)
@click.argument("lon2", type=float)
def cli_command_distance(lat1, lon1, lat2, lon2):
    """Great-circle distance between two points in kilometers."""
    start = _checked_coordinates(lat1, lon1)
    end = _checked_coordinates(lat2, lon2)
    _echo_yaml(
        {
            "from": format_coordinates(start),
            "to": format_coordinates(end),
            "distance_km": round(calculate_distance(start, end), 3),
        }
    )


@cli.command(name="maps", context_settings=COORDINATE_ARGS)
@click.argument("latitude", type=float)
@click.argument("longitude", type=float)
def cli_command_maps(latitude, longitude):
    """Print a map link for the point."""
    click.echo(generate_maps_url(_checked_coordinates(latitude, longitude)))


@cli.command(name="tz")
@click.argument("timezones", nargs=-1, required=True)
def cli_command_tz(timezones):
    """Offset, abbreviation and DST flag of one or more IANA timezones.

    Examples:
        geoclock tz Europe/Dublin
        geoclock tz America/New_York Asia/Tokyo
    """
    if len(timezones) == 1:
        _echo_yaml(get_timezone_info(timezones[0]).to_dict())
    else:
        _echo_yaml([item.to_dict() for item in get_timezone_comparison_data(timezones)])


@cli.command(name="search")
@click.option("--abbr", "-a", is_flag=True, help="Treat QUERY as an exact abbreviation (EST, CET, ...)")
@click.argument("query", default="")
def cli_command_search(abbr, query):
    """Search the timezone catalog by abbreviation, city, country or id.

    Without QUERY the most popular timezones are listed.
    """
    results = search_by_abbreviation(query) if abbr else search_timezones(query)
    _echo_yaml([item.to_dict() for item in results])


@cli.command(name="nearest", context_settings=COORDINATE_ARGS)
@click.argument("latitude", type=float)
@click.argument("longitude", type=float)
def cli_command_nearest(latitude, longitude):
    """Timezone of the catalog city nearest to the point."""
    coordinates = _checked_coordinates(latitude, longitude)
    click.echo(get_timezone_from_coordinates(coordinates.latitude, coordinates.longitude))


@cli.command(name="diff")
@click.argument("base")
@click.argument("targets", nargs=-1, required=True)
def cli_command_diff(base, targets):
    """Wall-clock difference of each TARGET timezone relative to BASE.

    Examples:
        geoclock diff America/New_York Europe/London Asia/Kolkata
    """
    _echo_yaml(generate_timezone_matrix(base, targets).to_dict())


@cli.command(name="preset")
@click.argument("name", required=False)
def cli_command_preset(name):
    """List preset names, or show the clocks of preset NAME.

    Examples:
        geoclock preset
        geoclock preset "European Markets"
    """
    if name is None:
        _echo_yaml(list(get_timezone_presets()))
        return
    locations = create_locations_from_preset(name)
    if not locations:
        logger.error("Unknown or empty preset: %r", name)
        sys.exit(1)
    _echo_yaml([location.to_dict() for location in locations])


def main():
    """Console entry point."""
    cli()  # pylint: disable=no-value-for-parameter


# entry point `geoclock` is defined in pyproject.toml
if __name__ == "__main__":
    main()
