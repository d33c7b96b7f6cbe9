"""YAML helpers"""

import datetime as dt
import enum
import os
import typing as t

import yaml
from munch import Munch

from geoclock.utils.data_utils import NotSpecified


def stringify_datetime(data: dt.datetime) -> str:
    """Represent datetime as ISO format with space separator instead of 'T', suppressing trailing zeros."""
    iso_str = data.isoformat(sep=" ")
    # "2026-10-18 15:22:36.615000+02:00" -> "2026-10-18 15:22:36.615+02:00"
    if "." in iso_str:
        head, _, tail = iso_str.partition(".")
        digits = tail[:6].rstrip("0")
        iso_str = head + (f".{digits}" if digits else "") + tail[6:]
    return iso_str


def stringify_date(data: dt.date) -> str:
    """Represent date as ISO format (YYYY-MM-DD)."""
    return data.isoformat()


def yaml_dump_cozy(data, stream=None, **kwargs) -> str:
    """Dump data to YAML with readable scalars.

    This function is a wrapper around yaml.dump() that formats:
    - datetime.datetime --> ISO format with space separator (not 'T'): '2026-10-18 14:30:45+02:00'
    - datetime.date --> ISO format: '2026-10-18'
    - Enum --> its value
    - tuple --> list
    - Munch --> regular dict

    Keys keep their insertion order unless ``sort_keys=True`` is passed.

    Example:
        >>> import datetime as dt
        >>> print(yaml_dump_cozy({"created": dt.datetime(2026, 10, 18, 14, 30, 45)}))
        created: '2026-10-18 14:30:45'
    """

    class CozyDumper(yaml.SafeDumper):
        """Custom YAML dumper with datetime formatting."""

    def _represent_datetime(dumper, data: dt.datetime):
        return dumper.represent_scalar("tag:yaml.org,2002:str", stringify_datetime(data))

    def _represent_date(dumper, data: dt.date):
        return dumper.represent_scalar("tag:yaml.org,2002:str", stringify_date(data))

    def _represent_enum(dumper, data: enum.Enum):
        return dumper.represent_data(data.value)

    def _represent_tuple(dumper, data: tuple):
        return dumper.represent_list(list(data))

    def _represent_munch(dumper, data):
        return dumper.represent_dict(dict(data))

    CozyDumper.add_representer(dt.datetime, _represent_datetime)
    CozyDumper.add_representer(dt.date, _represent_date)
    CozyDumper.add_multi_representer(enum.Enum, _represent_enum)
    CozyDumper.add_representer(tuple, _represent_tuple)
    CozyDumper.add_representer(Munch, _represent_munch)

    kwargs.setdefault("sort_keys", False)
    kwargs.setdefault("allow_unicode", True)
    return yaml.dump(data, stream, Dumper=CozyDumper, **kwargs)


def yaml_safe_load_file(fname: str, default: t.Any = NotSpecified) -> t.Any:
    """Load YAML content from a file safely.

    If ``default`` is given, it is returned when the file does not exist.
    """
    if default is not NotSpecified and not os.path.exists(fname):
        return default
    try:
        with open(fname, "r", encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except Exception as e:
        raise RuntimeError(f"Failed to load YAML file '{fname}': {e}") from e
