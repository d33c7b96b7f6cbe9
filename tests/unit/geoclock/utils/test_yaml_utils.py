"""Tests for YAML dumping and loading helpers."""

import datetime as dt
import io
import unittest

import pytest
import yaml
from munch import Munch

from geoclock.models import Coordinates, ErrorCode, LocationResponse
from geoclock.utils.yaml_utils import stringify_datetime, yaml_dump_cozy, yaml_safe_load_file

pytestmark = pytest.mark.unit


class TestYamlDumpCozy(unittest.TestCase):
    """Tests for yaml_dump_cozy function."""

    def test_datetime_with_space_separator(self):
        data = {"timestamp": dt.datetime(2026, 10, 18, 14, 30, 45)}
        result = yaml_dump_cozy(data)

        self.assertIn("2026-10-18 14:30:45", result)
        self.assertNotIn("T", result.replace("timestamp", ""))

    def test_aware_datetime_keeps_offset(self):
        tz = dt.timezone(dt.timedelta(hours=5, minutes=30))
        result = yaml_dump_cozy({"current_time": dt.datetime(2026, 1, 15, 17, 30, tzinfo=tz)})
        self.assertIn("2026-01-15 17:30:00+05:30", result)

    def test_date(self):
        result = yaml_dump_cozy({"date": dt.date(2026, 10, 18)})
        self.assertIn("2026-10-18", result)

    def test_enum_is_dumped_as_value(self):
        result = yaml_dump_cozy({"code": ErrorCode.RATE_LIMIT})
        self.assertEqual(result.strip(), "code: RATE_LIMIT")

    def test_tuple_and_munch(self):
        result = yaml_dump_cozy({"ids": ("UTC", "Asia/Tokyo"), "preset": Munch(timezone="UTC", name="UTC")})
        self.assertEqual(
            yaml.safe_load(result), {"ids": ["UTC", "Asia/Tokyo"], "preset": {"timezone": "UTC", "name": "UTC"}}
        )

    def test_keeps_insertion_order_and_unicode(self):
        result = yaml_dump_cozy({"city": "São Paulo", "country": "Brazil"})
        self.assertEqual(result, "city: São Paulo\ncountry: Brazil\n")

    def test_failed_response_round_trips(self):
        response = LocationResponse.fail(ErrorCode.NOT_FOUND, "No location found for the provided coordinates")
        loaded = yaml.safe_load(yaml_dump_cozy(response.to_dict()))
        self.assertEqual(loaded["error"]["code"], "NOT_FOUND")
        self.assertFalse(loaded["success"])

    def test_nested_dataclass_dict(self):
        loaded = yaml.safe_load(yaml_dump_cozy(LocationResponse.ok(Coordinates(1.5, -2.25)).to_dict()))
        self.assertEqual(loaded["data"], {"latitude": 1.5, "longitude": -2.25})

    def test_stream(self):
        stream = io.StringIO()
        yaml_dump_cozy({"a": 1}, stream)
        self.assertEqual(stream.getvalue(), "a: 1\n")


@pytest.mark.parametrize(
    "value, expected",
    [
        (dt.datetime(2026, 10, 18, 14, 30, 45), "2026-10-18 14:30:45"),
        (dt.datetime(2026, 10, 18, 14, 30, 45, 615000), "2026-10-18 14:30:45.615"),
        (dt.datetime(2026, 10, 18, 14, 30, 45, 123456), "2026-10-18 14:30:45.123456"),
        (
            dt.datetime(2026, 10, 18, 14, 30, 45, 500000, tzinfo=dt.timezone(dt.timedelta(hours=2))),
            "2026-10-18 14:30:45.5+02:00",
        ),
    ],
)
def test_stringify_datetime(value, expected):
    assert stringify_datetime(value) == expected


def test_yaml_safe_load_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("geocoding:\n  zoom: 10\n", encoding="utf-8")
    assert yaml_safe_load_file(str(path)) == {"geocoding": {"zoom": 10}}


def test_yaml_safe_load_file_missing_with_default(tmp_path):
    assert yaml_safe_load_file(str(tmp_path / "nope.yaml"), default={}) == {}


def test_yaml_safe_load_file_missing_without_default(tmp_path):
    with pytest.raises(RuntimeError, match="Failed to load YAML file"):
        yaml_safe_load_file(str(tmp_path / "nope.yaml"))


def test_yaml_safe_load_file_invalid(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("a: [1, 2\n", encoding="utf-8")
    with pytest.raises(RuntimeError):
        yaml_safe_load_file(str(path), default={})
