"""Tests for current-location retrieval."""

import unittest
from unittest import mock

import pytest
import requests

from geoclock.exceptions import PositionError
from geoclock.geo.position import (
    IpApiPositionProvider,
    PositionProvider,
    StaticPositionProvider,
    default_position_options,
    get_current_location,
)
from geoclock.models import Coordinates, ErrorCode, PositionOptions

pytestmark = pytest.mark.unit

BUDAPEST = Coordinates(47.4979, 19.0402)
IP_API_SUCCESS = {"status": "success", "country": "Hungary", "city": "Budapest", "lat": 47.4979, "lon": 19.0402}


class FailingProvider(PositionProvider):
    def __init__(self, error):
        self.error = error

    def get_position(self, options):
        raise self.error


class TestGetCurrentLocation(unittest.TestCase):
    """Tests for get_current_location function."""

    def test_no_provider_is_unsupported(self):
        response = get_current_location()
        self.assertFalse(response.success)
        self.assertEqual(response.error.code, ErrorCode.UNSUPPORTED)
        self.assertEqual(response.error.message, "Geolocation is not supported by this host")

    def test_static_provider(self):
        response = get_current_location(StaticPositionProvider(BUDAPEST))
        self.assertTrue(response.success)
        self.assertEqual(response.data, BUDAPEST)

    def test_options_are_passed_to_provider(self):
        provider = mock.MagicMock(spec=PositionProvider)
        provider.get_position.return_value = BUDAPEST
        options = PositionOptions(enable_high_accuracy=False, timeout_ms=500, maximum_age_ms=0)

        get_current_location(provider, options)

        provider.get_position.assert_called_once_with(options)

    def test_default_options(self):
        self.assertEqual(
            default_position_options(),
            PositionOptions(enable_high_accuracy=True, timeout_ms=10_000, maximum_age_ms=300_000),
        )

    def test_position_error_codes_map_to_messages(self):
        for code, message in [
            (ErrorCode.PERMISSION_DENIED, "Location access denied by user"),
            (ErrorCode.POSITION_UNAVAILABLE, "Location information unavailable"),
            (ErrorCode.TIMEOUT, "Location request timed out"),
        ]:
            with self.subTest(code=code):
                response = get_current_location(FailingProvider(PositionError(code, "raw reason")))
                self.assertFalse(response.success)
                self.assertEqual(response.error.code, code)
                self.assertEqual(response.error.message, message)
                self.assertEqual(response.error.details, "raw reason")

    def test_unknown_position_error_code(self):
        response = get_current_location(FailingProvider(PositionError("KAPUTT")))
        self.assertEqual(response.error.code, ErrorCode.API_ERROR)
        self.assertEqual(response.error.message, "Failed to get current location")

    def test_unexpected_provider_exception(self):
        with self.assertLogs("geoclock.geo.position", level="ERROR"):
            response = get_current_location(FailingProvider(OSError("device gone")))
        self.assertFalse(response.success)
        self.assertEqual(response.error.code, ErrorCode.API_ERROR)
        self.assertEqual(response.error.message, "Failed to get current location")
        self.assertEqual(response.error.details, "OSError: device gone")


@pytest.fixture
def options():
    return PositionOptions(timeout_ms=2_000, maximum_age_ms=60_000)


def test_ip_api_provider_success(make_response, options):
    session = mock.MagicMock()
    session.get.return_value = make_response(payload=IP_API_SUCCESS)
    provider = IpApiPositionProvider(session=session)

    assert provider.get_position(options) == BUDAPEST
    session.get.assert_called_once_with("http://ip-api.com/json/", timeout=2.0)


def test_ip_api_provider_reuses_recent_fix(make_response, options):
    session = mock.MagicMock()
    session.get.return_value = make_response(payload=IP_API_SUCCESS)
    clock = mock.MagicMock(side_effect=[100.0, 159.0, 161.0])
    provider = IpApiPositionProvider(session=session, clock=clock)

    provider.get_position(options)
    provider.get_position(options)  # 59 s old: cached
    assert session.get.call_count == 1
    provider.get_position(options)  # 61 s old: refetched
    assert session.get.call_count == 2


def test_ip_api_provider_zero_maximum_age_always_fetches(make_response):
    session = mock.MagicMock()
    session.get.return_value = make_response(payload=IP_API_SUCCESS)
    provider = IpApiPositionProvider(session=session, clock=lambda: 5.0)
    options = PositionOptions(maximum_age_ms=0)

    provider.get_position(options)
    provider.get_position(options)

    assert session.get.call_count == 2


@pytest.mark.parametrize(
    "side_effect, code",
    [
        (requests.Timeout("timed out"), ErrorCode.TIMEOUT),
        (requests.ConnectionError("unreachable"), ErrorCode.POSITION_UNAVAILABLE),
    ],
)
def test_ip_api_provider_transport_errors(options, side_effect, code):
    session = mock.MagicMock()
    session.get.side_effect = side_effect

    with pytest.raises(PositionError) as excinfo:
        IpApiPositionProvider(session=session).get_position(options)
    assert excinfo.value.code == code


@pytest.mark.parametrize(
    "status_code, payload, code",
    [
        (403, None, ErrorCode.PERMISSION_DENIED),
        (503, None, ErrorCode.POSITION_UNAVAILABLE),
        (200, {"status": "fail", "message": "private range"}, ErrorCode.POSITION_UNAVAILABLE),
        (200, {"status": "success"}, ErrorCode.POSITION_UNAVAILABLE),
        (200, "not a mapping", ErrorCode.POSITION_UNAVAILABLE),
    ],
)
def test_ip_api_provider_bad_responses(make_response, options, status_code, payload, code):
    session = mock.MagicMock()
    session.get.return_value = make_response(status_code=status_code, payload=payload)

    response = get_current_location(IpApiPositionProvider(session=session), options)

    assert response.success is False
    assert response.error.code == code


def test_ip_api_provider_empty_payload_has_readable_reason(make_response, options):
    session = mock.MagicMock()
    session.get.return_value = make_response(payload={})

    response = get_current_location(IpApiPositionProvider(session=session), options)

    assert response.error.code == ErrorCode.POSITION_UNAVAILABLE
    assert response.error.details == "unexpected response"
