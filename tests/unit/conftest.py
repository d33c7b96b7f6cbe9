"""Unit test configuration and fixtures."""

from unittest.mock import MagicMock

import pytest

from tests.utils import load_json_fixture


@pytest.fixture
def nominatim_payload():
    """Recorded Nominatim reverse response for New York City Hall."""
    return load_json_fixture("nominatim_reverse.json")


@pytest.fixture
def make_response():
    """Build a fake ``requests.Response``."""

    def _make(status_code=200, payload=None, reason="OK", json_error=None):
        response = MagicMock()
        response.status_code = status_code
        response.ok = status_code < 400
        response.reason = reason
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = payload
        return response

    return _make
