"""System test configuration and fixtures."""

import logging

import pytest
from click.testing import CliRunner

from geoclock.utils import log_utils


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_logging(monkeypatch):
    """Each CLI run configures logging against its own captured stderr; undo it afterwards."""
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, root.handlers[:]
    monkeypatch.setattr(log_utils, "_logger_configured", False)
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
