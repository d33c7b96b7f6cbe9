"""Common utilities for tests."""

import json
from pathlib import Path


def get_test_data_dir() -> Path:
    """Return path to the test data directory.

    Shared by unittest TestCases and pytest fixtures.
    """
    return Path(__file__).parent.parent / "fixtures" / "data"


def load_json_fixture(name: str):
    """Load a recorded HTTP payload from the test data directory."""
    with open(get_test_data_dir() / name, encoding="utf-8") as fh:
        return json.load(fh)
