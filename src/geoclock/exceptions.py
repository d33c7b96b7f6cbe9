"""Custom exception hierarchy for geoclock.

Public operations that talk to the network or to a location provider do not
raise these; they translate them into a failed ``LocationResponse``.
"""


class GeoclockError(Exception):
    """Base exception for all geoclock errors."""


class ConfigError(GeoclockError):
    """A configuration or catalog file is missing or malformed."""


class PositionError(GeoclockError):
    """A location provider could not produce a position fix."""

    def __init__(self, code: str, message: str | None = None):
        self.code = code
        super().__init__(message or f"Position error: {code}")
