"""Logging setup for the geoclock command line and library users."""

import logging
import sys

_logger_configured = False

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "WARNING", force: bool = False) -> None:
    """Configure root logging with a single stderr handler.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        force: Reconfigure even if logging was already set up.
    """
    global _logger_configured  # pylint: disable=global-statement

    if _logger_configured and not force:
        return

    log_level = getattr(logging, str(level).upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    root_logger.addHandler(handler)

    # requests logs every connection at DEBUG via urllib3
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    _logger_configured = True
    logging.getLogger(__name__).debug("Logging configured with level: %s", level)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (usually ``__name__``)."""
    return logging.getLogger(name)
