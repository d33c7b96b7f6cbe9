"""Inspect helpers"""


def str_exc(exc: BaseException) -> str:
    """Convert an exception to its string representation."""
    return f"{type(exc).__name__}: {exc}"
