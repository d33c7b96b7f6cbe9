"""Filesystem/path helpers for locating bundled data files."""

# all annotations are stored as strings and not evaluated at runtime
from __future__ import annotations

import os
import typing as t
from functools import lru_cache

if t.TYPE_CHECKING:
    from pathlib import Path


@lru_cache
def package_root(file: str | Path | None = None) -> str:
    """Return the absolute directory of the ``geoclock`` package.

    If ``file`` is provided, its path is appended relative to the package root.
    Absolute ``file`` values are returned as they are.
    """
    # Go up from utils/ to the package directory
    parts = [os.path.dirname(__file__), ".."]
    if file:
        parts.append(str(file))
    return os.path.realpath(os.path.join(*parts))


def resolve_path(path: str | Path) -> str:
    """Expand ``~`` and resolve a path relative to the package root if it is not absolute."""
    path = os.path.expanduser(str(path))
    return path if os.path.isabs(path) else package_root(path)
