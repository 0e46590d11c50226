"""Common utility functions for patchcheck."""

import hashlib
import importlib.metadata as importlib_metadata
import os
from pathlib import Path
from typing import BinaryIO

from .constants import PATCHCHECK_HOME_EXT


def stream_checksum(fh: BinaryIO) -> str:
    """Calculate SHA256 checksum of a binary stream, 1 MiB at a time."""
    hasher = hashlib.sha256()
    for chunk in iter(lambda: fh.read(1024 * 1024), b""):
        hasher.update(chunk)
    return hasher.hexdigest()


# Package version - cached for performance
_VERSION_CACHE = None


def get_package_version() -> str:
    """Get patchcheck package version (cached)."""
    global _VERSION_CACHE
    if _VERSION_CACHE is None:
        try:
            _VERSION_CACHE = importlib_metadata.version("patchcheck")
        except importlib_metadata.PackageNotFoundError:
            _VERSION_CACHE = "unknown"
    return _VERSION_CACHE


def get_home_dir(*parts: str) -> Path:
    """Get patchcheck home directory path or path under it.

    Checks PATCHCHECK_HOME environment variable first, defaults to
    ~/.patchcheck if not set.

    Args:
        *parts: Optional path components to join (e.g., "patchcheck.log")

    Returns:
        Absolute path to the home directory or subpath under it
    """
    home_env = os.environ.get("PATCHCHECK_HOME")
    if home_env:
        home = Path(home_env).expanduser().resolve()
    else:
        home = Path.home() / PATCHCHECK_HOME_EXT

    return home / Path(*parts) if parts else home
