"""
gitbinding - Python bindings for libgit2 repositories and their configuration.

This package provides a small Pythonic API over the libgit2 C library,
loaded at runtime through ctypes.
"""

import logging
from ctypes import c_int
from typing import Tuple

from gitbinding import _native
from gitbinding.config import Config
from gitbinding.errors import (
    ConfigError,
    GitbindingError,
    HandleReleasedError,
    LibraryError,
    LibraryNotFoundError,
    RepositoryError,
)
from gitbinding.repository import Repository, get_repository, new_repository

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def libgit2_version() -> Tuple[int, int, int]:
    """Version of the loaded libgit2 as (major, minor, revision)."""
    lib = _native.get_library()
    major, minor, rev = c_int(), c_int(), c_int()
    lib.git_libgit2_version(major, minor, rev)
    return major.value, minor.value, rev.value


# Re-export main symbols
__all__ = [
    "Repository",
    "Config",
    "new_repository",
    "get_repository",
    "libgit2_version",
    "__version__",
    # Error types
    "GitbindingError",
    "LibraryNotFoundError",
    "HandleReleasedError",
    "LibraryError",
    "RepositoryError",
    "ConfigError",
]
