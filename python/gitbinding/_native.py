"""
Low-level ctypes declarations for the parts of libgit2 used by gitbinding.

The shared library is located and loaded on first use, so importing the
package works on systems without libgit2 and tests can substitute a fake
library object through ``set_library``.
"""

import ctypes
import ctypes.util
import logging
import sys
from ctypes import POINTER, Structure, c_char, c_char_p, c_int, c_int64, c_size_t, c_uint
from enum import IntEnum
from typing import Any, Optional, Tuple

from gitbinding.errors import LibraryError, LibraryNotFoundError, check
from gitbinding.settings import Settings

logger = logging.getLogger(__name__)


class GitErrorCode(IntEnum):
    """Return codes of libgit2 functions (abridged)."""

    ENOTFOUND = -3


# Opaque and compound types


class git_repository(Structure):
    pass


git_repository_p = POINTER(git_repository)
git_repository_p_p = POINTER(git_repository_p)


class git_config(Structure):
    pass


git_config_p = POINTER(git_config)
git_config_p_p = POINTER(git_config_p)


# Layout differs between libgit2 releases; only ever handed back to
# git_config_entry_free, never read.
class git_config_entry(Structure):
    pass


git_config_entry_p = POINTER(git_config_entry)
git_config_entry_p_p = POINTER(git_config_entry_p)


class git_error(Structure):
    _fields_ = (
        ("message", c_char_p),
        ("klass", c_int),
    )


git_error_p = POINTER(git_error)


class git_buf(Structure):
    _fields_ = (
        ("ptr", POINTER(c_char)),
        ("reserved", c_size_t),
        ("size", c_size_t),
    )


git_buf_p = POINTER(git_buf)


FUNC_DECLS = {
    "git_libgit2_init": (c_int, ()),
    "git_libgit2_version": (c_int, (POINTER(c_int), POINTER(c_int), POINTER(c_int))),
    "git_error_last": (git_error_p, ()),
    "git_buf_dispose": (None, (git_buf_p,)),
    "git_repository_init": (c_int, (git_repository_p_p, c_char_p, c_uint)),
    "git_repository_open": (c_int, (git_repository_p_p, c_char_p)),
    "git_repository_free": (None, (git_repository_p,)),
    "git_repository_config": (c_int, (git_config_p_p, git_repository_p)),
    "git_repository_path": (c_char_p, (git_repository_p,)),
    "git_repository_workdir": (c_char_p, (git_repository_p,)),
    "git_repository_is_bare": (c_int, (git_repository_p,)),
    "git_config_free": (None, (git_config_p,)),
    "git_config_get_bool": (c_int, (POINTER(c_int), git_config_p, c_char_p)),
    "git_config_set_bool": (c_int, (git_config_p, c_char_p, c_int)),
    "git_config_get_string_buf": (c_int, (git_buf_p, git_config_p, c_char_p)),
    "git_config_set_string": (c_int, (git_config_p, c_char_p, c_char_p)),
    "git_config_get_int64": (c_int, (POINTER(c_int64), git_config_p, c_char_p)),
    "git_config_set_int64": (c_int, (git_config_p, c_char_p, c_int64)),
    "git_config_get_entry": (c_int, (git_config_entry_p_p, git_config_p, c_char_p)),
    "git_config_entry_free": (None, (git_config_entry_p,)),
    "git_config_delete_entry": (c_int, (git_config_p, c_char_p)),
}

KNOWN_SONAMES = tuple(f"libgit2.so.1.{minor}" for minor in range(9, -1, -1)) + (
    "libgit2.so",
    "libgit2.dylib",
    "git2.dll",
)

_lib: Optional[Any] = None


def _candidates(settings: Settings) -> Tuple[str, ...]:
    if settings.library:
        return (settings.library,)
    found = ctypes.util.find_library("git2")
    if found:
        return (found,) + KNOWN_SONAMES
    return KNOWN_SONAMES


def install_func_decls(lib: ctypes.CDLL) -> None:
    for name, (restype, argtypes) in FUNC_DECLS.items():
        try:
            func = getattr(lib, name)
        except AttributeError as exc:
            raise LibraryNotFoundError(f"libgit2 is missing symbol {name}") from exc
        func.restype = restype
        func.argtypes = argtypes


def load_library(settings: Optional[Settings] = None) -> ctypes.CDLL:
    """Load libgit2, declare the bound functions and initialize the library."""
    if settings is None:
        settings = Settings.from_env()

    tried = []
    for candidate in _candidates(settings):
        try:
            lib = ctypes.CDLL(candidate)
        except OSError as exc:
            logger.debug("could not load %s: %s", candidate, exc)
            tried.append(candidate)
            continue
        try:
            install_func_decls(lib)
        except LibraryNotFoundError as exc:
            logger.debug("skipping %s: %s", candidate, exc)
            tried.append(f"{candidate} ({exc})")
            continue
        check(lib, lib.git_libgit2_init(), LibraryError)
        logger.debug("loaded libgit2 from %s", candidate)
        return lib

    raise LibraryNotFoundError(
        f"libgit2 not found on {sys.platform} (tried: {', '.join(tried)})"
    )


def get_library() -> Any:
    """Return the loaded libgit2, loading it on first call."""
    global _lib
    if _lib is None:
        _lib = load_library()
    return _lib


def set_library(lib: Optional[Any]) -> Optional[Any]:
    """Replace the library object used by all bindings; returns the previous one."""
    global _lib
    previous, _lib = _lib, lib
    return previous
