"""
Ownership wrapper shared by all objects backed by a libgit2 pointer.
"""

import logging
import os
import weakref
from typing import Any, Type, Union

from gitbinding.errors import HandleReleasedError, LibraryError, check

logger = logging.getLogger(__name__)

PathArg = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]


def call(lib: Any, func_name: str, *args: Any, error_type: Type[LibraryError] = LibraryError) -> int:
    """Invoke a status-returning libgit2 function and raise on failure."""
    code = getattr(lib, func_name)(*args)
    return check(lib, code, error_type)


def to_cstring(value: str, what: str = "value") -> bytes:
    """Encode a Python string for a ``const char *`` parameter."""
    if not isinstance(value, str):
        raise TypeError(f"{what} must be str, not {type(value).__name__}")
    if "\0" in value:
        raise ValueError(f"{what} must not contain NUL characters")
    return value.encode("utf-8", errors="surrogateescape")


def to_cpath(path: PathArg) -> bytes:
    """Encode a filesystem path for a ``const char *`` parameter."""
    encoded = os.fsencode(path)
    if b"\0" in encoded:
        raise ValueError("path must not contain NUL characters")
    return encoded


def _reclaim(lib: Any, free_function: str, native: Any, name: str) -> None:
    logger.warning("%s was garbage collected without being released", name)
    getattr(lib, free_function)(native)


class NativeHandle:
    """
    Owns one native pointer and frees it exactly once.

    The pointer is freed by ``release()``, on leaving a ``with`` block, or by
    the garbage collector if neither happened. Any use after release raises
    ``HandleReleasedError`` without touching libgit2.
    """

    _free_function: str
    _error_type: Type[LibraryError] = LibraryError

    def __init__(self, lib: Any, native: Any):
        self._lib = lib
        self._native_ptr = native
        self._finalizer = weakref.finalize(
            self, _reclaim, lib, self._free_function, native, type(self).__name__
        )
        self._finalizer.atexit = False
        logger.debug("acquired %s", type(self).__name__)

    @property
    def _native(self) -> Any:
        if self._native_ptr is None:
            raise HandleReleasedError(f"{type(self).__name__} has already been released")
        return self._native_ptr

    @property
    def released(self) -> bool:
        return self._native_ptr is None

    def _call(self, func_name: str, *args: Any) -> int:
        return call(self._lib, func_name, *args, error_type=self._error_type)

    def release(self) -> None:
        """Free the native handle. Releasing twice is a no-op."""
        if self._finalizer.detach() is None:
            return
        native, self._native_ptr = self._native_ptr, None
        getattr(self._lib, self._free_function)(native)
        logger.debug("released %s", type(self).__name__)

    free = release

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self.released else "open"
        return f"<{type(self).__name__} ({state})>"
