"""
Error types raised by gitbinding.
"""

from typing import Any, Optional, Type


class GitbindingError(Exception):
    """Base exception for all gitbinding errors."""
    pass


class LibraryNotFoundError(GitbindingError):
    """libgit2 could not be located or loaded."""
    pass


class HandleReleasedError(GitbindingError):
    """A native handle was used after it had been released."""
    pass


class LibraryError(GitbindingError):
    """A libgit2 call failed; the message is libgit2's last error text."""

    def __init__(self, message: str, code: int = -1, klass: int = 0):
        super().__init__(message)
        self.message = message
        self.code = code
        self.klass = klass


class RepositoryError(LibraryError):
    """Repository-related errors."""
    pass


class ConfigError(LibraryError):
    """Configuration-related errors."""
    pass


def last_error(lib: Any, code: int, error_type: Type[LibraryError] = LibraryError) -> LibraryError:
    """
    Build an exception from libgit2's last error record.

    Must be called on the thread that made the failing call, before any other
    libgit2 call, since libgit2 keeps the record per thread and overwrites it.
    """
    message: Optional[str] = None
    klass = 0
    err = lib.git_error_last()
    if err:
        klass = err.contents.klass
        raw = err.contents.message
        if raw:
            message = raw.decode("utf-8", errors="replace")
    if not message:
        message = f"libgit2 call failed with code {code}"
    return error_type(message, code=code, klass=klass)


def check(lib: Any, code: int, error_type: Type[LibraryError] = LibraryError) -> int:
    """Raise ``error_type`` if ``code`` is a libgit2 failure status."""
    if code < 0:
        raise last_error(lib, code, error_type)
    return code
