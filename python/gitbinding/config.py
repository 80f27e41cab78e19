"""
Config handle: typed access to a repository's configuration.
"""

import logging
from ctypes import c_int, c_int64, string_at

from gitbinding import _native
from gitbinding.errors import ConfigError, check
from gitbinding.handle import NativeHandle, to_cstring

logger = logging.getLogger(__name__)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class Config(NativeHandle):
    """
    A repository's configuration, backed by a libgit2 ``git_config``.

    Reads see every configuration level libgit2 loaded for the repository;
    writes go to the highest-priority writable level (normally the
    repository's own ``config`` file).
    """

    _free_function = "git_config_free"
    _error_type = ConfigError

    def get_bool(self, name: str) -> bool:
        """
        Read a boolean value.

        Raises:
            ConfigError: If the key is missing or not a valid boolean
        """
        value = c_int()
        self._call("git_config_get_bool", value, self._native, to_cstring(name, "name"))
        return value.value != 0

    def set_bool(self, name: str, value: bool) -> None:
        if not isinstance(value, bool):
            raise TypeError(f"value must be bool, not {type(value).__name__}")
        self._call("git_config_set_bool", self._native, to_cstring(name, "name"), int(value))

    def get_string(self, name: str) -> str:
        """
        Read a string value.

        Bytes that are not valid UTF-8 are kept as lone surrogates
        ("surrogateescape"), so the value can be written back unchanged.
        libgit2 itself drops a trailing carriage return when writing and
        reading values.

        Raises:
            ConfigError: If the key is missing
        """
        cname = to_cstring(name, "name")
        buf = _native.git_buf()
        self._call("git_config_get_string_buf", buf, self._native, cname)
        try:
            return string_at(buf.ptr, buf.size).decode("utf-8", errors="surrogateescape")
        finally:
            self._lib.git_buf_dispose(buf)

    def set_string(self, name: str, value: str) -> None:
        cname = to_cstring(name, "name")
        cvalue = to_cstring(value, "value")
        self._call("git_config_set_string", self._native, cname, cvalue)

    def get_int64(self, name: str) -> int:
        """
        Read a signed 64-bit integer. libgit2 applies the k/m/g suffixes.

        Raises:
            ConfigError: If the key is missing or not a valid integer
        """
        value = c_int64()
        self._call("git_config_get_int64", value, self._native, to_cstring(name, "name"))
        return value.value

    def set_int64(self, name: str, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"value must be int, not {type(value).__name__}")
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f"{value} does not fit in a signed 64-bit integer")
        self._call("git_config_set_int64", self._native, to_cstring(name, "name"), value)

    def has_key(self, name: str) -> bool:
        """Check whether ``name`` is set at any configuration level."""
        entry = _native.git_config_entry_p()
        code = self._lib.git_config_get_entry(entry, self._native, to_cstring(name, "name"))
        if code == _native.GitErrorCode.ENOTFOUND:
            return False
        check(self._lib, code, ConfigError)
        self._lib.git_config_entry_free(entry)
        return True

    def delete(self, name: str) -> None:
        """
        Remove ``name`` from the writable configuration level.

        Raises:
            ConfigError: If the key is not set there
        """
        self._call("git_config_delete_entry", self._native, to_cstring(name, "name"))
