"""
Configuration for pytest.

Provides an in-memory stand-in for libgit2 and fixtures for tests that run
against the real library.
"""
import ctypes
import shutil
import tempfile

import pytest

from gitbinding import _native
from gitbinding.errors import LibraryNotFoundError

GIT_ERROR_REPOSITORY = 6
GIT_ERROR_CONFIG = 7

_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0", ""}


class FakeLibgit2:
    """
    Just enough of the libgit2 C API for the bindings, backed by dicts.

    Out-parameters arrive as ctypes instances (the real functions get them
    by reference through their argtypes), so they are filled in place here.
    """

    def __init__(self):
        self.repositories = {}
        self.handles = {}
        self.freed = []
        self.disposed_buffers = 0
        self.freed_entries = 0
        self.read_only = False
        self.fail_config = False
        self.calls = []
        self._error = None
        self._keepalive = []

    # helpers

    def _fail(self, message, klass, code=-1):
        self._error = _native.git_error(message=message.encode("utf-8"), klass=klass)
        return code

    def _new_handle(self, out, struct_type, kind, key):
        instance = struct_type()
        self._keepalive.append(instance)
        self.handles[ctypes.addressof(instance)] = (kind, key)
        out.contents = instance

    def _lookup(self, pointer, kind):
        address = ctypes.addressof(pointer.contents)
        handle_kind, key = self.handles[address]
        assert handle_kind == kind
        assert (kind, address) not in self.freed, f"use after free of {kind}"
        return key

    def _free(self, pointer, kind):
        address = ctypes.addressof(pointer.contents)
        assert (kind, address) not in self.freed, f"double free of {kind}"
        self.freed.append((kind, address))

    def _values(self, config):
        return self.repositories[self._lookup(config, "config")]["config"]

    def _missing(self, name):
        return self._fail(f"config value '{name.decode()}' was not found", GIT_ERROR_CONFIG, -3)

    # library

    def git_libgit2_init(self):
        return 1

    def git_libgit2_version(self, major, minor, rev):
        major.value, minor.value, rev.value = 1, 7, 2
        return 0

    def git_error_last(self):
        if self._error is None:
            return _native.git_error_p()
        return ctypes.pointer(self._error)

    def git_buf_dispose(self, buf):
        self.disposed_buffers += 1
        buf.ptr = ctypes.POINTER(ctypes.c_char)()
        buf.size = 0

    # repository

    def git_repository_init(self, out, path, bare):
        self.calls.append(("git_repository_init", path, bare))
        if not path.startswith(b"/"):
            return self._fail(f"failed to make directory '{path.decode()}'", GIT_ERROR_REPOSITORY)
        self.repositories.setdefault(path, {"bare": bool(bare), "config": {}})
        self._new_handle(out, _native.git_repository, "repository", path)
        return 0

    def git_repository_open(self, out, path):
        self.calls.append(("git_repository_open", path))
        if path not in self.repositories:
            return self._fail(
                f"could not find repository at '{path.decode()}'", GIT_ERROR_REPOSITORY, -3
            )
        self._new_handle(out, _native.git_repository, "repository", path)
        return 0

    def git_repository_free(self, repo):
        self._free(repo, "repository")

    def git_repository_config(self, out, repo):
        path = self._lookup(repo, "repository")
        if self.fail_config:
            return self._fail("failed to parse config file: unexpected end of file", GIT_ERROR_CONFIG)
        self._new_handle(out, _native.git_config, "config", path)
        return 0

    def git_repository_path(self, repo):
        path = self._lookup(repo, "repository")
        if self.repositories[path]["bare"]:
            return path + b"/"
        return path + b"/.git/"

    def git_repository_workdir(self, repo):
        path = self._lookup(repo, "repository")
        if self.repositories[path]["bare"]:
            return None
        return path + b"/"

    def git_repository_is_bare(self, repo):
        return int(self.repositories[self._lookup(repo, "repository")]["bare"])

    # config

    def git_config_free(self, config):
        self._free(config, "config")

    def _set(self, config, name, value):
        values = self._values(config)
        if self.read_only:
            return self._fail("failed to lock file for writing", GIT_ERROR_CONFIG, -14)
        values[name] = value
        return 0

    def git_config_set_bool(self, config, name, value):
        return self._set(config, name, b"true" if value else b"false")

    def git_config_set_string(self, config, name, value):
        return self._set(config, name, value)

    def git_config_set_int64(self, config, name, value):
        return self._set(config, name, str(value).encode())

    def git_config_get_bool(self, out, config, name):
        values = self._values(config)
        if name not in values:
            return self._missing(name)
        word = values[name].decode().lower()
        if word in _TRUE_WORDS:
            out.value = 1
        elif word in _FALSE_WORDS:
            out.value = 0
        else:
            return self._fail(
                f"failed to parse '{values[name].decode()}' as a boolean", GIT_ERROR_CONFIG
            )
        return 0

    def git_config_get_int64(self, out, config, name):
        values = self._values(config)
        if name not in values:
            return self._missing(name)
        try:
            out.value = int(values[name])
        except ValueError:
            return self._fail(
                f"failed to parse '{values[name].decode()}' as an integer", GIT_ERROR_CONFIG
            )
        return 0

    def git_config_get_string_buf(self, buf, config, name):
        values = self._values(config)
        if name not in values:
            return self._missing(name)
        data = values[name]
        storage = ctypes.create_string_buffer(data)
        self._keepalive.append(storage)
        buf.ptr = ctypes.cast(storage, ctypes.POINTER(ctypes.c_char))
        buf.size = len(data)
        return 0

    def git_config_get_entry(self, out, config, name):
        if name not in self._values(config):
            return self._missing(name)
        entry = _native.git_config_entry()
        self._keepalive.append(entry)
        out.contents = entry
        return 0

    def git_config_entry_free(self, entry):
        self.freed_entries += 1

    def git_config_delete_entry(self, config, name):
        values = self._values(config)
        if name not in values:
            return self._missing(name)
        del values[name]
        return 0


@pytest.fixture
def fake_lib():
    """Route every binding through a fresh FakeLibgit2."""
    lib = FakeLibgit2()
    previous = _native.set_library(lib)
    yield lib
    _native.set_library(previous)


@pytest.fixture(scope="session")
def libgit2():
    """The real libgit2, or skip when it is not installed."""
    try:
        return _native.load_library()
    except LibraryNotFoundError as exc:
        pytest.skip(str(exc))


@pytest.fixture
def real_lib(libgit2):
    previous = _native.set_library(libgit2)
    yield libgit2
    _native.set_library(previous)


@pytest.fixture
def temp_dir():
    path = tempfile.mkdtemp()
    try:
        yield path
    finally:
        shutil.rmtree(path)


@pytest.fixture
def repo_path(real_lib, temp_dir):
    """A freshly initialized non-bare repository on disk."""
    from gitbinding import Repository

    with Repository.init(temp_dir, bare=False):
        pass
    return temp_dir

