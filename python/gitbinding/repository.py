"""
Repository handle.
"""

import logging
import os
from typing import Optional

from gitbinding import _native
from gitbinding.config import Config
from gitbinding.errors import ConfigError, RepositoryError
from gitbinding.handle import NativeHandle, PathArg, call, to_cpath

logger = logging.getLogger(__name__)


class Repository(NativeHandle):
    """A Git repository backed by a libgit2 ``git_repository``."""

    _free_function = "git_repository_free"
    _error_type = RepositoryError

    @classmethod
    def init(cls, path: PathArg, bare: bool = False) -> "Repository":
        """
        Initialize a new repository at the given path.

        Args:
            path: Path where the repository will be created
            bare: If True, create a bare repository without a working directory

        Returns:
            Repository object

        Raises:
            RepositoryError: If the repository cannot be initialized
        """
        lib = _native.get_library()
        cpath = to_cpath(path)
        native = _native.git_repository_p()
        call(lib, "git_repository_init", native, cpath, 1 if bare else 0,
             error_type=RepositoryError)
        logger.debug("initialized %s repository at %r", "bare" if bare else "non-bare", path)
        return cls(lib, native)

    @classmethod
    def open(cls, path: PathArg) -> "Repository":
        """
        Open an existing repository at the given path.

        Args:
            path: Path to the repository (either .git directory or working directory)

        Returns:
            Repository object

        Raises:
            RepositoryError: If the repository cannot be opened
        """
        lib = _native.get_library()
        cpath = to_cpath(path)
        native = _native.git_repository_p()
        call(lib, "git_repository_open", native, cpath, error_type=RepositoryError)
        logger.debug("opened repository at %r", path)
        return cls(lib, native)

    def config(self) -> Config:
        """
        Get the repository's configuration.

        The returned Config is released independently of this repository and
        remains usable after the repository has been released.

        Raises:
            ConfigError: If the configuration cannot be loaded
        """
        native = _native.git_config_p()
        call(self._lib, "git_repository_config", native, self._native, error_type=ConfigError)
        return Config(self._lib, native)

    def git_dir(self) -> str:
        """Path to the repository's .git directory (or the repository itself when bare)."""
        return os.fsdecode(self._lib.git_repository_path(self._native))

    def work_dir(self) -> Optional[str]:
        """Path to the working directory, or None for bare repositories."""
        workdir = self._lib.git_repository_workdir(self._native)
        if workdir is None:
            return None
        return os.fsdecode(workdir)

    def is_bare(self) -> bool:
        return self._lib.git_repository_is_bare(self._native) == 1


new_repository = Repository.init
get_repository = Repository.open
