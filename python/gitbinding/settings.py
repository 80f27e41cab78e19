"""
Runtime settings for gitbinding, read from the environment.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

LIBGIT2_ENV_VAR = "GITBINDING_LIBGIT2"


@dataclass(frozen=True)
class Settings:
    """Settings that influence how libgit2 is located."""

    # Explicit path or soname of the shared library; disables searching.
    library: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        if environ is None:
            environ = os.environ
        library = environ.get(LIBGIT2_ENV_VAR, "").strip() or None
        return cls(library=library)
