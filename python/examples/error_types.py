#!/usr/bin/env python3
"""
Script to verify that all error types are accessible from Python.
"""

import gitbinding
import sys


def list_error_types():
    """List all error types in the gitbinding module."""
    error_types = []

    expected_error_names = [
        "GitbindingError",
        "LibraryNotFoundError",
        "HandleReleasedError",
        "LibraryError",
        "RepositoryError",
        "ConfigError",
    ]

    for name in expected_error_names:
        if hasattr(gitbinding, name):
            error_type = getattr(gitbinding, name)
            if isinstance(error_type, type) and issubclass(error_type, Exception):
                error_types.append(error_type)

    return error_types


def main():
    print(f"gitbinding version: {gitbinding.__version__}")
    print()

    error_types = list_error_types()
    print(f"Found {len(error_types)} error types:")
    for error_type in sorted(error_types, key=lambda t: t.__name__):
        print(f"  - {error_type.__name__}")

    # A real failure from libgit2, carrying its own message
    try:
        gitbinding.get_repository("/definitely/not/a/repository")
    except gitbinding.LibraryError as e:
        print(f"\nCaught {type(e).__name__} (code {e.code}): {e}")
    except gitbinding.LibraryNotFoundError as e:
        print(f"\nlibgit2 is not available: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
