#!/usr/bin/env python3
"""
Basic usage examples for the gitbinding Python bindings.
"""

import os
import sys
import tempfile
import gitbinding


def main():
    print(f"gitbinding version: {gitbinding.__version__}")
    print("libgit2 version: {}.{}.{}".format(*gitbinding.libgit2_version()))

    # Example 1: Open an existing repository
    path = sys.argv[1] if len(sys.argv) > 1 else os.getcwd()
    try:
        with gitbinding.Repository.open(path) as repo:
            print(f"\nSuccessfully opened existing repository:")
            print(f"  Git directory: {repo.git_dir()}")
            print(f"  Working directory: {repo.work_dir()}")
            print(f"  Is bare: {repo.is_bare()}")
    except gitbinding.RepositoryError as e:
        print(f"\nCould not open {path} as a repository: {e}")

    # Example 2: Create a new repository
    with tempfile.TemporaryDirectory() as temp_dir:
        print(f"\nCreating a new repository in {temp_dir}")
        with gitbinding.new_repository(temp_dir, False) as new_repo:
            print(f"  Git directory: {new_repo.git_dir()}")
            print(f"  Working directory: {new_repo.work_dir()}")
            print(f"  Is bare: {new_repo.is_bare()}")

    # Example 3: Create a bare repository
    with tempfile.TemporaryDirectory() as temp_dir:
        bare_path = os.path.join(temp_dir, "bare-repo.git")
        print(f"\nCreating a bare repository in {bare_path}")
        with gitbinding.Repository.init(bare_path, bare=True) as bare_repo:
            print(f"  Git directory: {bare_repo.git_dir()}")
            print(f"  Working directory: {bare_repo.work_dir()}")
            print(f"  Is bare: {bare_repo.is_bare()}")


if __name__ == "__main__":
    try:
        main()
    except gitbinding.GitbindingError as e:
        print(f"Error: {e}")
        sys.exit(1)
