"""
Example demonstrating configuration access with gitbinding.
"""

import sys
import tempfile
import gitbinding


def show(config, getter, name):
    try:
        value = getattr(config, getter)(name)
    except gitbinding.ConfigError as e:
        value = f"<{e}>"
    print(f"  {name} = {value}")


def main():
    with tempfile.TemporaryDirectory() as temp_dir:
        print(f"Creating a repository in {temp_dir}")
        repo = gitbinding.new_repository(temp_dir, False)
        config = repo.config()
        # The config is released separately and outlives the repository.
        repo.free()

        try:
            print("\nWriting values:")
            config.set_string("user.name", "Example User")
            config.set_bool("core.ignorecase", True)
            config.set_int64("core.compression", 9)
            print("  done")

            print("\nReading values:")
            show(config, "get_string", "user.name")
            show(config, "get_bool", "core.ignorecase")
            show(config, "get_int64", "core.compression")
            show(config, "get_bool", "core.bare")

            print("\nKey existence checks:")
            print(f"  Has user.name? {config.has_key('user.name')}")
            print(f"  Has non-existent.key? {config.has_key('non-existent.key')}")

            print("\nMissing values raise ConfigError:")
            show(config, "get_string", "non-existent.key")
        finally:
            config.free()


if __name__ == "__main__":
    try:
        main()
    except gitbinding.GitbindingError as e:
        print(f"Error: {e}")
        sys.exit(1)
