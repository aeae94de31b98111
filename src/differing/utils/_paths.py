from pathlib import Path

import platformdirs


def get_user_config_dir() -> Path:
    """Get the platform-specific differing user configuration directory."""
    return platformdirs.user_config_path("differing")


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/differing/config.toml``
    - macOS: ``~/Library/Application Support/differing/config.toml``
    - Windows: ``%APPDATA%\differing\config.toml``

    The path is returned regardless of whether the file exists.
    """
    return get_user_config_dir() / "config.toml"
