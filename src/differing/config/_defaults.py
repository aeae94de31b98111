"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "server": {
        "host": "localhost",
        "port": 3844,
        "open_browser": False,
        "static_dir": "",
    },
    "git": {
        "executable": "git",
        "timeout_ms": 10000,
        "max_commits": 20,
    },
    "logging": {
        "level": "info",
        "format": "text",
        "file": "",
    },
}
