"""Differing configuration.

This module provides the public API for differing configuration management,
including loading, validation, and typed access to configuration values.

Example:
    >>> from differing.config import Config
    >>> config = Config.load()
    >>> config.server.port
    3844
"""

from differing.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG
from ._load import safe_load_config
from ._loader import (
    ENV_PREFIX,
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    GitSettings,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ServerConfig,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "GitSettings",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ServerConfig",
    "deep_merge",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
]
