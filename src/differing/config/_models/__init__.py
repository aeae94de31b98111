"""Configuration models.

This module provides Pydantic models for differing configuration sections
and the main Config container class.
"""

from differing.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from differing.config._models._config import Config
from differing.config._models._git import GitSettings
from differing.config._models._logging import LoggingConfig
from differing.config._models._server import ServerConfig

__all__ = [
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "GitSettings",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ServerConfig",
]
