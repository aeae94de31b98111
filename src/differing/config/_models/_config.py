# pyright: reportExplicitAny=false, reportAny=false
"""Configuration container with typed access.

This module provides the Config class, the merged view of every
configuration source.
"""

from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from differing.config._defaults import DEFAULT_CONFIG
from differing.config._loader import deep_merge, parse_env_vars, read_toml_file
from differing.config._models._common import ConfigSource, ConfigSourceName
from differing.config._models._git import GitSettings
from differing.config._models._logging import LoggingConfig
from differing.config._models._server import ServerConfig
from differing.exceptions import ConfigValidationError
from differing.utils import get_user_config_path


def _validation_error(
    error: ValidationError, source: str | None
) -> ConfigValidationError:
    """Convert the first pydantic error into a ConfigValidationError."""
    details = error.errors()[0]
    key = ".".join(str(part) for part in details.get("loc", ()))
    message = str(details.get("msg", "Validation error"))
    where = f" ({source})" if source else ""
    return ConfigValidationError(
        f"Invalid configuration value for {key}{where}: {message}",
        key=key,
        value=details.get("input"),
        expected=message,
        source=source,
    )


class Config(BaseModel):
    """Configuration container with typed access.

    Use the factory methods rather than the constructor so defaults are
    merged and sources are tracked.

    Attributes:
        server: HTTP server settings.
        git: Git execution settings.
        logging: Logging settings.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    server: ServerConfig = Field(default_factory=ServerConfig)
    git: GitSettings = Field(default_factory=GitSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        *,
        source: str | None = None,
    ) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Raises:
            ConfigValidationError: If a value is invalid.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            raise _validation_error(e, source) from e

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a single TOML file over the defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If a value is invalid.
        """
        data = read_toml_file(path)
        config = cls.from_dict(data, source=str(path))
        config._sources = (
            ConfigSource(
                name=ConfigSourceName.FILE, path=path, exists=True, values=data
            ),
        )
        return config

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        user_config_path: Path | None = None,
        include_user: bool = True,
        include_env: bool = True,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Precedence from lowest to highest: built-in defaults, the user config
        file, an explicit config file, ``DIFFERING_SECTION__KEY`` environment
        variables and CLI overrides.

        Args:
            config_path: Explicit config file (must exist).
            user_config_path: User config file location override.
            include_user: Whether to read the user config file.
            include_env: Whether to read environment variables.
            cli_overrides: Nested dictionary of CLI flag values.

        Raises:
            FileNotFoundError: If ``config_path`` does not exist.
            ConfigLoadError: If a config file cannot be parsed.
            ConfigValidationError: If the merged configuration is invalid.
        """
        sources: list[ConfigSource] = [
            ConfigSource(
                name=ConfigSourceName.DEFAULT,
                path=None,
                exists=True,
                values=DEFAULT_CONFIG,
            )
        ]

        if include_user:
            user_path = user_config_path or get_user_config_path()
            if user_path.is_file():
                sources.append(
                    ConfigSource(
                        name=ConfigSourceName.USER,
                        path=user_path,
                        exists=True,
                        values=read_toml_file(user_path),
                    )
                )

        if config_path is not None:
            sources.append(
                ConfigSource(
                    name=ConfigSourceName.FILE,
                    path=config_path,
                    exists=True,
                    values=read_toml_file(config_path),
                )
            )

        if include_env:
            env_values = parse_env_vars()
            if env_values:
                sources.append(
                    ConfigSource(
                        name=ConfigSourceName.ENV,
                        path=None,
                        exists=True,
                        values=env_values,
                    )
                )

        if cli_overrides:
            sources.append(
                ConfigSource(
                    name=ConfigSourceName.CLI,
                    path=None,
                    exists=True,
                    values=cli_overrides,
                )
            )

        merged: dict[str, Any] = {}
        for source in sources:
            merged = deep_merge(merged, source.values)

        try:
            config = cls.model_validate(merged)
        except ValidationError as e:
            raise _validation_error(e, None) from e

        # Highest precedence first
        config._sources = tuple(reversed(sources))
        return config

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed, highest precedence first."""
        return list(self._sources)

    @property
    def static_dir(self) -> Path | None:
        """The configured static frontend directory, or None."""
        return Path(self.server.static_dir) if self.server.static_dir else None
