import os
import sys
from pathlib import Path
from typing import Any

from differing.exceptions import ConfigError

from ._models import Config


def safe_load_config(
    *,
    config_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> tuple[Config, str | None]:
    """Load configuration with error handling.

    Errors in discovered sources are handled based on the
    DIFFERING_STRICT_CONFIG environment variable:
    - If unset or "0": warn to stderr and continue with defaults plus CLI
      overrides
    - If "1": fail fast with sys.exit(1)

    When config_path is provided, the file must exist (explicit user request).

    Args:
        config_path: Explicit path to config file (--config flag).
        cli_overrides: CLI argument overrides, highest precedence.

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.
    """
    strict_mode = os.environ.get("DIFFERING_STRICT_CONFIG", "0") == "1"

    if config_path is not None and not config_path.is_file():
        # Explicit path - always fatal
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    try:
        config = Config.load(config_path=config_path, cli_overrides=cli_overrides)
    except (ConfigError, OSError) as e:
        error_msg = f"Failed to load config: {e}"
        if strict_mode or config_path is not None:
            print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
            sys.exit(1)
        print(f"Warning: {error_msg}", file=sys.stderr)  # noqa: T201
        try:
            fallback = Config.load(
                include_user=False, include_env=False, cli_overrides=cli_overrides
            )
        except ConfigError:
            fallback = Config.from_dict({})
        return fallback, error_msg
    else:
        return config, None
