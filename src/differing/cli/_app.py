"""The command-line interface for differing."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated, Literal

from cyclopts import App, Parameter
from rich.console import Console

from differing.config import safe_load_config
from differing.utils import create_logger

from ._commands import register_commands
from ._context import CLIContext

_HELP = "Browse and edit the diffs of a git repository from a local web UI."

LogLevelOption = Literal["debug", "info", "warning", "error"]
LogFormatOption = Literal["text", "json"]


def _build_overrides(
    *,
    log_level: str | None,
    log_format: str | None,
    git_timeout_ms: int | None,
) -> dict[str, object]:
    overrides: dict[str, dict[str, object]] = {}
    if log_level is not None:
        overrides.setdefault("logging", {})["level"] = log_level
    if log_format is not None:
        overrides.setdefault("logging", {})["format"] = log_format
    if git_timeout_ms is not None:
        overrides.setdefault("git", {})["timeout_ms"] = git_timeout_ms
    return dict(overrides)


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the differing CLI.

    Global options are parsed by the meta app, which loads configuration,
    creates the logger and then dispatches to the command. Run the returned
    app through ``app.meta``.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="differing",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to a TOML config file")
        ] = None,
        log_level: Annotated[
            LogLevelOption | None, Parameter(name="--log-level", help="Log level")
        ] = None,
        log_format: Annotated[
            LogFormatOption | None, Parameter(name="--log-format", help="Log format")
        ] = None,
        git_timeout_ms: Annotated[
            int | None,
            Parameter(name="--git-timeout-ms", help="Timeout for each git call"),
        ] = None,
    ) -> None:
        """Launch differing with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            config: Explicit path to config file.
            log_level: Log level threshold.
            log_format: Log output format.
            git_timeout_ms: Timeout for each git invocation in milliseconds.
        """
        loaded_config, config_error = safe_load_config(
            config_path=config,
            cli_overrides=_build_overrides(
                log_level=log_level,
                log_format=log_format,
                git_timeout_ms=git_timeout_ms,
            ),
        )

        logger = create_logger(
            level=loaded_config.logging.level.value,
            log_format=loaded_config.logging.format.value,
            log_file=loaded_config.logging.file,
            component="differing",
        )
        if config_error is not None:
            logger.warning("config_fallback", error=config_error)
        logger.debug(
            "config_loaded",
            sources=[
                f"{source.name}:{source.path}" if source.path else str(source.name)
                for source in loaded_config.sources
            ],
        )

        CLIContext.set_current(
            CLIContext(config=loaded_config, config_error=config_error, logger=logger)
        )
        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `differing` CLI."""
    create_app().meta()


if __name__ == "__main__":
    main()
