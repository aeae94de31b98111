"""Shared CLI utilities for commands.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes
- Console utilities for error handling
- Opening the repository for the current directory
"""

from enum import IntEnum
from pathlib import Path
from typing import Never

from rich.console import Console

from differing.cli._context import CLIContext
from differing.exceptions import (
    AmendError,
    DifferingError,
    InvalidPathError,
    InvalidRevisionError,
    NotARepositoryError,
    NotTrackedError,
    UnknownRevisionError,
)
from differing.repository import DiffRepository

__all__ = [
    "ExitCode",
    "exit_code_for",
    "exit_with_error",
    "exit_with_success",
    "get_error_console",
    "open_repository",
]


class ExitCode(IntEnum):
    """Standard exit codes for differing CLI commands."""

    SUCCESS = 0
    ERROR = 1
    VALIDATION_ERROR = 2


def exit_code_for(exc: DifferingError) -> ExitCode:
    """Map a differing exception to an exit code."""
    if isinstance(
        exc,
        InvalidPathError
        | InvalidRevisionError
        | UnknownRevisionError
        | NotTrackedError
        | AmendError,
    ):
        return ExitCode.VALIDATION_ERROR
    return ExitCode.ERROR


def get_error_console() -> Console:
    """Get a Rich console configured for error output to stderr."""
    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use (defaults to ERROR).
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {message}", highlight=False)
    raise SystemExit(code)


def exit_with_success(
    message: str | None = None,
    *,
    console: Console | None = None,
) -> Never:
    """Print an optional success message and exit with SUCCESS code.

    Raises:
        SystemExit: Always raised with ExitCode.SUCCESS (0).
    """
    if message is not None:
        if console is None:
            console = Console()
        console.print(message)
    raise SystemExit(ExitCode.SUCCESS)


def open_repository(ctx: CLIContext, cwd: Path | None = None) -> DiffRepository:
    """Open the repository enclosing ``cwd`` using the loaded configuration.

    Raises:
        SystemExit: With ERROR if ``cwd`` is not inside a git checkout.
    """
    git = ctx.config.git
    try:
        return DiffRepository.open(
            cwd,
            executable=git.executable,
            timeout_ms=git.timeout_ms,
            max_commits=git.max_commits,
            logger=ctx.logger,
        )
    except NotARepositoryError:
        exit_with_error("not a git repository", ExitCode.ERROR)
    except DifferingError as e:
        exit_with_error(str(e), exit_code_for(e))
