"""Differing CLI commands."""
# pyright: reportUnusedCallResult=false

from cyclopts import App

from ._inspect import amend, commits, diffs, files, show
from ._serve import serve
from ._shared import (
    ExitCode,
    exit_code_for,
    exit_with_error,
    exit_with_success,
    get_error_console,
    open_repository,
)

__all__ = [
    "ExitCode",
    "amend",
    "commits",
    "diffs",
    "exit_code_for",
    "exit_with_error",
    "exit_with_success",
    "files",
    "get_error_console",
    "open_repository",
    "register_commands",
    "serve",
    "show",
]


def register_commands(app: App) -> None:
    app.default(serve)
    app.command(serve, name="serve")
    app.command(diffs, name="diffs")
    app.command(files, name="files")
    app.command(commits, name="commits")
    app.command(show, name="show")
    app.command(amend, name="amend")
