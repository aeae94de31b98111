# pyright: reportUnusedCallResult=false
"""Repository inspection and amend commands.

These run the same service the HTTP API uses, against the repository in
the current directory, and print rich tables.
"""

from collections.abc import Callable
from typing import Annotated, TypeVar

from cyclopts import Parameter
from rich.console import Console
from rich.table import Table

from differing.cli._context import CLIContext
from differing.exceptions import DifferingError
from differing.repository import WORKING_DIFF_ID, DiffRepository

from ._shared import exit_code_for, exit_with_error, open_repository

_SHORT_ID = 12

T = TypeVar("T")


def _short(commit_id: str) -> str:
    return commit_id[:_SHORT_ID]


def _run(operation: Callable[[DiffRepository], T]) -> T:
    """Open the repository, run one operation and map failures to exit codes."""
    with open_repository(CLIContext.get_current()) as repo:
        try:
            return operation(repo)
        except DifferingError as e:
            exit_with_error(str(e), exit_code_for(e))


def diffs() -> None:
    """List the working changes and recent commits with line statistics."""
    summaries = _run(lambda repo: repo.list_diffs())

    table = Table(title="Diffs")
    table.add_column("ID", no_wrap=True)
    table.add_column("Message")
    table.add_column("Author")
    table.add_column("Files", justify="right")
    table.add_column("+", justify="right", style="green")
    table.add_column("-", justify="right", style="red")
    for summary in summaries:
        table.add_row(
            summary.id if summary.id == WORKING_DIFF_ID else _short(summary.id),
            summary.message,
            summary.author,
            str(summary.files_count),
            str(summary.additions),
            str(summary.deletions),
        )
    Console().print(table)


def files(diff_id: str, /) -> None:
    """List files changed from a diff's base to the working tree.

    Args:
        diff_id: "working" or a commit id.
    """
    records = _run(lambda repo: repo.list_files(diff_id))

    console = Console()
    if not records:
        console.print("[dim]No changed files[/dim]")
        return

    table = Table(title=f"Files changed since {diff_id}")
    table.add_column("Path", overflow="fold")
    table.add_column("Status")
    table.add_column("+", justify="right", style="green")
    table.add_column("-", justify="right", style="red")
    for record in records:
        table.add_row(
            record.path,
            record.status.value,
            str(record.additions),
            str(record.deletions),
        )
    console.print(table)


def commits(diff_id: str, /) -> None:
    """List commits from a diff's base through HEAD.

    Args:
        diff_id: "working" or a commit id.
    """
    records = _run(lambda repo: repo.list_commits(diff_id))

    console = Console()
    if not records:
        console.print("[dim]No commits[/dim]")
        return

    table = Table(title="Commits")
    table.add_column("ID", no_wrap=True)
    table.add_column("Message")
    table.add_column("Author")
    table.add_column("Date", no_wrap=True)
    for record in records:
        marker = " (HEAD)" if record.is_head else ""
        table.add_row(
            _short(record.id) + marker,
            record.message,
            record.author,
            record.timestamp.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)


def show(diff_id: str, path: str, /) -> None:
    """Show the sizes of both sides of a file's diff.

    Args:
        diff_id: "working" or a commit id.
        path: Repository-relative file path.
    """
    pair = _run(lambda repo: repo.resolve_content(diff_id, path))

    old_lines = len(pair.old_content.splitlines())
    new_lines = len(pair.new_content.splitlines())
    console = Console()
    console.print(f"[bold]{pair.path}[/bold]", highlight=False)
    console.print(f"  old: {len(pair.old_content)} chars, {old_lines} lines")
    console.print(f"  new: {len(pair.new_content)} chars, {new_lines} lines")


def amend(
    commit_id: str,
    /,
    *,
    message: Annotated[
        str,
        Parameter(name=["--message", "-m"], help="Replacement commit message"),
    ],
) -> None:
    """Replace the message of the HEAD commit.

    Args:
        commit_id: Full hash of the HEAD commit.
    """
    result = _run(lambda repo: repo.amend_message(commit_id, message))

    console = Console()
    console.print(f"[green]Amended {_short(result.previous_commit)}[/green]")
    console.print(f"[dim]New commit: {result.new_commit}[/dim]", highlight=False)
    if result.warning is not None:
        console.print(f"[yellow]Warning:[/yellow] {result.warning}")
