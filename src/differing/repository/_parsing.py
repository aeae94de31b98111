"""Parsers for git plumbing output.

All parsers expect the NUL-terminated (``-z``) variants where git offers one,
so paths containing tabs, newlines or non-ASCII characters are never quoted
or split.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Final

from differing.repository._models import DiffStats, FileDiffStats, FileStatus

# Fields: hash, parent hashes, subject, author name, author unix time
LOG_FORMAT: Final = "--format=%H%x00%P%x00%s%x00%an%x00%at"
_LOG_FIELDS: Final = 5

_BINARY_MARKER: Final = "-"


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One commit line from ``git log`` in LOG_FORMAT.

    Attributes:
        id: Full commit hash.
        parents: Parent hashes, first parent first (empty for a root commit).
        subject: Commit subject line.
        author: Author name.
        timestamp: Author time as an aware UTC datetime.
    """

    id: str
    parents: tuple[str, ...]
    subject: str
    author: str
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class NameStatusEntry:
    """One entry from ``git diff --name-status -z``.

    Attributes:
        status: Normalized change status.
        path: Repository-relative path (the new path for copies and renames).
        code: The raw status letter(s) reported by git.
    """

    status: FileStatus
    path: str
    code: str


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """One entry from ``git ls-tree -z``."""

    mode: str
    type: str
    object_id: str
    path: str


def _records(output: str, *, nul_terminated: bool) -> Iterator[str]:
    if nul_terminated:
        parts = output.split("\0")
    else:
        parts = output.splitlines()
    return (p for p in parts if p)


def _count(value: str) -> int:
    if value == _BINARY_MARKER:
        return 0
    return int(value)


def parse_numstat(output: str, *, nul_terminated: bool = True) -> DiffStats:
    """Parse ``git diff --numstat`` output.

    Binary files are reported by git as ``-``/``-``; they count towards
    ``files_changed`` but contribute no lines.

    Args:
        output: Raw numstat output.
        nul_terminated: Whether the output was produced with ``-z``.

    Returns:
        Per-file and aggregate statistics.

    Raises:
        ValueError: If a line is not valid numstat.
    """
    files: list[FileDiffStats] = []
    records = _records(output, nul_terminated=nul_terminated)
    for record in records:
        parts = record.split("\t", 2)
        if len(parts) != 3:  # noqa: PLR2004
            msg = f"Malformed numstat line: {record!r}"
            raise ValueError(msg)
        added, deleted, path = parts
        if not path and nul_terminated:
            # Rename/copy: "<a>\t<d>\t\0<old>\0<new>\0"
            _old = next(records, "")
            path = next(records, "")
        files.append(
            FileDiffStats(
                path=path,
                additions=_count(added),
                deletions=_count(deleted),
                is_binary=added == _BINARY_MARKER and deleted == _BINARY_MARKER,
            )
        )

    return DiffStats(
        files=tuple(files),
        total_additions=sum(f.additions for f in files),
        total_deletions=sum(f.deletions for f in files),
        files_changed=len(files),
    )


def status_from_code(code: str) -> FileStatus:
    """Map a git status letter to a FileStatus.

    ``A`` is added, ``D`` is deleted and everything else (modified, renamed,
    copied, type-changed, unmerged) is modified.
    """
    match code[:1]:
        case "A":
            return FileStatus.ADDED
        case "D":
            return FileStatus.DELETED
        case _:
            return FileStatus.MODIFIED


def parse_name_status(output: str) -> list[NameStatusEntry]:
    """Parse ``git diff --name-status -z`` output.

    Args:
        output: Raw NUL-terminated name-status output.

    Returns:
        Entries in the order git reported them.
    """
    entries: list[NameStatusEntry] = []
    records = _records(output, nul_terminated=True)
    for code in records:
        path = next(records, "")
        if code[:1] in ("R", "C"):
            # Copies and renames carry the source path first
            path = next(records, path)
        if path:
            entries.append(
                NameStatusEntry(status=status_from_code(code), path=path, code=code)
            )
    return entries


def parse_log(output: str) -> list[LogEntry]:
    """Parse ``git log`` output produced with LOG_FORMAT.

    Args:
        output: Raw log output, one commit per "\n"-terminated line. Other
            line-break characters may appear inside subjects and names.

    Returns:
        Entries in the order git reported them (newest first).

    Raises:
        ValueError: If a line does not have the expected fields.
    """
    entries: list[LogEntry] = []
    # %s and %an never contain "\n", but may contain other line breaks
    for line in output.split("\n"):
        if not line:
            continue
        fields = line.split("\0")
        if len(fields) != _LOG_FIELDS:
            msg = f"Malformed log line: {line!r}"
            raise ValueError(msg)
        commit_id, parents, subject, author, timestamp = fields
        entries.append(
            LogEntry(
                id=commit_id,
                parents=tuple(parents.split()),
                subject=subject,
                author=author,
                timestamp=datetime.fromtimestamp(int(timestamp), tz=UTC),
            )
        )
    return entries


def parse_ls_tree(output: bytes) -> list[TreeEntry]:
    """Parse ``git ls-tree -z`` output.

    Args:
        output: Raw NUL-terminated ls-tree output.

    Returns:
        Entries in the order git reported them.
    """
    entries: list[TreeEntry] = []
    for record in output.split(b"\0"):
        if not record:
            continue
        meta, _, path = record.partition(b"\t")
        mode, object_type, object_id = meta.decode("ascii").split()
        entries.append(
            TreeEntry(
                mode=mode,
                type=object_type,
                object_id=object_id,
                path=path.decode("utf-8", errors="replace"),
            )
        )
    return entries
