# ruff: noqa: TC003  # Path and datetime needed at runtime for dataclass fields
"""Repository models.

This module defines the data structures produced by the diff service. All of
them are computed fresh per request and never persisted.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import Final

WORKING_DIFF_ID: Final = "working"
"""Diff identifier selecting HEAD versus the live working tree."""

WORKING_DIFF_MESSAGE: Final = "Working Changes"

PUSHED_WARNING: Final = (
    "This commit may have been pushed to a remote. You may need to force push."
)


class FileStatus(StrEnum):
    """Change status of a file within a diff."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


@dataclass(frozen=True, slots=True)
class RepositoryRoot:
    """The resolved top-level directory of the checkout being served.

    Attributes:
        path: Absolute path of the checkout root (the linked worktree's own
            root when running inside a worktree).
        main_worktree: Absolute path of the main checkout, or None if it
            could not be determined.
    """

    path: Path
    main_worktree: Path | None = None

    @property
    def is_worktree(self) -> bool:
        """Whether the root is a linked worktree rather than the main checkout."""
        return self.main_worktree is not None and self.main_worktree != self.path


@dataclass(frozen=True, slots=True)
class FileDiffStats:
    """Numstat line for a single file.

    Attributes:
        path: Repository-relative path to the file.
        additions: Number of lines added (0 for binary files).
        deletions: Number of lines deleted (0 for binary files).
        is_binary: True if git reported ``-``/``-`` for the file.
    """

    path: str
    additions: int
    deletions: int
    is_binary: bool = False


@dataclass(frozen=True, slots=True)
class DiffStats:
    """Aggregate numstat for one diff.

    Attributes:
        files: Per-file statistics in the order git reported them.
        total_additions: Sum of all additions.
        total_deletions: Sum of all deletions.
        files_changed: Number of files changed, binary files included.
    """

    files: tuple[FileDiffStats, ...]
    total_additions: int
    total_deletions: int
    files_changed: int


@dataclass(frozen=True, slots=True)
class DiffSummary:
    """One selectable diff: the working changes or a single commit.

    Attributes:
        id: ``"working"`` or the full commit hash.
        message: Commit subject, or "Working Changes".
        author: Author name (empty for working changes).
        timestamp: Author time, or the request time for working changes.
        files_count: Number of files changed.
        additions: Total lines added.
        deletions: Total lines deleted.
    """

    id: str
    message: str
    author: str
    timestamp: datetime
    files_count: int
    additions: int
    deletions: int


@dataclass(frozen=True, slots=True)
class FileChangeRecord:
    """A changed file within a diff.

    Attributes:
        path: Repository-relative path.
        status: Added, modified or deleted.
        additions: Lines added.
        deletions: Lines deleted.
    """

    path: str
    status: FileStatus
    additions: int
    deletions: int


@dataclass(frozen=True, slots=True)
class FileContentPair:
    """The two sides of one file's diff.

    Attributes:
        path: Repository-relative path.
        old_content: File content at the diff base ("" if absent there).
        new_content: Current working tree content ("" if absent on disk).
    """

    path: str
    old_content: str
    new_content: str


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """A commit in the range shown alongside a diff.

    Attributes:
        id: Full commit hash.
        message: Commit subject line.
        author: Author name.
        timestamp: Author time.
        is_head: True only for the current HEAD commit.
    """

    id: str
    message: str
    author: str
    timestamp: datetime
    is_head: bool


@dataclass(frozen=True, slots=True)
class SaveResult:
    """Result of writing a working tree file.

    Attributes:
        path: Repository-relative path that was written.
        bytes_written: Number of bytes written.
    """

    path: str
    bytes_written: int


@dataclass(frozen=True, slots=True)
class AmendResult:
    """Result of amending the HEAD commit message.

    Attributes:
        new_commit: Hash of the new HEAD commit.
        previous_commit: Hash of HEAD before the amend.
        possibly_pushed: Whether the previous commit is contained in a
            remote-tracking branch.
    """

    new_commit: str
    previous_commit: str
    possibly_pushed: bool = False

    @property
    def warning(self) -> str | None:
        """Advisory force-push warning, or None."""
        return PUSHED_WARNING if self.possibly_pushed else None
