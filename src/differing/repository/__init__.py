"""Repository access and diff computation for differing.

This package resolves the repository root, confines file access to it,
validates paths, enumerates diffs and commits, resolves file contents and
amends the HEAD commit message. All git access goes through the git
executable.
"""

from differing.repository._amend import CommitAmender
from differing.repository._content import FileContentResolver, FileSaver
from differing.repository._diffs import (
    DEFAULT_MAX_COMMITS,
    CommitLister,
    DiffEnumerator,
    FileChangeLister,
)
from differing.repository._models import (
    PUSHED_WARNING,
    WORKING_DIFF_ID,
    WORKING_DIFF_MESSAGE,
    AmendResult,
    CommitRecord,
    DiffStats,
    DiffSummary,
    FileChangeRecord,
    FileContentPair,
    FileDiffStats,
    FileStatus,
    RepositoryRoot,
    SaveResult,
)
from differing.repository._parsing import (
    LOG_FORMAT,
    LogEntry,
    NameStatusEntry,
    TreeEntry,
    parse_log,
    parse_ls_tree,
    parse_name_status,
    parse_numstat,
    status_from_code,
)
from differing.repository._repository import DiffRepository
from differing.repository._revisions import (
    DiffBase,
    RevisionResolver,
    is_working,
    validate_commit_id,
    validate_diff_id,
)
from differing.repository._root import resolve_repository_root
from differing.repository._rooted import RootedFileAccessor
from differing.repository._validator import PathValidator

__all__ = [
    "DEFAULT_MAX_COMMITS",
    "LOG_FORMAT",
    "PUSHED_WARNING",
    "WORKING_DIFF_ID",
    "WORKING_DIFF_MESSAGE",
    "AmendResult",
    "CommitAmender",
    "CommitLister",
    "CommitRecord",
    "DiffBase",
    "DiffEnumerator",
    "DiffRepository",
    "DiffStats",
    "DiffSummary",
    "FileChangeLister",
    "FileChangeRecord",
    "FileContentPair",
    "FileContentResolver",
    "FileDiffStats",
    "FileSaver",
    "FileStatus",
    "LogEntry",
    "NameStatusEntry",
    "PathValidator",
    "RepositoryRoot",
    "RevisionResolver",
    "RootedFileAccessor",
    "SaveResult",
    "TreeEntry",
    "is_working",
    "parse_log",
    "parse_ls_tree",
    "parse_name_status",
    "parse_numstat",
    "resolve_repository_root",
    "status_from_code",
    "validate_commit_id",
    "validate_diff_id",
]
