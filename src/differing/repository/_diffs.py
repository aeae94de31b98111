"""Diff enumeration, changed-file listing and commit listing.

Every listing is computed fresh from git on each call. A git failure at any
step aborts the listing with GitCommandError; statistics are never silently
replaced with zeros.
"""

from datetime import UTC, datetime

from structlog.typing import FilteringBoundLogger

from differing.exceptions import GitCommandError
from differing.repository._models import (
    WORKING_DIFF_ID,
    WORKING_DIFF_MESSAGE,
    CommitRecord,
    DiffStats,
    DiffSummary,
    FileChangeRecord,
)
from differing.repository._parsing import (
    LOG_FORMAT,
    LogEntry,
    parse_log,
    parse_name_status,
    parse_numstat,
)
from differing.repository._revisions import RevisionResolver, is_working
from differing.utils import GitRunner

DEFAULT_MAX_COMMITS: int = 20


def _numstat(runner: GitRunner, *revisions: str) -> DiffStats:
    result = runner.run(["diff", "--numstat", "-z", "--no-renames", *revisions, "--"])
    try:
        return parse_numstat(result.text)
    except ValueError as e:
        msg = f"Unparsable numstat output from git diff {' '.join(revisions)}"
        raise GitCommandError(msg, args=result.args, detail=str(e)) from e


def _log(runner: GitRunner, *args: str) -> list[LogEntry]:
    result = runner.run(["log", LOG_FORMAT, *args, "--"])
    try:
        return parse_log(result.text)
    except ValueError as e:
        msg = "Unparsable output from git log"
        raise GitCommandError(msg, args=result.args, detail=str(e)) from e


class DiffEnumerator:
    """Lists the selectable diffs: working changes plus recent commits.

    Args:
        runner: Git runner bound to the repository root.
        revisions: Revision resolver for the same repository.
        max_commits: Number of recent commits to list.
        logger: Optional structured logger.
    """

    __slots__ = ("_logger", "_max_commits", "_revisions", "_runner")

    def __init__(
        self,
        runner: GitRunner,
        revisions: RevisionResolver,
        *,
        max_commits: int = DEFAULT_MAX_COMMITS,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._runner = runner
        self._revisions = revisions
        self._max_commits = max_commits
        self._logger = logger

    def list_diffs(self, *, now: datetime | None = None) -> list[DiffSummary]:
        """List the working changes entry followed by recent commits.

        The working entry is always present, even when nothing differs. Each
        commit carries statistics against its first parent; a root commit is
        compared against the empty tree, so its files count as added.

        Args:
            now: Timestamp for the working entry. Defaults to the current time.

        Returns:
            Summaries ordered working first, then commits newest first.

        Raises:
            GitCommandError: If any git invocation fails.
        """
        head = self._revisions.head()
        working_base = head if head is not None else self._revisions.empty_tree()
        working = _numstat(self._runner, working_base)

        summaries = [
            DiffSummary(
                id=WORKING_DIFF_ID,
                message=WORKING_DIFF_MESSAGE,
                author="",
                timestamp=now or datetime.now(UTC),
                files_count=working.files_changed,
                additions=working.total_additions,
                deletions=working.total_deletions,
            )
        ]
        if head is None:
            return summaries

        for entry in _log(self._runner, f"--max-count={self._max_commits}", head):
            parent = entry.parents[0] if entry.parents else self._revisions.empty_tree()
            stats = _numstat(self._runner, parent, entry.id)
            summaries.append(
                DiffSummary(
                    id=entry.id,
                    message=entry.subject,
                    author=entry.author,
                    timestamp=entry.timestamp,
                    files_count=stats.files_changed,
                    additions=stats.total_additions,
                    deletions=stats.total_deletions,
                )
            )

        if self._logger is not None:
            self._logger.debug("diffs_listed", count=len(summaries))
        return summaries


class FileChangeLister:
    """Lists the files changed between a diff's base and the working tree.

    For a commit, the base is the commit's first parent, so the listing is the
    cumulative change from that commit through to the working tree.
    """

    __slots__ = ("_revisions", "_runner")

    def __init__(self, runner: GitRunner, revisions: RevisionResolver) -> None:
        self._runner = runner
        self._revisions = revisions

    def list_files(self, diff_id: str) -> list[FileChangeRecord]:
        """List changed files for a diff identifier, sorted by path.

        Raises:
            InvalidRevisionError: If the identifier is malformed.
            UnknownRevisionError: If the commit does not exist.
            GitCommandError: If any git invocation fails.
        """
        base = self._revisions.diff_base(diff_id).base
        result = self._runner.run(
            ["diff", "--name-status", "-z", "--no-renames", base, "--"]
        )
        entries = parse_name_status(result.text)
        stats = {f.path: f for f in _numstat(self._runner, base).files}

        records: list[FileChangeRecord] = []
        for entry in entries:
            file_stats = stats.get(entry.path)
            records.append(
                FileChangeRecord(
                    path=entry.path,
                    status=entry.status,
                    additions=file_stats.additions if file_stats else 0,
                    deletions=file_stats.deletions if file_stats else 0,
                )
            )
        records.sort(key=lambda r: r.path)
        return records


class CommitLister:
    """Lists the commits spanned by a diff.

    Args:
        runner: Git runner bound to the repository root.
        revisions: Revision resolver for the same repository.
        max_commits: Window size used for the working changes.
    """

    __slots__ = ("_max_commits", "_revisions", "_runner")

    def __init__(
        self,
        runner: GitRunner,
        revisions: RevisionResolver,
        *,
        max_commits: int = DEFAULT_MAX_COMMITS,
    ) -> None:
        self._runner = runner
        self._revisions = revisions
        self._max_commits = max_commits

    def list_commits(self, diff_id: str) -> list[CommitRecord]:
        """List commits from a diff's base (exclusive) through HEAD, newest first.

        For ``"working"`` this is the same recent-commit window the diff
        listing uses. For a commit it is that commit and every later commit
        up to HEAD.

        Raises:
            InvalidRevisionError: If the identifier is malformed.
            UnknownRevisionError: If the commit does not exist.
            GitCommandError: If any git invocation fails.
        """
        if is_working(diff_id):
            head = self._revisions.head()
            if head is None:
                return []
            entries = _log(self._runner, f"--max-count={self._max_commits}", head)
        else:
            target = self._revisions.diff_base(diff_id)
            head = target.head
            if head is None:
                return []
            if target.parent is None:
                entries = _log(self._runner, head)
            else:
                entries = _log(self._runner, f"{target.parent}..{head}")

        return [
            CommitRecord(
                id=entry.id,
                message=entry.subject,
                author=entry.author,
                timestamp=entry.timestamp,
                is_head=entry.id == head,
            )
            for entry in entries
        ]
