"""Repository service facade.

DiffRepository wires the resolver, validator, listers and amender together
around one repository root. It is built once at startup and shared by every
request; it holds no mutable state besides the rooted file accessor's open
root descriptor.
"""

from pathlib import Path
from types import TracebackType
from typing import Self

from structlog.typing import FilteringBoundLogger

from differing.repository._amend import CommitAmender
from differing.repository._content import FileContentResolver, FileSaver
from differing.repository._diffs import (
    DEFAULT_MAX_COMMITS,
    CommitLister,
    DiffEnumerator,
    FileChangeLister,
)
from differing.repository._models import (
    AmendResult,
    CommitRecord,
    DiffSummary,
    FileChangeRecord,
    FileContentPair,
    RepositoryRoot,
    SaveResult,
)
from differing.repository._revisions import RevisionResolver
from differing.repository._root import resolve_repository_root
from differing.repository._rooted import RootedFileAccessor
from differing.repository._validator import PathValidator
from differing.utils import DEFAULT_TIMEOUT_MS, GitConfig, GitRunner


class DiffRepository:
    """Diff and amend operations for a single checkout.

    Use :meth:`open` to resolve the root from a working directory. The class
    implements the context manager protocol to release the rooted accessor.

    Args:
        root: Resolved repository root.
        executable: Git executable name or path.
        timeout_ms: Timeout applied to each git invocation.
        max_commits: Number of recent commits listed.
        logger: Optional structured logger.

    Example:
        with DiffRepository.open(Path.cwd()) as repo:
            for diff in repo.list_diffs():
                print(diff.id, diff.files_count)
    """

    __slots__ = (
        "_accessor",
        "_amender",
        "_commits",
        "_content",
        "_diffs",
        "_files",
        "_logger",
        "_revisions",
        "_root",
        "_runner",
        "_saver",
        "_validator",
    )

    def __init__(
        self,
        root: RepositoryRoot,
        *,
        executable: str = "git",
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        max_commits: int = DEFAULT_MAX_COMMITS,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._root = root
        self._logger = logger
        self._runner = GitRunner(
            GitConfig(executable=executable, cwd=root.path, timeout_ms=timeout_ms),
            logger=logger,
        )
        self._accessor = RootedFileAccessor(root.path)
        self._revisions = RevisionResolver(self._runner)
        self._validator = PathValidator(root.path, self._runner, logger=logger)
        self._diffs = DiffEnumerator(
            self._runner, self._revisions, max_commits=max_commits, logger=logger
        )
        self._files = FileChangeLister(self._runner, self._revisions)
        self._commits = CommitLister(
            self._runner, self._revisions, max_commits=max_commits
        )
        self._content = FileContentResolver(
            self._runner, self._revisions, self._validator, self._accessor
        )
        self._saver = FileSaver(self._validator, self._accessor, logger=logger)
        self._amender = CommitAmender(self._runner, self._revisions, logger=logger)

    @classmethod
    def open(
        cls,
        cwd: Path | None = None,
        *,
        executable: str = "git",
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        max_commits: int = DEFAULT_MAX_COMMITS,
        logger: FilteringBoundLogger | None = None,
    ) -> Self:
        """Resolve the checkout enclosing ``cwd`` and open it.

        Raises:
            NotARepositoryError: If ``cwd`` is not inside a checkout.
        """
        root = resolve_repository_root(
            cwd, executable=executable, timeout_ms=timeout_ms, logger=logger
        )
        return cls(
            root,
            executable=executable,
            timeout_ms=timeout_ms,
            max_commits=max_commits,
            logger=logger,
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._accessor.close()

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def root(self) -> RepositoryRoot:
        return self._root

    @property
    def runner(self) -> GitRunner:
        return self._runner

    @property
    def validator(self) -> PathValidator:
        return self._validator

    # =========================================================================
    # Read Operations
    # =========================================================================

    def list_diffs(self) -> list[DiffSummary]:
        return self._diffs.list_diffs()

    def list_files(self, diff_id: str) -> list[FileChangeRecord]:
        return self._files.list_files(diff_id)

    def list_commits(self, diff_id: str) -> list[CommitRecord]:
        return self._commits.list_commits(diff_id)

    def resolve_content(self, diff_id: str, rel_path: str) -> FileContentPair:
        return self._content.resolve_content(diff_id, rel_path)

    # =========================================================================
    # Write Operations
    # =========================================================================

    def save_file(self, diff_id: str, rel_path: str, content: str) -> SaveResult:
        return self._saver.save_file(diff_id, rel_path, content)

    def amend_message(self, target: str, message: str) -> AmendResult:
        return self._amender.amend(target, message)
