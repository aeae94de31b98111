"""Path validation for repository-relative paths.

A path is accepted for writing only if it is non-empty, relative, stays
inside the repository root after joining and normalization, and is tracked
by git. Reads additionally accept paths present in the tree being compared
against, so deleted files can still be shown.
"""

import os
import posixpath
from pathlib import Path

from structlog.typing import FilteringBoundLogger

from differing.exceptions import InvalidPathError, NotTrackedError
from differing.repository._parsing import TreeEntry, parse_ls_tree
from differing.utils import GitRunner


class PathValidator:
    """Validates repository-relative paths against the root and the index.

    Args:
        root: Absolute repository root.
        runner: Git runner bound to the repository root.
        logger: Optional structured logger; rejections are logged at info level.
    """

    __slots__ = ("_logger", "_root", "_runner")

    def __init__(
        self,
        root: Path,
        runner: GitRunner,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._root = os.path.normpath(root)
        self._runner = runner
        self._logger = logger

    def validate(self, rel_path: str) -> str:
        """Validate a path for modification.

        The path must pass both the lexical containment check and the tracked
        check. The lexical check runs first, so a path that escapes the root
        is rejected without consulting git.

        Args:
            rel_path: Path relative to the repository root.

        Returns:
            The path, unchanged.

        Raises:
            InvalidPathError: If the path is empty, absolute or escapes the root.
            NotTrackedError: If git does not track the path.
        """
        self.check_contained(rel_path)
        if not self.is_tracked(rel_path):
            self._reject("not_tracked", rel_path)
            msg = f"File is not tracked by git: {rel_path}"
            raise NotTrackedError(msg, path=rel_path)
        return rel_path

    def validate_readable(self, rel_path: str, treeish: str) -> TreeEntry | None:
        """Validate a path for reading against a comparison tree.

        Args:
            rel_path: Path relative to the repository root.
            treeish: Tree-ish the path may be present in instead of the index.

        Returns:
            The blob entry of the path in ``treeish``, or None if no file has
            that path there.

        Raises:
            InvalidPathError: If the path is empty, absolute or escapes the root.
            NotTrackedError: If the path is neither tracked nor a file in
                ``treeish``.
        """
        self.check_contained(rel_path)
        entry = self.tree_entry(treeish, rel_path)
        if entry is not None and entry.type != "blob":
            # Directories and submodules have no content of their own
            entry = None
        if entry is None and not self.is_tracked(rel_path):
            self._reject("not_tracked", rel_path)
            msg = f"File is not tracked by git: {rel_path}"
            raise NotTrackedError(msg, path=rel_path)
        return entry

    def check_contained(self, rel_path: str) -> None:
        """Check that a path is relative and normalizes to inside the root.

        Raises:
            InvalidPathError: If it is not.
        """
        if not rel_path or "\0" in rel_path:
            self._reject("invalid_path", rel_path)
            msg = f"Invalid file path: {rel_path!r}"
            raise InvalidPathError(msg, path=rel_path)
        if os.path.isabs(rel_path):
            self._reject("absolute_path", rel_path)
            msg = f"File path must be relative: {rel_path}"
            raise InvalidPathError(msg, path=rel_path)

        joined = os.path.normpath(os.path.join(self._root, rel_path))
        if joined != self._root and not joined.startswith(self._root + os.sep):
            self._reject("path_escape", rel_path)
            msg = f"File path escapes the repository root: {rel_path}"
            raise InvalidPathError(msg, path=rel_path)

    def is_tracked(self, rel_path: str) -> bool:
        """Ask git whether the index has an entry at exactly this path.

        A directory holding tracked files is not itself tracked.
        """
        result = self._runner.run(
            ["ls-files", "-z", "--error-unmatch", "--", rel_path], check=False
        )
        if result.exit_code is None:
            raise self._runner.error_for(result)
        if not result.ok:
            return False
        wanted = posixpath.normpath(rel_path)
        return wanted in result.text.split("\0")

    def tree_entry(self, treeish: str, rel_path: str) -> TreeEntry | None:
        """Look up a path in a tree-ish.

        Returns:
            The entry whose path is exactly ``rel_path``, or None if absent.
        """
        result = self._runner.run(["ls-tree", "-z", treeish, "--", rel_path])
        wanted = posixpath.normpath(rel_path)
        for entry in parse_ls_tree(result.stdout):
            if entry.path == wanted:
                return entry
        return None

    def _reject(self, reason: str, rel_path: str) -> None:
        if self._logger is not None:
            self._logger.info("path_rejected", reason=reason, path=rel_path)
