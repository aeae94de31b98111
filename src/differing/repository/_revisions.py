"""Diff identifier and revision handling.

A diff identifier is either the ``"working"`` sentinel or a commit id. Commit
ids are checked to be well-formed hex before they are handed to git, and
parents are always read structurally from git rather than spelled as
``<id>^`` revision expressions.
"""

import re
from dataclasses import dataclass
from typing import Final

from differing.exceptions import InvalidRevisionError, UnknownRevisionError
from differing.repository._models import WORKING_DIFF_ID
from differing.utils import GitRunner

_COMMIT_ID_PATTERN: Final = re.compile(r"[0-9a-fA-F]{4,64}")


def is_working(diff_id: str) -> bool:
    """Check whether a diff identifier selects the working changes."""
    return diff_id == WORKING_DIFF_ID


def validate_commit_id(revision: str) -> str:
    """Check that a string is a plausible abbreviated or full commit id.

    Args:
        revision: Candidate commit id.

    Returns:
        The id, lowercased.

    Raises:
        InvalidRevisionError: If the id is not 4 to 64 hex characters.
    """
    if _COMMIT_ID_PATTERN.fullmatch(revision) is None:
        msg = f"Invalid commit id: {revision!r}"
        raise InvalidRevisionError(msg, revision=revision)
    return revision.lower()


def validate_diff_id(diff_id: str) -> str:
    """Check that a diff identifier is ``"working"`` or a well-formed commit id.

    Raises:
        InvalidRevisionError: If the identifier is neither.
    """
    if is_working(diff_id):
        return diff_id
    return validate_commit_id(diff_id)


@dataclass(frozen=True, slots=True)
class DiffBase:
    """The comparison point selected by a diff identifier.

    Attributes:
        diff_id: The identifier as requested.
        base: Tree-ish the working tree is compared against (a commit hash or
            the empty tree).
        commit: Full hash of the selected commit, or None for working changes.
        head: Full hash of HEAD, or None if HEAD is unborn.
        parent: First parent of the selected commit, or None for working
            changes and root commits.
    """

    diff_id: str
    base: str
    commit: str | None
    head: str | None
    parent: str | None = None


class RevisionResolver:
    """Resolves HEAD, commit ids, parents and diff bases through git."""

    __slots__ = ("_empty_tree", "_runner")

    def __init__(self, runner: GitRunner) -> None:
        self._runner = runner
        self._empty_tree: str | None = None

    def head(self) -> str | None:
        """Return the full hash of HEAD, or None if HEAD is unborn."""
        result = self._runner.run(
            ["rev-parse", "--verify", "--quiet", "HEAD^{commit}"], check=False
        )
        if result.ok:
            return result.text.strip()
        if result.exit_code == 1:
            return None
        raise self._runner.error_for(result)

    def resolve_commit(self, revision: str) -> str:
        """Resolve a commit id to its full hash.

        Args:
            revision: Abbreviated or full commit id.

        Returns:
            The full commit hash.

        Raises:
            InvalidRevisionError: If the id is not well-formed hex.
            UnknownRevisionError: If no commit has that id.
            GitCommandError: If git could not be run.
        """
        commit_id = validate_commit_id(revision)
        result = self._runner.run(
            [
                "rev-parse",
                "--verify",
                "--quiet",
                "--end-of-options",
                f"{commit_id}^{{commit}}",
            ],
            check=False,
        )
        if result.ok:
            return result.text.strip()
        if result.exit_code is None:
            raise self._runner.error_for(result)
        # Unknown or ambiguous abbreviations both land here
        msg = f"Unknown commit: {revision}"
        raise UnknownRevisionError(msg, revision=revision)

    def first_parent(self, commit: str) -> str | None:
        """Return the first parent of a resolved commit, or None for a root commit."""
        result = self._runner.run(["rev-list", "--parents", "--max-count=1", commit])
        hashes = result.text.split()
        return hashes[1] if len(hashes) > 1 else None

    def empty_tree(self) -> str:
        """Return the id of the empty tree in this repository's hash format."""
        if self._empty_tree is None:
            result = self._runner.run(
                ["hash-object", "-t", "tree", "--stdin"], stdin=b""
            )
            self._empty_tree = result.text.strip()
        return self._empty_tree

    def diff_base(self, diff_id: str) -> DiffBase:
        """Resolve what a diff identifier compares the working tree against.

        ``"working"`` compares against HEAD. A commit compares against its
        first parent, so the diff covers that commit and everything after it.
        Root commits and unborn HEADs compare against the empty tree.

        Raises:
            InvalidRevisionError: If the identifier is malformed.
            UnknownRevisionError: If the commit does not exist.
        """
        head = self.head()
        if is_working(diff_id):
            return DiffBase(
                diff_id=diff_id,
                base=head if head is not None else self.empty_tree(),
                commit=None,
                head=head,
            )

        commit = self.resolve_commit(diff_id)
        parent = self.first_parent(commit)
        return DiffBase(
            diff_id=diff_id,
            base=parent if parent is not None else self.empty_tree(),
            commit=commit,
            head=head,
            parent=parent,
        )
