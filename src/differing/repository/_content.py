"""File content resolution and saving."""

from structlog.typing import FilteringBoundLogger

from differing.exceptions import FileAccessError
from differing.repository._models import FileContentPair, SaveResult
from differing.repository._parsing import TreeEntry
from differing.repository._revisions import RevisionResolver, validate_diff_id
from differing.repository._rooted import RootedFileAccessor
from differing.repository._validator import PathValidator
from differing.utils import GitRunner

# Missing on disk reads as empty content
_ABSENT_ERRORS = (FileNotFoundError, IsADirectoryError, NotADirectoryError)


class FileContentResolver:
    """Produces the old and new sides of one file's diff.

    The old side is the blob at the diff base. The new side is always the
    current working tree file, read through the rooted accessor.

    Args:
        runner: Git runner bound to the repository root.
        revisions: Revision resolver for the same repository.
        validator: Path validator for the same repository.
        accessor: Rooted accessor for the working tree.
    """

    __slots__ = ("_accessor", "_revisions", "_runner", "_validator")

    def __init__(
        self,
        runner: GitRunner,
        revisions: RevisionResolver,
        validator: PathValidator,
        accessor: RootedFileAccessor,
    ) -> None:
        self._runner = runner
        self._revisions = revisions
        self._validator = validator
        self._accessor = accessor

    def resolve_content(self, diff_id: str, rel_path: str) -> FileContentPair:
        """Resolve both sides of a file's diff.

        Args:
            diff_id: ``"working"`` or a commit id.
            rel_path: Repository-relative file path.

        Returns:
            The content pair. A side where the file does not exist is "".

        Raises:
            InvalidRevisionError: If the identifier is malformed.
            UnknownRevisionError: If the commit does not exist.
            InvalidPathError: If the path is malformed or escapes the root.
            NotTrackedError: If the path is unknown to git at both points.
            FileAccessError: If the working tree file exists but cannot be read.
            GitCommandError: If a git invocation fails.
        """
        base = self._revisions.diff_base(diff_id)
        entry = self._validator.validate_readable(rel_path, base.base)
        return FileContentPair(
            path=rel_path,
            old_content=self._read_blob(entry),
            new_content=self._read_working(rel_path),
        )

    def _read_blob(self, entry: TreeEntry | None) -> str:
        if entry is None or entry.type != "blob":
            return ""
        result = self._runner.run(["cat-file", "blob", entry.object_id])
        return result.text

    def _read_working(self, rel_path: str) -> str:
        try:
            return self._accessor.read_text(rel_path)
        except _ABSENT_ERRORS:
            return ""
        except PermissionError as e:
            msg = f"Cannot read file: {rel_path}"
            raise FileAccessError(msg, path=rel_path) from e
        except OSError as e:
            msg = f"Failed to read file {rel_path}: {e.strerror or e}"
            raise FileAccessError(msg, path=rel_path) from e


class FileSaver:
    """Writes edited content back to tracked working tree files.

    Args:
        validator: Path validator for the repository.
        accessor: Rooted accessor for the working tree.
        logger: Optional structured logger.
    """

    __slots__ = ("_accessor", "_logger", "_validator")

    def __init__(
        self,
        validator: PathValidator,
        accessor: RootedFileAccessor,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._validator = validator
        self._accessor = accessor
        self._logger = logger

    def save_file(self, diff_id: str, rel_path: str, content: str) -> SaveResult:
        """Overwrite a tracked file with new content.

        The path must pass full validation before anything is opened. The
        file is truncated and rewritten in place; it is never created.

        Args:
            diff_id: ``"working"`` or a commit id. Only its form is checked;
                saving always targets the working tree.
            rel_path: Repository-relative file path.
            content: New file content, written as UTF-8.

        Returns:
            The path and number of bytes written.

        Raises:
            InvalidRevisionError: If the identifier is malformed.
            InvalidPathError: If the path is malformed or escapes the root.
            NotTrackedError: If the path is not tracked.
            FileAccessError: If the file cannot be opened or written.
        """
        validate_diff_id(diff_id)
        self._validator.validate(rel_path)
        try:
            written = self._accessor.write_bytes(rel_path, content.encode("utf-8"))
        except FileNotFoundError as e:
            msg = f"File does not exist in the working tree: {rel_path}"
            raise FileAccessError(msg, path=rel_path) from e
        except OSError as e:
            msg = f"Failed to write file {rel_path}: {e.strerror or e}"
            raise FileAccessError(msg, path=rel_path) from e

        if self._logger is not None:
            self._logger.info("file_saved", path=rel_path, bytes=written)
        return SaveResult(path=rel_path, bytes_written=written)
