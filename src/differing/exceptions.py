"""Differing exceptions."""

from collections.abc import Sequence
from pathlib import Path
from typing import Any


class DifferingError(Exception):
    """Base exception for differing errors."""


class NotARepositoryError(DifferingError):
    """Raised when no git repository encloses the working directory.

    Attributes:
        path: The directory that was searched from.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and the directory searched from."""
        super().__init__(message)
        self.path: Path | None = path


# =============================================================================
# Path Exceptions
# =============================================================================


class InvalidPathError(DifferingError, ValueError):
    """Raised when a repository-relative path is malformed or escapes the root.

    Attributes:
        path: The offending path string as supplied by the caller.
    """

    def __init__(self, message: str, *, path: str) -> None:
        """Initialize with error message and the rejected path."""
        super().__init__(message)
        self.path: str = path


class PathEscapeError(InvalidPathError):
    """Raised by the rooted file accessor when resolution leaves the root."""


class NotTrackedError(DifferingError):
    """Raised when a path is not known to version control.

    Attributes:
        path: The repository-relative path that is not tracked.
    """

    def __init__(self, message: str, *, path: str) -> None:
        """Initialize with error message and the untracked path."""
        super().__init__(message)
        self.path: str = path


class FileAccessError(DifferingError):
    """Raised when a working tree file cannot be opened, read or written.

    Attributes:
        path: The repository-relative path being accessed.
    """

    def __init__(self, message: str, *, path: str) -> None:
        """Initialize with error message and the path being accessed."""
        super().__init__(message)
        self.path: str = path


# =============================================================================
# Revision Exceptions
# =============================================================================


class InvalidRevisionError(DifferingError, ValueError):
    """Raised when a diff identifier is neither "working" nor a hex commit id.

    Attributes:
        revision: The rejected identifier.
    """

    def __init__(self, message: str, *, revision: str) -> None:
        """Initialize with error message and the rejected identifier."""
        super().__init__(message)
        self.revision: str = revision


class UnknownRevisionError(DifferingError, KeyError):
    """Raised when a well-formed commit id does not name a commit.

    Attributes:
        revision: The identifier that could not be resolved.
    """

    def __init__(self, message: str, *, revision: str) -> None:
        """Initialize with error message and the unresolved identifier."""
        super().__init__(message)
        self.revision: str = revision

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


# =============================================================================
# Git Command Exceptions
# =============================================================================


class GitCommandError(DifferingError):
    """Raised when a git invocation fails, times out or cannot be started.

    Attributes:
        args_: The git arguments (without the executable).
        exit_code: Process exit code, or None if the process did not finish.
        detail: Diagnostic text emitted by git (truncated).
        timed_out: Whether the invocation hit its timeout.
    """

    def __init__(
        self,
        message: str,
        *,
        args: Sequence[str] = (),
        exit_code: int | None = None,
        detail: str = "",
        timed_out: bool = False,
    ) -> None:
        """Initialize with error message and invocation context."""
        super().__init__(message)
        self.args_: tuple[str, ...] = tuple(args)
        self.exit_code: int | None = exit_code
        self.detail: str = detail
        self.timed_out: bool = timed_out


# =============================================================================
# Amend Exceptions
# =============================================================================


class AmendError(DifferingError):
    """Base exception for refused commit message amendments."""


class AmendEmptyMessageError(AmendError, ValueError):
    """Raised when the replacement commit message is blank."""


class AmendRejectedNotHeadError(AmendError):
    """Raised when the amend target is not the current HEAD commit.

    Attributes:
        target: The commit id the caller asked to amend.
        head: The actual HEAD commit id.
    """

    def __init__(self, message: str, *, target: str, head: str | None) -> None:
        """Initialize with error message, requested target and actual HEAD."""
        super().__init__(message)
        self.target: str = target
        self.head: str | None = head


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(DifferingError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
