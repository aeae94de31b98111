"""Rooted file access.

RootedFileAccessor holds an open descriptor for the repository root and
resolves every relative path one component at a time with ``dir_fd`` and
``O_NOFOLLOW``. Symlinks are followed manually and ``..`` pops one level, so a
path can never resolve above the root no matter what string was validated
earlier or what the filesystem contains. Requires a POSIX platform.
"""

import errno
import os
import stat
from collections import deque
from pathlib import Path
from types import TracebackType
from typing import Final, Self

from differing.exceptions import PathEscapeError

# Same bound as the kernel's MAXSYMLINKS
_MAX_SYMLINKS: Final = 40

_DIR_FLAGS: Final = (
    os.O_RDONLY | getattr(os, "O_DIRECTORY", 0) | getattr(os, "O_CLOEXEC", 0)
)
_NOFOLLOW: Final = getattr(os, "O_NOFOLLOW", 0) | getattr(os, "O_CLOEXEC", 0)


class RootedFileAccessor:
    """Filesystem handle confined to a single directory tree.

    The accessor is created once per process and shared read-only between
    requests. It implements the context manager protocol to release the root
    descriptor.

    Args:
        root: Absolute path of the directory to confine access to.
    """

    __slots__: Final = ("_root", "_root_fd")
    _root: Path
    _root_fd: int

    def __init__(self, root: Path) -> None:
        self._root = root
        self._root_fd = os.open(root, _DIR_FLAGS)

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
        """Close the root descriptor. Safe to call more than once."""
        if self._root_fd >= 0:
            os.close(self._root_fd)
            self._root_fd = -1

    @property
    def root(self) -> Path:
        return self._root

    # =========================================================================
    # File Operations
    # =========================================================================

    def read_bytes(self, rel_path: str) -> bytes:
        """Read a file below the root.

        Raises:
            PathEscapeError: If resolution would leave the root.
            OSError: If the file cannot be opened or read.
        """
        fd = self._open(rel_path, os.O_RDONLY)
        with os.fdopen(fd, "rb") as f:
            return f.read()

    def read_text(self, rel_path: str) -> str:
        """Read a file below the root as UTF-8, replacing invalid bytes."""
        return self.read_bytes(rel_path).decode("utf-8", errors="replace")

    def write_bytes(self, rel_path: str, data: bytes, *, create: bool = False) -> int:
        """Truncate and overwrite a file below the root.

        Args:
            rel_path: Path relative to the root.
            data: New file content.
            create: Create the file if it does not exist.

        Returns:
            Number of bytes written.

        Raises:
            PathEscapeError: If resolution would leave the root.
            OSError: If the file cannot be opened or written.
        """
        flags = os.O_WRONLY | os.O_TRUNC
        if create:
            flags |= os.O_CREAT
        fd = self._open(rel_path, flags)
        with os.fdopen(fd, "wb") as f:
            return f.write(data)

    # =========================================================================
    # Resolution
    # =========================================================================

    def _open(self, rel_path: str, flags: int, mode: int = 0o644) -> int:
        """Open ``rel_path`` relative to the root and return a descriptor."""
        if self._root_fd < 0:
            msg = "Rooted file accessor is closed"
            raise ValueError(msg)
        if not rel_path or rel_path.startswith("/"):
            msg = f"Path must be relative to the repository root: {rel_path}"
            raise PathEscapeError(msg, path=rel_path)

        pending = deque(rel_path.split("/"))
        opened: list[int] = []
        links = 0
        try:
            while pending:
                name = pending.popleft()
                if name in ("", "."):
                    continue
                if name == "..":
                    if not opened:
                        msg = f"Path escapes the repository root: {rel_path}"
                        raise PathEscapeError(msg, path=rel_path)
                    os.close(opened.pop())
                    continue

                parent_fd = opened[-1] if opened else self._root_fd
                is_last = all(p in ("", ".") for p in pending)

                try:
                    st = os.stat(name, dir_fd=parent_fd, follow_symlinks=False)
                except FileNotFoundError:
                    if not (is_last and flags & os.O_CREAT):
                        raise
                    st = None

                if st is not None and stat.S_ISLNK(st.st_mode):
                    links += 1
                    if links > _MAX_SYMLINKS:
                        raise OSError(errno.ELOOP, os.strerror(errno.ELOOP), rel_path)
                    target = os.readlink(name, dir_fd=parent_fd)
                    if target.startswith("/"):
                        msg = f"Symlink leaves the repository root: {rel_path}"
                        raise PathEscapeError(msg, path=rel_path)
                    pending.extendleft(reversed(target.split("/")))
                    continue

                if is_last:
                    return os.open(name, flags | _NOFOLLOW, mode, dir_fd=parent_fd)
                opened.append(os.open(name, _DIR_FLAGS | _NOFOLLOW, dir_fd=parent_fd))

            # Every component was consumed without reaching a file
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), rel_path)
        finally:
            for fd in opened:
                os.close(fd)
