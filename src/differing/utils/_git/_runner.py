"""Git subprocess execution.

This module runs the git executable with a discrete argument vector, a
bounded timeout, captured output and a hardened environment. It is the only
place in differing that spawns processes.
"""

import os
import subprocess
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from structlog.typing import FilteringBoundLogger

from differing.exceptions import GitCommandError

# Default timeout in milliseconds
DEFAULT_TIMEOUT_MS: int = 10000  # 10 seconds

# Maximum diagnostic size in bytes
MAX_OUTPUT_BYTES: int = 102400  # 100KB

# Pathspecs are literal paths, git never prompts, read-only queries never
# take optional index locks, and messages are untranslated.
_GIT_ENV: dict[str, str] = {
    "GIT_LITERAL_PATHSPECS": "1",
    "GIT_TERMINAL_PROMPT": "0",
    "GIT_OPTIONAL_LOCKS": "0",
    "LC_ALL": "C",
}


@dataclass(frozen=True, slots=True)
class GitConfig:
    """Configuration for git execution.

    Attributes:
        executable: Name or path of the git executable.
        cwd: Working directory for every invocation.
        timeout_ms: Per-invocation timeout in milliseconds.
        env: Additional environment variables to set.
    """

    executable: str = "git"
    cwd: str | Path | None = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    env: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class GitResult:
    """Result from a git invocation.

    Attributes:
        args: Arguments passed to git (without the executable).
        exit_code: Process exit code, or None if the process did not finish.
        stdout: Raw standard output.
        stderr: Standard error decoded as UTF-8.
        timed_out: Whether the invocation timed out.
        error: Error message if the process could not be run.
    """

    args: tuple[str, ...]
    exit_code: int | None = None
    stdout: bytes = b""
    stderr: str = ""
    timed_out: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether git ran to completion with exit code 0."""
        return self.exit_code == 0

    @property
    def text(self) -> str:
        """Standard output decoded as UTF-8 with replacement characters."""
        return self.stdout.decode("utf-8", errors="replace")


def truncate_output(output: str, max_bytes: int = MAX_OUTPUT_BYTES) -> str:
    """Truncate output to max bytes, preserving valid UTF-8.

    Args:
        output: The string to truncate.
        max_bytes: Maximum size in bytes.

    Returns:
        Truncated string with indicator if truncated.
    """
    if not output:
        return output

    encoded = output.encode("utf-8")
    if len(encoded) <= max_bytes:
        return output

    # 'ignore' drops a multi-byte sequence cut at the boundary
    truncated = encoded[:max_bytes].decode("utf-8", errors="ignore")

    return truncated + "\n... [output truncated]"


def _describe(args: Sequence[str]) -> str:
    return "git " + " ".join(args)


class GitRunner:
    """Runs git commands for a single repository.

    Args:
        config: Execution settings shared by every invocation.
        logger: Structured logger receiving one debug entry per invocation.
    """

    __slots__ = ("_config", "_logger")

    def __init__(
        self,
        config: GitConfig,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._config = config
        self._logger = logger

    @property
    def config(self) -> GitConfig:
        return self._config

    def run(
        self,
        args: Sequence[str],
        *,
        stdin: bytes | None = None,
        env: Mapping[str, str] | None = None,
        check: bool = True,
    ) -> GitResult:
        """Execute ``git <args>``.

        Args:
            args: Arguments passed to git as discrete argv elements.
            stdin: Optional data piped to git's standard input.
            env: Extra environment variables for this invocation only.
            check: Raise GitCommandError unless git exits with status 0.

        Returns:
            GitResult with the invocation outcome.

        Raises:
            GitCommandError: If check is set and git failed, timed out or
                could not be started.
        """
        cmd = [self._config.executable, *args]
        full_env = {**os.environ, **_GIT_ENV, **self._config.env, **(env or {})}
        cwd = str(self._config.cwd) if self._config.cwd else None
        timeout_seconds = self._config.timeout_ms / 1000.0

        started = time.monotonic()
        try:
            completed = subprocess.run(  # noqa: S603
                cmd,
                env=full_env,
                cwd=cwd,
                input=stdin if stdin is not None else b"",
                capture_output=True,
                timeout=timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired:
            result = GitResult(
                args=tuple(args),
                timed_out=True,
                error=f"Command timed out after {timeout_seconds}s",
            )
        except OSError as e:
            # Executable missing or not runnable
            result = GitResult(args=tuple(args), error=str(e))
        else:
            result = GitResult(
                args=tuple(args),
                exit_code=completed.returncode,
                stdout=completed.stdout,
                stderr=completed.stderr.decode("utf-8", errors="replace"),
            )

        if self._logger is not None:
            self._logger.debug(
                "git",
                args=list(args),
                exit_code=result.exit_code,
                timed_out=result.timed_out,
                duration_ms=round((time.monotonic() - started) * 1000, 1),
            )

        if check and not result.ok:
            raise self.error_for(result)
        return result

    def error_for(
        self, result: GitResult, message: str | None = None
    ) -> GitCommandError:
        """Build the GitCommandError describing a failed invocation."""
        detail = result.error or result.stderr.strip()
        if message is None:
            if result.timed_out:
                message = f"{_describe(result.args)} timed out"
            elif result.exit_code is None:
                message = f"{_describe(result.args)} could not be run"
            else:
                message = (
                    f"{_describe(result.args)} failed with exit code {result.exit_code}"
                )
        if self._logger is not None:
            self._logger.warning(
                "git_failed",
                args=list(result.args),
                exit_code=result.exit_code,
                detail=truncate_output(detail, 2000),
            )
        return GitCommandError(
            message,
            args=result.args,
            exit_code=result.exit_code,
            detail=truncate_output(detail),
            timed_out=result.timed_out,
        )
