"""Repository root resolution."""

from pathlib import Path

from structlog.typing import FilteringBoundLogger

from differing.exceptions import NotARepositoryError
from differing.repository._models import RepositoryRoot
from differing.utils import DEFAULT_TIMEOUT_MS, GitConfig, GitRunner, find_main_worktree


def resolve_repository_root(
    cwd: Path | None = None,
    *,
    executable: str = "git",
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    logger: FilteringBoundLogger | None = None,
) -> RepositoryRoot:
    """Find the top-level directory of the checkout enclosing ``cwd``.

    Inside a linked worktree this is the worktree's own root; the main
    checkout it belongs to is reported separately via dulwich.

    Args:
        cwd: Directory to start from. Defaults to the process working directory.
        executable: Git executable name or path.
        timeout_ms: Timeout for the git query.
        logger: Optional structured logger.

    Returns:
        The resolved RepositoryRoot.

    Raises:
        NotARepositoryError: If ``cwd`` is not inside a checkout with a work tree.
        GitCommandError: If git could not be run at all.
    """
    start = (cwd or Path.cwd()).resolve()
    runner = GitRunner(
        GitConfig(executable=executable, cwd=start, timeout_ms=timeout_ms),
        logger=logger,
    )
    result = runner.run(["rev-parse", "--show-toplevel"], check=False)
    if result.exit_code is None:
        raise runner.error_for(result)
    if not result.ok:
        msg = "not a git repository"
        raise NotARepositoryError(msg, path=start)

    top = Path(result.text.rstrip("\n"))
    if not top.is_absolute() or not top.is_dir():
        msg = f"git reported an unusable top-level directory: {top}"
        raise NotARepositoryError(msg, path=start)

    root = top.resolve()
    return RepositoryRoot(path=root, main_worktree=find_main_worktree(root))
