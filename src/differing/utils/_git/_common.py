"""Repository layout helpers built on dulwich."""

from pathlib import Path

from dulwich.errors import NotGitRepository
from dulwich.repo import Repo


def _checkout_of(common_dir: bytes | str) -> Path:
    path = Path(common_dir.decode() if isinstance(common_dir, bytes) else common_dir)
    path = path.resolve()
    # A non-bare common directory is "<checkout>/.git"
    return path.parent if path.name == ".git" else path


def find_main_worktree(root: Path) -> Path | None:
    """Find the main checkout for the repository rooted at ``root``.

    For an ordinary checkout this is ``root`` itself; for a linked worktree it
    is the checkout owning the shared object store.

    Returns:
        The main checkout directory, or None if dulwich cannot open the
        repository.
    """
    try:
        repo = Repo.discover(str(root))
    except NotGitRepository:
        return None
    try:
        return _checkout_of(repo.commondir())
    finally:
        repo.close()
