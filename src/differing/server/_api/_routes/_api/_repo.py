from fastapi import APIRouter

from differing.server._deps import RepositoryDep
from differing.server._schemas import RepoInfoResponse

router = APIRouter(prefix="", tags=["repository"])


@router.get("/repo-info")
def get_repo_info(repository: RepositoryDep) -> RepoInfoResponse:
    """Report the repository root being served."""
    return RepoInfoResponse.from_root(repository.root)
