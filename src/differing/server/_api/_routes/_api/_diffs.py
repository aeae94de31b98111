from fastapi import APIRouter

from differing.server._deps import RepositoryDep
from differing.server._schemas import (
    CommitResponse,
    DiffSummaryResponse,
    FileChangeResponse,
)

router = APIRouter(prefix="/diffs", tags=["diffs"])


@router.get("")
def list_diffs(repository: RepositoryDep) -> list[DiffSummaryResponse]:
    """List the working changes followed by the most recent commits."""
    return [DiffSummaryResponse.from_summary(s) for s in repository.list_diffs()]


@router.get("/{diff_id}/files")
def list_files(diff_id: str, repository: RepositoryDep) -> list[FileChangeResponse]:
    """List files changed between the diff's base and the working tree."""
    return [FileChangeResponse.from_record(r) for r in repository.list_files(diff_id)]


@router.get("/{diff_id}/commits")
def list_commits(diff_id: str, repository: RepositoryDep) -> list[CommitResponse]:
    """List commits from the diff's base (exclusive) through HEAD."""
    return [CommitResponse.from_record(r) for r in repository.list_commits(diff_id)]
