from fastapi import APIRouter

from differing.server._deps import RepositoryDep
from differing.server._schemas import (
    FileDiffResponse,
    SaveFileRequest,
    SaveFileResponse,
)

router = APIRouter(prefix="", tags=["files"])


@router.get("/file-diff/{diff_id}/{file_path:path}")
def get_file_diff(
    diff_id: str, file_path: str, repository: RepositoryDep
) -> FileDiffResponse:
    """Return the old and new content of one file."""
    return FileDiffResponse.from_pair(repository.resolve_content(diff_id, file_path))


@router.post("/file-save/{diff_id}/{file_path:path}")
def save_file(
    diff_id: str,
    file_path: str,
    body: SaveFileRequest,
    repository: RepositoryDep,
) -> SaveFileResponse:
    """Overwrite a tracked working tree file."""
    result = repository.save_file(diff_id, file_path, body.content)
    return SaveFileResponse(path=result.path)
