from fastapi import APIRouter

from differing.server._deps import RepositoryDep
from differing.server._schemas import AmendMessageRequest, AmendMessageResponse

router = APIRouter(prefix="/commit", tags=["commits"])


@router.post("/{commit_id}/amend-message", response_model_exclude_none=True)
def amend_message(
    commit_id: str,
    body: AmendMessageRequest,
    repository: RepositoryDep,
) -> AmendMessageResponse:
    """Replace the message of the HEAD commit."""
    result = repository.amend_message(commit_id, body.message)
    return AmendMessageResponse.from_result(result)
