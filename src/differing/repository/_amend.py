"""HEAD commit message amendment."""

from structlog.typing import FilteringBoundLogger

from differing.exceptions import AmendEmptyMessageError, AmendRejectedNotHeadError
from differing.repository._models import AmendResult
from differing.repository._revisions import RevisionResolver
from differing.utils import GitRunner


class CommitAmender:
    """Rewrites the message of the HEAD commit, and of no other commit.

    Args:
        runner: Git runner bound to the repository root.
        revisions: Revision resolver for the same repository.
        logger: Optional structured logger.
    """

    __slots__ = ("_logger", "_revisions", "_runner")

    def __init__(
        self,
        runner: GitRunner,
        revisions: RevisionResolver,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._runner = runner
        self._revisions = revisions
        self._logger = logger

    def amend(self, target: str, message: str) -> AmendResult:
        """Replace the HEAD commit's message.

        The target must be the full hash of the current HEAD. Only the
        message changes; staged changes are left out of the new commit. After
        a successful amend, remote-tracking branches are checked for the old
        commit. A hit sets ``possibly_pushed`` and never fails the amend.

        Args:
            target: Full hash of the commit to amend.
            message: Replacement commit message.

        Returns:
            The new and previous HEAD hashes and the push advisory.

        Raises:
            AmendEmptyMessageError: If the message is blank.
            AmendRejectedNotHeadError: If ``target`` is not HEAD.
            GitCommandError: If git fails to amend.
        """
        if not message.strip():
            msg = "Commit message cannot be empty"
            raise AmendEmptyMessageError(msg)

        head = self._revisions.head()
        if head is None or target.lower() != head:
            if self._logger is not None:
                self._logger.info("amend_rejected", target=target, head=head)
            msg = "Can only amend the HEAD commit"
            raise AmendRejectedNotHeadError(msg, target=target, head=head)

        result = self._runner.run(
            ["commit", "--amend", "--only", "--allow-empty", "-m", message],
            check=False,
        )
        if not result.ok:
            raise self._runner.error_for(result, "Failed to amend commit")

        new_head = self._revisions.head() or ""
        possibly_pushed = self._contained_in_remote(head)

        if self._logger is not None:
            self._logger.info("commit_amended", previous=head, new=new_head)
            if possibly_pushed:
                self._logger.warning("amended_commit_on_remote", previous=head)
        return AmendResult(
            new_commit=new_head,
            previous_commit=head,
            possibly_pushed=possibly_pushed,
        )

    def _contained_in_remote(self, commit: str) -> bool:
        result = self._runner.run(["branch", "-r", "--contains", commit], check=False)
        if not result.ok:
            if self._logger is not None:
                self._logger.warning(
                    "remote_check_failed",
                    commit=commit,
                    exit_code=result.exit_code,
                    detail=result.error or result.stderr.strip(),
                )
            return False
        return bool(result.text.strip())
