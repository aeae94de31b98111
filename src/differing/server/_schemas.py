"""Request and response schemas for the differing HTTP API.

JSON field names are camelCase; Python attributes stay snake_case.
Request bodies are strict: unknown fields and type coercion are rejected.
"""

# ruff: noqa: TC003  # datetime needed at runtime for pydantic fields
from datetime import datetime
from typing import ClassVar, Literal, Self

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from differing.repository import (
    AmendResult,
    CommitRecord,
    DiffSummary,
    FileChangeRecord,
    FileContentPair,
    FileStatus,
    RepositoryRoot,
)


class _ResponseModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class _RequestModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid", strict=True
    )


# =============================================================================
# Responses
# =============================================================================


class HealthResponse(_ResponseModel):
    status: Literal["healthy"] = "healthy"


class RootResponse(_ResponseModel):
    message: str
    api: str = "/api"


class ErrorResponse(_ResponseModel):
    """Body of every error response."""

    error: str
    detail: str | list[dict[str, object]] | None = None


class RepoInfoResponse(_ResponseModel):
    path: str
    main_worktree: str | None = None
    is_worktree: bool = False

    @classmethod
    def from_root(cls, root: RepositoryRoot) -> Self:
        return cls(
            path=str(root.path),
            main_worktree=str(root.main_worktree) if root.main_worktree else None,
            is_worktree=root.is_worktree,
        )


class DiffSummaryResponse(_ResponseModel):
    id: str
    message: str
    author: str
    timestamp: datetime
    files_count: int
    additions: int
    deletions: int

    @classmethod
    def from_summary(cls, summary: DiffSummary) -> Self:
        return cls(
            id=summary.id,
            message=summary.message,
            author=summary.author,
            timestamp=summary.timestamp,
            files_count=summary.files_count,
            additions=summary.additions,
            deletions=summary.deletions,
        )


class FileChangeResponse(_ResponseModel):
    path: str
    status: FileStatus
    additions: int
    deletions: int

    @classmethod
    def from_record(cls, record: FileChangeRecord) -> Self:
        return cls(
            path=record.path,
            status=record.status,
            additions=record.additions,
            deletions=record.deletions,
        )


class CommitResponse(_ResponseModel):
    id: str
    message: str
    author: str
    timestamp: datetime
    is_head: bool

    @classmethod
    def from_record(cls, record: CommitRecord) -> Self:
        return cls(
            id=record.id,
            message=record.message,
            author=record.author,
            timestamp=record.timestamp,
            is_head=record.is_head,
        )


class FileDiffResponse(_ResponseModel):
    path: str
    old_content: str
    new_content: str

    @classmethod
    def from_pair(cls, pair: FileContentPair) -> Self:
        return cls(
            path=pair.path,
            old_content=pair.old_content,
            new_content=pair.new_content,
        )


class SaveFileResponse(_ResponseModel):
    message: str = "File saved successfully"
    path: str


class AmendMessageResponse(_ResponseModel):
    message: str = "Commit message amended successfully"
    new_commit: str
    warning: str | None = None

    @classmethod
    def from_result(cls, result: AmendResult) -> Self:
        return cls(new_commit=result.new_commit, warning=result.warning)


# =============================================================================
# Requests
# =============================================================================


class SaveFileRequest(_RequestModel):
    content: str = Field(description="Complete new file content")


class AmendMessageRequest(_RequestModel):
    message: str = Field(description="Replacement commit message")
