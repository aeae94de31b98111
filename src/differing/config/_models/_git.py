"""Git execution configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class GitSettings(BaseModel):
    """Git configuration section.

    Attributes:
        executable: Name or path of the git executable.
        timeout_ms: Timeout for each git invocation in milliseconds.
        max_commits: Number of recent commits listed next to the working changes.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    executable: str = Field(default="git", min_length=1)
    timeout_ms: int = Field(default=10000, gt=0)
    max_commits: int = Field(default=20, ge=1)
