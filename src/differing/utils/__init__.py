"""Shared utilities for differing."""

from ._git import (
    DEFAULT_TIMEOUT_MS,
    GitConfig,
    GitResult,
    GitRunner,
    find_main_worktree,
    truncate_output,
)
from ._logging import LogFormatType, create_logger, log_level_from_string
from ._paths import get_user_config_dir, get_user_config_path

__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "GitConfig",
    "GitResult",
    "GitRunner",
    "LogFormatType",
    "create_logger",
    "find_main_worktree",
    "get_user_config_dir",
    "get_user_config_path",
    "log_level_from_string",
    "truncate_output",
]
