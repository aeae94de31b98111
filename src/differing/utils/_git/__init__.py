"""Git utilities for differing.

This package provides the git subprocess runner and the dulwich-based lookup
of the main checkout behind a linked worktree.
"""

from differing.utils._git._common import find_main_worktree
from differing.utils._git._runner import (
    DEFAULT_TIMEOUT_MS,
    MAX_OUTPUT_BYTES,
    GitConfig,
    GitResult,
    GitRunner,
    truncate_output,
)

__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "MAX_OUTPUT_BYTES",
    "GitConfig",
    "GitResult",
    "GitRunner",
    "find_main_worktree",
    "truncate_output",
]
