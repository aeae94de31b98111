# pyright: reportUnusedCallResult=false
"""CLI context for global state management.

The CLIContext is set once by the meta command after configuration has been
loaded and is made available to every command via contextvars.
"""

import contextvars
from dataclasses import dataclass, field
from typing import Self

from structlog.typing import FilteringBoundLogger

from differing.config import Config


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with configuration and options.

    Attributes:
        config: Loaded configuration object.
        config_error: Error message if config loading fell back to defaults.
        logger: Structured logger for commands and the server.
    """

    config: Config = field(repr=False)
    config_error: str | None = None
    logger: FilteringBoundLogger | None = field(default=None, repr=False)

    @classmethod
    def get_current(cls) -> Self:
        """Get the active CLIContext, or a default one if none is set."""
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx  # pyright: ignore[reportReturnType]
        return cls(config=Config.from_dict({}))

    @classmethod
    def set_current(cls, ctx: Self) -> None:
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        _current_cli_context.set(None)


_current_cli_context: contextvars.ContextVar[CLIContext | None] = (
    contextvars.ContextVar("cli_context", default=None)
)
