"""Server configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class ServerConfig(BaseModel):
    """HTTP server configuration section.

    Attributes:
        host: Interface to bind.
        port: TCP port to bind. 0 selects a free port.
        open_browser: Open the UI in a browser once the server is up.
        static_dir: Directory of a built frontend to serve at ``/`` (empty
            disables static serving).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    host: str = "localhost"
    port: int = Field(default=3844, ge=0, le=65535)
    open_browser: bool = False
    static_dir: str = ""
