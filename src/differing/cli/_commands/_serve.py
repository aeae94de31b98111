# pyright: reportUnusedCallResult=false
"""Differing server command."""

import socket
import threading
import webbrowser
from typing import Annotated, cast

from cyclopts import Parameter

from differing.cli._context import CLIContext

from ._shared import open_repository

# Delay before opening the browser so the server is listening
_BROWSER_DELAY_SECONDS = 1.0


def serve(
    *,
    host: Annotated[
        str | None,
        Parameter(name=["--host", "--addr"], help="Bind socket to this host."),
    ] = None,
    port: Annotated[
        int | None,
        Parameter(
            help="Bind socket to this port. If 0, an available port is selected."
        ),
    ] = None,
    open_browser: Annotated[
        bool,
        Parameter(name="--open", help="Open the diff viewer in a browser."),
    ] = False,
) -> None:
    """Serve the diff viewer API for the repository in the current directory."""
    import uvicorn

    from differing.server import create_app

    ctx = CLIContext.get_current()
    server = ctx.config.server
    effective_host = host or server.host
    effective_port = server.port if port is None else port

    repository = open_repository(ctx)
    app = create_app(repository, static_dir=ctx.config.static_dir, logger=ctx.logger)
    config = uvicorn.Config(
        app,
        host=effective_host,
        port=effective_port,
        log_level=ctx.config.logging.level.value,
    )

    timer: threading.Timer | None = None
    sock: socket.socket | None = None
    try:
        # The socket stays bound until uvicorn takes it over
        sock = config.bind_socket()
        bound_port = cast("int", sock.getsockname()[1])
        url = f"http://{effective_host}:{bound_port}"
        if ctx.logger is not None:
            ctx.logger.info(
                "server_starting",
                root=str(repository.root.path),
                address=url,
                worktree=repository.root.is_worktree,
            )
        print(f"Serving {repository.root.path} on {url}")  # noqa: T201

        if open_browser or server.open_browser:
            timer = threading.Timer(
                _BROWSER_DELAY_SECONDS, webbrowser.open, args=(url,)
            )
            timer.daemon = True
            timer.start()

        uvicorn.Server(config).run(sockets=[sock])
    finally:
        if timer is not None:
            timer.cancel()
        if sock is not None:
            sock.close()
        repository.close()
