# pyright: reportAny=false
"""FastAPI application factory for the differing server."""

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from starlette.types import Scope
from structlog.typing import FilteringBoundLogger

from differing.exceptions import (
    AmendEmptyMessageError,
    AmendRejectedNotHeadError,
    DifferingError,
    FileAccessError,
    GitCommandError,
    InvalidPathError,
    InvalidRevisionError,
    NotTrackedError,
    UnknownRevisionError,
)
from differing.repository import DiffRepository

from ._api import api_router
from ._schemas import RootResponse

# Most specific first; the first isinstance match wins
_STATUS_CODES: tuple[tuple[type[DifferingError], int], ...] = (
    (InvalidPathError, 400),
    (InvalidRevisionError, 400),
    (AmendEmptyMessageError, 400),
    (NotTrackedError, 403),
    (AmendRejectedNotHeadError, 403),
    (UnknownRevisionError, 404),
    (GitCommandError, 500),
    (FileAccessError, 500),
)


def status_code_for(exc: DifferingError) -> int:
    """Map a differing exception to its HTTP status code."""
    for exc_type, status_code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 500


class SPAStaticFiles(StaticFiles):
    """Static files that fall back to ``index.html`` for unknown paths."""

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as e:
            if e.status_code != 404:  # noqa: PLR2004
                raise
            return await super().get_response("index.html", scope)


def _register_exception_handlers(
    app: FastAPI, logger: FilteringBoundLogger | None
) -> None:
    @app.exception_handler(DifferingError)
    async def handle_differing_error(  # pyright: ignore[reportUnusedFunction]
        request: Request, exc: DifferingError
    ) -> JSONResponse:
        status_code = status_code_for(exc)
        body: dict[str, object] = {"error": str(exc)}
        if isinstance(exc, GitCommandError) and exc.detail:
            body["detail"] = exc.detail
        if logger is not None and status_code >= 500:  # noqa: PLR2004
            logger.error(
                "request_failed",
                method=request.method,
                path=request.url.path,
                error=str(exc),
            )
        return JSONResponse(body, status_code=status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(  # pyright: ignore[reportUnusedFunction]
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        detail = [
            {
                "loc": [str(part) for part in error.get("loc", ())],
                "msg": str(error.get("msg", "")),
                "type": str(error.get("type", "")),
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            {"error": "Invalid request body", "detail": detail}, status_code=400
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(  # pyright: ignore[reportUnusedFunction]
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            {"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers
        )


def create_app(
    repository: DiffRepository,
    *,
    static_dir: Path | None = None,
    logger: FilteringBoundLogger | None = None,
) -> FastAPI:
    """Build the FastAPI application serving one repository.

    Args:
        repository: The repository service shared by every request.
        static_dir: Built frontend to serve at ``/``; a JSON banner is served
            there when omitted.
        logger: Optional structured logger for request failures.

    Returns:
        The configured application.
    """
    app = FastAPI(title="differing", docs_url=None, redoc_url="/api-docs")
    app.state.repository = repository
    _register_exception_handlers(app, logger)
    app.include_router(router=api_router)

    if static_dir is not None:
        app.mount("/", SPAStaticFiles(directory=static_dir, html=True), name="static")
    else:

        @app.get("/", include_in_schema=False)
        async def get_root() -> RootResponse:  # pyright: ignore[reportUnusedFunction]
            return RootResponse(message=f"differing is serving {repository.root.path}")

    return app
