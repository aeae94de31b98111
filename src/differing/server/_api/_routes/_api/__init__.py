from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ._commits import router as commits_router
from ._diffs import router as diffs_router
from ._files import router as files_router
from ._health import router as health_router
from ._repo import router as repo_router

router = APIRouter(prefix="/api")

router.include_router(health_router)
router.include_router(repo_router)
router.include_router(diffs_router)
router.include_router(files_router)
router.include_router(commits_router)


@router.api_route(
    "/{unknown_path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def unknown_api_route(unknown_path: str) -> JSONResponse:
    # Keeps unknown API paths out of the static frontend fallback
    return JSONResponse(
        {"error": f"Unknown API endpoint: /api/{unknown_path}"}, status_code=404
    )
