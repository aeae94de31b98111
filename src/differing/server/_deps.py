"""FastAPI dependencies."""

from typing import Annotated, cast

from fastapi import Depends, Request

from differing.repository import DiffRepository


def get_repository(request: Request) -> DiffRepository:
    """Return the repository service the application was created with."""
    return cast("DiffRepository", request.app.state.repository)


RepositoryDep = Annotated[DiffRepository, Depends(get_repository)]
