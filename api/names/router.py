"""
Name registry API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import schemas, service
from .dependencies import get_name_repository
from .repository import NameRepository

router = APIRouter(prefix="/api")


@router.get("/names", response_model=list[schemas.NameRecord])
async def list_names(
    repository: NameRepository = Depends(get_name_repository),
) -> list[schemas.NameRecord]:
    """
    All stored names, newest first.
    """
    return await service.list_names(repository)


@router.post(
    "/names",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.CreatedNameResponse,
)
async def create_name(
    request: schemas.CreateNameRequest | None = None,
    repository: NameRepository = Depends(get_name_repository),
) -> schemas.CreatedNameResponse:
    raw_name = request.name if request is not None else None
    return await service.create_name(raw_name, repository=repository)
