"""
Name registry business logic.

Validation happens here, before any storage access:
1. missing / empty / whitespace-only name -> rejected
2. untrimmed name longer than MAX_NAME_LENGTH -> rejected
The trimmed value is what gets stored.
"""

from __future__ import annotations

import logging

from core.errors import ValidationError

from . import schemas
from .repository import NameRepository

CREATED_MESSAGE = "name added successfully"

logger = logging.getLogger(__name__)


def validate_name(raw_name: str | None) -> str:
    trimmed = (raw_name or "").strip()
    if not trimmed:
        raise ValidationError("name is required")

    # Length is checked on the raw input, so surrounding whitespace counts.
    if len(raw_name) > schemas.MAX_NAME_LENGTH:
        raise ValidationError(f"name cannot exceed {schemas.MAX_NAME_LENGTH} characters")

    return trimmed


async def list_names(repository: NameRepository) -> list[schemas.NameRecord]:
    return await repository.list_names()


async def create_name(
    raw_name: str | None,
    *,
    repository: NameRepository,
) -> schemas.CreatedNameResponse:
    name = validate_name(raw_name)
    record = await repository.insert_name(name)
    logger.info("name_created id=%s", record.id)
    return schemas.CreatedNameResponse(
        message=CREATED_MESSAGE,
        id=record.id,
        name=name,
    )
