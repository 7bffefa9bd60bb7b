"""
Dependencies for name registry routes.
"""

from __future__ import annotations

from fastapi import Request

from core import db

from .repository import NameRepository


def get_name_repository(request: Request) -> NameRepository:
    repository = getattr(request.app.state, "name_repository", None)
    if repository is None:
        raise db.StorageError("Name repository is not initialized.")
    return repository
