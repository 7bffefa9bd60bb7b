"""
Pydantic schemas for the name registry endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

MAX_NAME_LENGTH = 100


class CreateNameRequest(BaseModel):
    # Optional so that a missing name reaches validation and gets the same
    # "name is required" answer as an empty one.
    name: str | None = None


class NameRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    created_at: datetime = Field(..., alias="createdAt")


class CreatedNameResponse(BaseModel):
    message: str
    id: int
    name: str


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    database: str
