"""
Name registry persistence (raw SQL).

`NameRepository` is the only place that knows the `persons` table.
"""

from __future__ import annotations

import logging
from typing import Any

from core import db

from . import schemas

logger = logging.getLogger(__name__)

TABLE_NAME = "persons"


def _to_record(row: dict[str, Any]) -> schemas.NameRecord:
    return schemas.NameRecord(
        id=int(row["id"]),
        name=str(row["name"]),
        created_at=row["created_at"],
    )


class NameRepository:
    def __init__(self, database: db.Database) -> None:
        self.database = database

    async def ensure_schema(self) -> None:
        """
        Create the table if it does not exist. Safe to run on every startup.
        """
        try:
            await self.database.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
                    id SERIAL PRIMARY KEY,
                    name VARCHAR({schemas.MAX_NAME_LENGTH}) NOT NULL,
                    created_at TIMESTAMPTZ NOT NULL DEFAULT now()
                )
                """
            )
        except db.StorageError:
            logger.exception("schema_failed table=%s", TABLE_NAME)
            raise
        logger.info("schema_ready table=%s", TABLE_NAME)

    async def insert_name(self, name: str) -> schemas.NameRecord:
        row = await self.database.fetch_one(
            f"""
            INSERT INTO {TABLE_NAME} (name)
            VALUES ($1)
            RETURNING id, name, created_at
            """,
            name,
        )
        if row is None:
            raise db.StorageError("Failed to insert name.")
        return _to_record(row)

    async def list_names(self) -> list[schemas.NameRecord]:
        """
        Return every record, newest first.
        """
        rows = await self.database.fetch_all(
            f"""
            SELECT id, name, created_at
            FROM {TABLE_NAME}
            ORDER BY created_at DESC, id DESC
            """
        )
        return [_to_record(row) for row in rows]

    async def health_check(self) -> bool:
        try:
            await self.database.ping()
        except db.StorageError as exc:
            logger.warning("health_check_failed reason=%s", exc)
            return False
        return True
