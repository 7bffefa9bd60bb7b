"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. The application lifespan creates one
instance, connects it on startup and closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import asyncpg

from .config import DatabaseSettings

POOL_MIN_SIZE = 1
POOL_MAX_SIZE = 5

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


# Storage failures are explicit and separable from other runtime errors.
class StorageError(RuntimeError):
    pass


@asynccontextmanager
async def _storage_errors(operation: str) -> AsyncIterator[None]:
    """
    Re-raise driver failures as StorageError.

    The message names the operation only; SQL text and connection parameters
    stay on the chained cause.
    """
    try:
        yield
    except _DRIVER_ERRORS as exc:
        raise StorageError(f"Database {operation} failed ({type(exc).__name__}).") from exc


def _record_to_dict(record: Any) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(self, settings: DatabaseSettings) -> None:
        self.settings = settings
        self._pool: asyncpg.Pool | None = None

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        async with _storage_errors("connect"):
            self._pool = await asyncpg.create_pool(
                min_size=POOL_MIN_SIZE,
                max_size=POOL_MAX_SIZE,
                **self.settings.connect_kwargs(),
            )
        logger.info(
            "db_pool_opened host=%s database=%s ssl=%s",
            self.settings.host if not self.settings.dsn else "<dsn>",
            self.settings.database if not self.settings.dsn else "<dsn>",
            self.settings.ssl,
        )

    async def close(self) -> None:
        if self._pool is None:
            return None
        pool, self._pool = self._pool, None
        async with _storage_errors("close"):
            await pool.close()
        logger.info("db_pool_closed")

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise StorageError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        pool = self.pool()
        async with _storage_errors("query"):
            row = await pool.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        pool = self.pool()
        async with _storage_errors("query"):
            rows = await pool.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> None:
        """
        Run a statement (INSERT/DDL). No result returned.
        """
        pool = self.pool()
        async with _storage_errors("statement"):
            await pool.execute(sql, *args)

    async def ping(self) -> None:
        pool = self.pool()
        async with _storage_errors("ping"):
            await pool.fetchval("SELECT 1")
