from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from core import db
from main import create_app
from names import schemas


class FakeNameRepository:
    """
    In-memory stand-in for NameRepository.

    Each insert advances a fake clock by one second so ordering is deterministic.
    """

    def __init__(self) -> None:
        self.records: list[schemas.NameRecord] = []
        self.available = True
        self.fail_schema = False
        self.schema_ensured = False
        self._next_id = 1
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _check_available(self) -> None:
        if not self.available:
            raise db.StorageError("Database query failed (ConnectionRefusedError).")

    async def ensure_schema(self) -> None:
        if self.fail_schema:
            raise db.StorageError("Database statement failed (ConnectionRefusedError).")
        self.schema_ensured = True

    async def insert_name(self, name: str) -> schemas.NameRecord:
        self._check_available()
        self._clock += timedelta(seconds=1)
        record = schemas.NameRecord(id=self._next_id, name=name, created_at=self._clock)
        self._next_id += 1
        self.records.append(record)
        return record

    async def list_names(self) -> list[schemas.NameRecord]:
        self._check_available()
        return sorted(self.records, key=lambda r: (r.created_at, r.id), reverse=True)

    async def health_check(self) -> bool:
        return self.available


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def repository() -> FakeNameRepository:
    return FakeNameRepository()


@pytest.fixture
def client(repository):
    with TestClient(create_app(repository=repository)) as test_client:
        yield test_client
