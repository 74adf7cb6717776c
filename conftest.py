"""Fixtures shared by component tests and the tests/ tree."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from editorial.adapters.blobstore import InMemoryBlobStore
from editorial.adapters.sqlite import SQLiteMigrator, SQLiteUnitOfWork
from editorial.domain.entities import Principal
from editorial.rules.loader import default_rules
from editorial.rules.models import Rules


class MockClock:
    """Deterministic clock; tests move it explicitly."""

    def __init__(self, fixed_time: datetime | None = None) -> None:
        self._time = fixed_time or datetime(2026, 3, 1, 12, 0, 0, tzinfo=UTC)

    def now_utc(self) -> datetime:
        return self._time

    def advance(self, delta: timedelta) -> None:
        self._time = self._time + delta


@pytest.fixture
def clock() -> MockClock:
    return MockClock()


@pytest.fixture
def db_path(tmp_path) -> str:
    path = str(tmp_path / "editorial.db")
    SQLiteMigrator(path).run_migrations()
    return path


@pytest.fixture
def uow(db_path: str) -> SQLiteUnitOfWork:
    return SQLiteUnitOfWork(db_path)


@pytest.fixture
def rules() -> Rules:
    return default_rules()


@pytest.fixture
def blobs() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def author() -> Principal:
    return Principal(id=uuid4(), role="author")
