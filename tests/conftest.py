"""API fixtures. Engine fixtures (clock, uow, author, ...) live in the root conftest."""

from __future__ import annotations

from collections.abc import Iterator
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from editorial.adapters.sqlite import SQLiteMigrator
from editorial.api.deps import Settings, get_settings
from editorial.api.main import app


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    settings = Settings(
        data_dir=str(tmp_path / "data"),
        rules_path=str(tmp_path / "no-rules.yaml"),
    )
    SQLiteMigrator(settings.db_path).run_migrations()
    return settings


@pytest.fixture
def client(api_settings: Settings) -> Iterator[TestClient]:
    app.dependency_overrides[get_settings] = lambda: api_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def editor_headers() -> dict[str, str]:
    return {"X-Principal-Id": str(uuid4()), "X-Principal-Role": "editor"}
