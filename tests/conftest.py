"""Shared fixtures.

SQLite (aiosqlite) stands in for PostgreSQL: both backends' upsert
statements are valid on it, so the full repository can run against a real
database file without a server.
"""

import pytest
from sqlalchemy import MetaData

from pgrepo.infrastructure.database import create_engine
from pgrepo.infrastructure.persistence import Repo, TableBackend, TextSqlBackend, describe
from pgrepo.testing import Model

TABLE = "models"


@pytest.fixture
async def sqlite_engine(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'repo.db'}")
    metadata = MetaData()
    describe(Model).table(TABLE, metadata)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture(params=[TextSqlBackend, TableBackend], ids=["text", "table"])
def backend_cls(request):
    return request.param


@pytest.fixture
def sqlite_repo(backend_cls, sqlite_engine):
    repo = Repo(backend_cls(sqlite_engine), TABLE)
    repo.set_entity_factory(Model)
    return repo
