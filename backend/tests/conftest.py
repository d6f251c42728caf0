import os
import tempfile
from pathlib import Path

# Point the app at a throwaway database before `simple_api` is imported.
_TMP = Path(tempfile.mkdtemp(prefix="simple_api_tests_"))
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TMP / 'app.db'}")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from simple_api import models, repositories
from simple_api.database import create_db_and_tables, get_session
from simple_api.main import app


@pytest.fixture()
def engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client(engine):
    def _get_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def department(session):
    """Seed Department{id: 1, name: "CS"}."""
    return repositories.DepartmentRepository(session).save(models.Department(name="CS"))
