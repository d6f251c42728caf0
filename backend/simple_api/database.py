"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine from
`settings.DATABASE_URL` and provides small helpers used by the
application and tests. The default database is a local SQLite file
`app.db` next to the package.
"""

from sqlmodel import SQLModel, create_engine, Session
from .config import settings


def make_engine(url: str, echo: bool = False):
    """Build an engine for `url`.

    SQLite connections are shared across the threads FastAPI uses for
    sync endpoints, so the same-thread check is disabled for them.
    """
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=echo, connect_args=connect_args)


engine = make_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)


def create_db_and_tables(bind=None):
    """Create the `department` and `student` tables from SQLModel metadata.

    This function is intended for local development and lightweight
    scripts; production deployments should bootstrap the schema with
    `run_migrations.py` or a proper migration tool instead.
    """
    # models must be imported so their tables are registered on the metadata
    from . import models  # noqa: F401
    SQLModel.metadata.create_all(bind or engine)


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session
