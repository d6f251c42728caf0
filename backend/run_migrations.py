"""Simple migration runner for SQLite using provided SQL files in migrations/"""
from pathlib import Path
import logging
import sqlite3
from typing import Optional
from sqlalchemy.engine import make_url

BASE = Path(__file__).parent
MIGRATIONS = sorted((BASE / "migrations").glob("*.sql"))

logger = logging.getLogger("simple_api.migrations")


def sqlite_path_from_url(url: str) -> Path:
    """Return the database file behind a `sqlite:///...` URL."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite" or not parsed.database:
        raise ValueError(f"not a file-backed SQLite URL: {url}")
    return Path(parsed.database)


def run(db_path: Optional[Path] = None):
    """Execute SQL migration files against a SQLite database.

    The function applies every `migrations/*.sql` file in lexical
    order. Without `db_path` the file named by `DATABASE_URL` is used.
    It is intended for local development and quick bootstrapping of the
    example database; every script is idempotent.
    """
    if db_path is None:
        from simple_api.config import settings
        db_path = sqlite_path_from_url(settings.DATABASE_URL)
    logger.info("Using database: %s", db_path)
    conn = sqlite3.connect(db_path)
    try:
        cur = conn.cursor()
        for m in MIGRATIONS:
            logger.info("Applying: %s", m.name)
            cur.executescript(m.read_text(encoding="utf-8"))
        conn.commit()
    finally:
        conn.close()
    logger.info("Migrations applied.")


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    run()
