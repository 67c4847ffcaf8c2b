"""Database base configuration"""

import enum
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()

MIRROR_TABLES = ("issues", "comments")


class SchemaState(str, enum.Enum):
    """Outcome of preparing the mirror schema"""

    CREATED = "created"
    UPGRADED = "upgraded"
    CURRENT = "current"


SCHEMA_MESSAGES = {
    SchemaState.CREATED: "Created new database",
    SchemaState.UPGRADED: "Updated database schema",
    SchemaState.CURRENT: "Using existing database",
}


def database_url_for(db_path: str) -> str:
    """SQLAlchemy URL for a SQLite file path."""
    # SQLAlchemy sqlite absolute path uses 4 slashes: sqlite:////abs/path
    p = Path(db_path).expanduser().resolve()
    return f"sqlite:///{p}"


def make_engine(database_url: str) -> Engine:
    """Create an engine for the mirror database"""
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False} if "sqlite" in database_url else {},
    )


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Yield a session that is always closed, even when the sync fails."""
    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine) -> SchemaState:
    """
    Make sure `issues` and `comments` exist with an `updated_at` column.

    A database holding only one of the two tables is treated as a leftover
    from an interrupted first run: both tables are dropped and recreated.
    Databases written before `updated_at` existed get the column added in
    place, keeping their rows.
    """
    # Ensure all models are imported so SQLAlchemy metadata is populated.
    import ghmirror.models  # noqa: F401  (import for side-effects)

    with engine.begin() as conn:
        tables = {
            row[0]
            for row in conn.exec_driver_sql(
                "SELECT name FROM sqlite_master WHERE type='table'"
            ).fetchall()
        }

        if not all(name in tables for name in MIRROR_TABLES):
            for name in MIRROR_TABLES:
                conn.exec_driver_sql(f"DROP TABLE IF EXISTS {name}")
            Base.metadata.create_all(bind=conn)
            return SchemaState.CREATED

        upgraded = False
        for name in MIRROR_TABLES:
            info_rows = conn.exec_driver_sql(f"PRAGMA table_info({name})").fetchall()
            # PRAGMA table_info columns: cid, name, type, notnull, dflt_value, pk
            if not any(r[1] == "updated_at" for r in info_rows):
                conn.exec_driver_sql(f"ALTER TABLE {name} ADD COLUMN updated_at TEXT")
                upgraded = True

    return SchemaState.UPGRADED if upgraded else SchemaState.CURRENT
