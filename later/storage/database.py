"""
Database setup and session management using SQLAlchemy.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from ..config import StorageConfig


class Base(DeclarativeBase):
    """Base class for all database models."""


def create_db_engine(cfg: StorageConfig) -> Engine:
    """Create an engine for the configured database.

    SQLite connections get foreign keys enabled so item tags are removed
    together with their item.
    """
    is_sqlite = cfg.database_url.startswith("sqlite")
    engine = create_engine(
        cfg.database_url,
        connect_args={"check_same_thread": False} if is_sqlite else {},
        echo=cfg.echo,
        pool_pre_ping=True,
    )

    if is_sqlite:

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def init_db(engine: Engine) -> None:
    """Create all tables. Safe to call repeatedly."""
    # Importing models registers their tables on Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations.

    Commits on success and rolls back on any exception, so a failed
    operation never leaves partial state behind.
    """
    session = factory()
    try:
        yield session
        session.commit()
    except BaseException:
        session.rollback()
        raise
    finally:
        session.close()
