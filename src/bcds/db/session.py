"""
Database session management for the BCDS membership tracker.

Provides the SQLAlchemy engine and session factory, configured from
config.py.

Usage:
    from bcds.db import get_session

    with get_session() as session:
        players = session.query(Player).all()
        session.add(new_player)
        # Commits automatically on exit, rolls back on exception
"""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from bcds.config import Settings, settings as default_settings


def get_engine(config: Optional[Settings] = None) -> Engine:
    """
    Create a SQLAlchemy engine.

    Pre-ping is enabled so stale pooled connections are replaced
    transparently.
    """
    config = config or default_settings
    engine = create_engine(
        config.database_url,
        pool_pre_ping=True,
        echo=config.db_echo,
    )

    if engine.dialect.name == "sqlite":
        # pysqlite defers BEGIN on its own, which breaks SAVEPOINT.
        # Take over transaction control so nested savepoints roll back.
        @event.listens_for(engine, "connect")
        def on_connect(dbapi_conn, connection_record):
            dbapi_conn.isolation_level = None

        @event.listens_for(engine, "begin")
        def on_begin(conn):
            conn.exec_driver_sql("BEGIN")

    return engine


_engine: Optional[Engine] = None


def _get_engine() -> Engine:
    """Get or create the shared engine instance."""
    global _engine
    if _engine is None:
        _engine = get_engine()
    return _engine


# Session factory, bound lazily on first use
SessionLocal = sessionmaker(
    autocommit=False,  # We'll handle commits explicitly
    autoflush=False,  # Don't auto-flush before queries (more control)
)


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Automatically commits on successful exit, rolls back on exception.

    Example:
        with get_session() as session:
            service = PlayerIdentityService(DBPlayerStore(session))
            service.resolve_from_import(record)

    Raises:
        Any exception from the database operation (after rollback)
    """
    session = SessionLocal(bind=_get_engine())
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
