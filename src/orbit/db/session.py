"""Database session management.

Provides the session factory for the application store. The connection
string comes from DATABASE_URL (see orbit.config).
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from orbit.config import normalize_url, require_source_url
from orbit.db.schema import Base

# Module-level engine cache for connection pooling
_engine_cache: dict[str, Engine] = {}

# Module-level session factory cache
_session_factory_cache: dict[str, sessionmaker] = {}


def get_engine(database_url: str | None = None) -> Engine:
    """Get SQLAlchemy engine for the database.

    Engines are cached by URL to enable connection pooling.
    Subsequent calls with the same URL return the cached engine.

    Args:
        database_url: Connection string. Defaults to DATABASE_URL.

    Returns:
        SQLAlchemy engine instance (cached).

    Raises:
        ConfigError: If no URL is given and DATABASE_URL is not set.
    """
    if database_url is None:
        database_url = require_source_url()

    if database_url in _engine_cache:
        return _engine_cache[database_url]

    engine = create_engine(
        normalize_url(database_url),
        echo=False,
        pool_pre_ping=True,
    )
    _engine_cache[database_url] = engine

    return engine


def _get_session_factory(database_url: str | None = None) -> sessionmaker:
    """Get cached session factory for the database.

    Args:
        database_url: Connection string. Defaults to DATABASE_URL.

    Returns:
        Cached sessionmaker instance.
    """
    engine = get_engine(database_url)
    cache_key = str(engine.url)

    if cache_key in _session_factory_cache:
        return _session_factory_cache[cache_key]

    factory = sessionmaker(bind=engine)
    _session_factory_cache[cache_key] = factory

    return factory


def get_session(database_url: str | None = None) -> Session:
    """Get a database session.

    Note: Caller is responsible for closing the session. For automatic
    resource management, use get_db_session() context manager instead.

    Args:
        database_url: Connection string. Defaults to DATABASE_URL.

    Returns:
        SQLAlchemy Session instance.
    """
    factory = _get_session_factory(database_url)
    return factory()


@contextmanager
def get_db_session(database_url: str | None = None) -> Generator[Session, None, None]:
    """Context manager for database sessions with automatic cleanup.

    Commits on successful exit, rolls back on exception, and always
    closes the session.

    Args:
        database_url: Connection string. Defaults to DATABASE_URL.

    Yields:
        SQLAlchemy Session instance.
    """
    session = get_session(database_url)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(database_url: str | None = None) -> None:
    """Create any missing tables.

    Args:
        database_url: Connection string. Defaults to DATABASE_URL.
    """
    engine = get_engine(database_url)
    Base.metadata.create_all(engine)
