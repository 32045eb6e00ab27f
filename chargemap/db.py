"""
Database configuration with lazy initialization.

The engine is created on first access so the app can import (and answer
liveness checks) before the database is reachable.
"""
import logging

from sqlalchemy import BigInteger, Integer, create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import QueuePool

from .config import settings

logger = logging.getLogger(__name__)

# Global engine instance (lazily initialized)
_engine = None
_SessionLocal = None

Base = declarative_base()

# BIGINT keys; SQLite only autoincrements an INTEGER PRIMARY KEY
IdType = BigInteger().with_variant(Integer, "sqlite")

# Largest value a BIGINT primary key can hold; generated ids are positive
MAX_ID = 2**63 - 1


def is_storable_id(value: int) -> bool:
    """True when value can be bound as a primary key without a driver overflow."""
    return 0 < value <= MAX_ID


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """
    Turn on foreign key enforcement for every new SQLite connection.

    SQLite ignores ON DELETE CASCADE unless the pragma is set per connection.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_engine():
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        database_url = settings.database_url

        # Production safety: reject SQLite outside local environments
        if settings.env.lower() == "prod" and database_url.startswith("sqlite"):
            raise ValueError(
                "CRITICAL: SQLite database is not supported in production. "
                "Please use PostgreSQL."
            )

        # Log database URL safely (scheme and first few chars only)
        db_url_safe = database_url[:30] + "..." if len(database_url) > 30 else database_url
        logger.info("Creating database engine for: %s", db_url_safe)

        if database_url.startswith("sqlite"):
            # SQLite: minimal pooling for dev
            _engine = create_engine(
                database_url,
                poolclass=QueuePool,
                pool_size=5,
                max_overflow=0,
                connect_args={"check_same_thread": False},
            )
        else:
            # PostgreSQL: production pooling
            _engine = create_engine(
                database_url,
                poolclass=QueuePool,
                pool_size=20,
                max_overflow=10,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
        enable_sqlite_foreign_keys(_engine)
    return _engine


def get_session_local():
    """Get or create the session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def get_db():
    """
    Dependency that provides a database session.
    Used by FastAPI's dependency injection.
    """
    session_class = get_session_local()
    db = session_class()
    try:
        yield db
    finally:
        db.close()


def dispose_engine() -> None:
    """Close pooled connections (called on shutdown)."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
        logger.info("Database connections closed")
    _engine = None
    _SessionLocal = None
