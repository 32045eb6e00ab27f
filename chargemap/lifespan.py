"""
Application lifespan management for startup and shutdown events
"""
import logging
from contextlib import asynccontextmanager

from sqlalchemy import text

from .config import settings
from .db import Base, get_engine, dispose_engine

logger = logging.getLogger(__name__)


def validate_database_config() -> None:
    """Refuse to start outside local environments with a SQLite database."""
    if not settings.is_local and settings.database_url.lower().startswith("sqlite"):
        error_msg = (
            f"CRITICAL: SQLite database is not supported in {settings.env}. "
            "Please use PostgreSQL."
        )
        logger.error(error_msg)
        raise RuntimeError(error_msg)


def prepare_schema() -> None:
    """Bring the schema up to date: alembic when configured, create_all otherwise."""
    if settings.run_migrations_on_startup:
        from .run_migrations import run_migrations
        run_migrations()
    elif settings.create_tables_on_startup:
        from . import models  # noqa: F401  register tables on Base.metadata
        Base.metadata.create_all(bind=get_engine())
        logger.info("Database tables ensured")


@asynccontextmanager
async def lifespan(app):
    """Manage application lifespan events"""
    logger.info(f"Starting chargemap backend (env={settings.env})")

    validate_database_config()
    prepare_schema()

    engine = get_engine()
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection verified")
    except Exception as e:
        if settings.is_local:
            logger.warning(f"Database connection failed in local/dev environment: {e}")
        else:
            logger.error(f"Database connection failed: {e}")
            raise

    yield

    logger.info("Shutting down chargemap backend...")
    dispose_engine()
