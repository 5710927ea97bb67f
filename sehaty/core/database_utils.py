"""
Database utility functions for consistent session management outside of request handlers.

Scripts, the health check and startup hooks use these helpers; endpoints get their
session from the `get_db` dependency instead.
"""

import logging
from contextlib import contextmanager
from typing import Generator, List

from sqlalchemy import inspect, text
from sqlalchemy.orm import Session

from sehaty.db.session import SessionLocal, engine
from sehaty.db.base import Base

logger = logging.getLogger(__name__)


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Get a database session with proper cleanup using context manager.

    Usage:
        with get_db_session() as db:
            result = db.query(Model).all()

    Commits on success, rolls back and re-raises on any exception.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Database session error: {e}")
        raise
    finally:
        db.close()


def check_database_health() -> bool:
    """Run a trivial query against the configured database."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


def get_missing_tables() -> List[str]:
    """Tables declared on Base.metadata that do not exist in the database yet."""
    # Import models so every table is registered with Base.metadata
    from sehaty import models  # noqa: F401

    inspector = inspect(engine)
    existing_tables = inspector.get_table_names()
    required_tables = [table.name for table in Base.metadata.tables.values()]
    return [table for table in required_tables if table not in existing_tables]
