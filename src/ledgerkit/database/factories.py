"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from ledgerkit.database.sqlalchemy_db import SQLAlchemyDatabase

DEFAULT_LOCK_TIMEOUT = 30.0


def _lock_timeout(lock_timeout: Optional[float]) -> float:
    if lock_timeout is not None:
        return lock_timeout
    value = os.environ.get("LEDGERKIT_LOCK_TIMEOUT")
    if value is None:
        return DEFAULT_LOCK_TIMEOUT
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"LEDGERKIT_LOCK_TIMEOUT must be a number of seconds, got '{value}'")


def create_sqlite_database(
    database_path: Optional[str] = None, lock_timeout: Optional[float] = None
) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks LEDGERKIT_DB_PATH
            environment variable, then defaults to ~/.ledgerkit/ledgerkit.db
        lock_timeout: Seconds to wait for the write lock. If None, checks
            LEDGERKIT_LOCK_TIMEOUT, then defaults to 30

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("LEDGERKIT_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".ledgerkit"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "ledgerkit.db")

    return SQLAlchemyDatabase(f"sqlite:///{database_path}", lock_timeout=_lock_timeout(lock_timeout))


def create_database(
    database_url: Optional[str] = None,
    database_path: Optional[str] = None,
    lock_timeout: Optional[float] = None,
) -> SQLAlchemyDatabase:
    """Create a database from a SQLAlchemy URL, falling back to SQLite.

    Args:
        database_url: SQLAlchemy URL. If None, checks LEDGERKIT_DATABASE_URL
        database_path: SQLite file used when no URL is configured
        lock_timeout: Seconds to wait for the write lock (SQLite only)

    Returns:
        SQLAlchemyDatabase instance
    """
    if database_url is None:
        database_url = os.environ.get("LEDGERKIT_DATABASE_URL")

    if database_url:
        return SQLAlchemyDatabase(database_url, lock_timeout=_lock_timeout(lock_timeout))
    return create_sqlite_database(database_path=database_path, lock_timeout=lock_timeout)
