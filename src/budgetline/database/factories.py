"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from budgetline.config import DB_PATH_ENV
from budgetline.database.sqlalchemy_db import SQLAlchemyDatabase

DEFAULT_DB_DIR = ".budgetline"
DEFAULT_DB_NAME = "budgetline.db"


def default_database_path() -> Path:
    """Return ~/.budgetline/budgetline.db, creating the directory if needed."""
    db_dir = Path.home() / DEFAULT_DB_DIR
    db_dir.mkdir(exist_ok=True)
    return db_dir / DEFAULT_DB_NAME


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks the
            BUDGETLINE_DB_PATH environment variable, then falls back to
            default_database_path(). A leading ``~`` is expanded.

    Returns:
        SQLAlchemyDatabase instance configured for SQLite; the schema is
        created on first use
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV) or None

    path = Path(database_path).expanduser() if database_path else default_database_path()
    return SQLAlchemyDatabase(f"sqlite:///{path}")
