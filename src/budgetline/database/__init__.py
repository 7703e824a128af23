"""Database layer for budgetline application."""

from budgetline.database.base import Database
from budgetline.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
