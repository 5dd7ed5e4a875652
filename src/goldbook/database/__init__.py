"""Database layer for goldbook application."""

from goldbook.database.base import Database
from goldbook.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
