"""Build the SQLite-backed store used by the CLI."""

import os
from pathlib import Path
from typing import Optional

from goldbook.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "GOLDBOOK_DB_PATH"
DEFAULT_DB_PATH = Path("~/.goldbook/goldbook.db")


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the ledger file and make sure its directory exists.

    An explicit path wins over GOLDBOOK_DB_PATH, which wins over
    ~/.goldbook/goldbook.db. A leading "~" is expanded.
    """
    raw = database_path or os.environ.get(DB_PATH_ENV) or DEFAULT_DB_PATH
    path = Path(raw).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create the store for a ledger file (see resolve_database_path)."""
    return SQLAlchemyDatabase(f"sqlite:///{resolve_database_path(database_path)}")
