"""
Base repository with common database operations.
"""

import logging
import sqlite3
from abc import ABC
from collections.abc import Sequence
from contextlib import contextmanager

from database import Database
from domain.models.player import normalize_name

logger = logging.getLogger("racha.repositories")


class BaseRepository(ABC):
    """
    Base class for all repositories.

    Provides connection management plus small SQL helpers shared by the
    game, statistics and audit repositories.
    """

    # Track DB paths that have already had schema initialization performed
    _schema_initialized_paths = set()

    def __init__(self, db_path: str):
        """
        Initialize repository with database path.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        # Ensure schema is initialized for this database path (idempotent)
        if db_path not in BaseRepository._schema_initialized_paths:
            Database(db_path)
            BaseRepository._schema_initialized_paths.add(db_path)

    def get_connection(self) -> sqlite3.Connection:
        """Get database connection with row factory enabled."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA busy_timeout=5000")
        # SQLite LOWER() only folds ASCII; names like "JOÃO" need Python's rules
        conn.create_function("normalize_name", 1, normalize_name, deterministic=True)
        return conn

    @contextmanager
    def connection(self):
        """
        Context manager for database connections.

        Automatically commits on success, rolls back on exception,
        and always closes the connection.
        """
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @contextmanager
    def atomic_transaction(self):
        """
        Context manager for atomic transactions with immediate write lock.

        Uses BEGIN IMMEDIATE so a team assignment is written as a whole:
        clearing the previous draw and storing the new one either both
        happen or neither does.

        The transaction commits on success and rolls back on exception.
        """
        conn = self.get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("BEGIN IMMEDIATE")
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @staticmethod
    def placeholders(values: Sequence) -> str:
        """Comma-separated '?' list for an IN (...) clause."""
        return ",".join("?" * len(values))

    @staticmethod
    def column_or_default(row: sqlite3.Row, column: str, default=None):
        """Read a column that may be missing on older schemas."""
        if column not in row.keys():
            return default
        value = row[column]
        return default if value is None else value
