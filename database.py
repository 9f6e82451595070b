"""
Database bootstrap.
"""

from infrastructure.schema_manager import SchemaManager


class Database:
    """
    Ensures the SQLite schema exists for a database path.

    Repositories open their own connections; this class only owns
    initialization.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.schema_manager = SchemaManager(db_path)
        self.schema_manager.initialize()
