"""
Schema and migration management for SQLite database.
"""

import logging
import sqlite3

logger = logging.getLogger("racha.schema")


class SchemaManager:
    """
    Owns schema creation and migrations.

    Call initialize() to ensure schema is present and migrations are applied.
    """

    def __init__(self, db_path: str, use_uri: bool = False):
        self.db_path = db_path
        self.use_uri = use_uri

    def initialize(self) -> None:
        """Create base schema and apply migrations."""
        logger.info(f"Initializing database schema: {self.db_path}")
        with self._connect() as conn:
            cursor = conn.cursor()
            self._create_base_schema(cursor)
            self._create_schema_migrations_table(cursor)
            self._run_migrations(cursor)
            conn.commit()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, uri=self.use_uri)
        conn.row_factory = sqlite3.Row
        if not self.use_uri:  # Skip WAL for in-memory databases
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA busy_timeout=5000")
        return conn

    def _create_base_schema(self, cursor) -> None:
        # Games table
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS games (
                game_id INTEGER PRIMARY KEY AUTOINCREMENT,
                date TEXT NOT NULL,
                time TEXT,
                location TEXT,
                players_per_team INTEGER NOT NULL DEFAULT 5,
                ball_responsible TEXT,
                vest_responsible TEXT,
                teams_drawn INTEGER NOT NULL DEFAULT 0,
                finished INTEGER NOT NULL DEFAULT 0,
                final_score_team1 INTEGER,
                final_score_team2 INTEGER,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )

        # Players signed up for a game (one row per game)
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS game_players (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                game_id INTEGER NOT NULL,
                name TEXT NOT NULL,
                whatsapp TEXT,
                status TEXT NOT NULL DEFAULT 'confirmed',
                team_number INTEGER,
                goals INTEGER DEFAULT 0,
                assists INTEGER DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (game_id) REFERENCES games(game_id)
            )
            """
        )

        # Lifetime aggregates per identity (whatsapp, or name when absent)
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS player_statistics (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                whatsapp TEXT UNIQUE,
                total_games INTEGER DEFAULT 0,
                total_goals INTEGER DEFAULT 0,
                wins INTEGER DEFAULT 0,
                losses INTEGER DEFAULT 0,
                draws INTEGER DEFAULT 0,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )

    # --- Migration helpers ---

    def _add_column_if_not_exists(self, cursor, table: str, column: str, column_type: str) -> None:
        try:
            cursor.execute(f"ALTER TABLE {table} ADD COLUMN {column} {column_type}")
        except sqlite3.OperationalError:
            pass

    def _create_schema_migrations_table(self, cursor) -> None:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                name TEXT PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )

    def _run_migrations(self, cursor) -> None:
        applied = {row["name"] for row in cursor.execute("SELECT name FROM schema_migrations")}
        for name, action in self._get_migrations():
            if name in applied:
                continue
            logger.info(f"Applying migration: {name}")
            action(cursor)
            cursor.execute(
                "INSERT INTO schema_migrations (name) VALUES (?)",
                (name,),
            )

    def _get_migrations(self):
        return [
            ("add_total_assists_column", self._migration_add_total_assists_column),
            ("add_preferred_position_column", self._migration_add_preferred_position_column),
            ("create_audit_log_table", self._migration_create_audit_log_table),
            ("add_indexes_v1", self._migration_add_indexes_v1),
        ]

    # --- Migrations ---

    def _migration_add_total_assists_column(self, cursor) -> None:
        self._add_column_if_not_exists(cursor, "player_statistics", "total_assists", "INTEGER DEFAULT 0")

    def _migration_add_preferred_position_column(self, cursor) -> None:
        self._add_column_if_not_exists(cursor, "game_players", "preferred_position", "TEXT")

    def _migration_create_audit_log_table(self, cursor) -> None:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS audit_log (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                event TEXT NOT NULL,
                entity_type TEXT NOT NULL,
                entity_id TEXT,
                details TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )

    def _migration_add_indexes_v1(self, cursor) -> None:
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_game_players_game ON game_players(game_id)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_games_drawn_date ON games(teams_drawn, date)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_player_statistics_name ON player_statistics(name)"
        )
