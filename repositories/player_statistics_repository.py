"""
Repository for lifetime player statistics.
"""

import logging

from domain.models.player import PlayerAggregateStats, PlayerGameResult, normalize_name
from repositories.base_repository import BaseRepository
from repositories.interfaces import IPlayerStatisticsRepository

logger = logging.getLogger("racha.repositories.statistics")

LEADERBOARD_SORT_COLUMNS = ("total_goals", "total_assists", "wins", "total_games", "name")
_TIE_BREAKERS = ("wins", "total_goals", "total_assists", "total_games", "name")


def find_statistics_row(cursor, name: str, whatsapp: str | None):
    """Aggregate row of an identity: by whatsapp when given, else newest row with that name."""
    if whatsapp and whatsapp.strip():
        cursor.execute(
            "SELECT * FROM player_statistics WHERE whatsapp = ?",
            (whatsapp.strip(),),
        )
        return cursor.fetchone()
    cursor.execute(
        """
        SELECT * FROM player_statistics
        WHERE normalize_name(name) = ?
        ORDER BY id DESC
        LIMIT 1
        """,
        (normalize_name(name),),
    )
    return cursor.fetchone()


def upsert_game_result(cursor, result: PlayerGameResult) -> None:
    """
    Add one finished game to an identity's aggregate, creating it if needed.

    Runs on the caller's cursor so several results (and the game row) can
    share one transaction. Negative goal/assist counts are treated as 0.
    """
    goals = max(0, result.goals or 0)
    assists = max(0, result.assists or 0)
    contact = result.whatsapp.strip() if result.whatsapp and result.whatsapp.strip() else None
    increments = (1, goals, assists, int(result.won), int(result.lost), int(result.drew))

    if contact:
        cursor.execute(
            """
            INSERT INTO player_statistics
            (name, whatsapp, total_games, total_goals, total_assists, wins, losses, draws)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(whatsapp) DO UPDATE SET
                name = excluded.name,
                total_games = total_games + excluded.total_games,
                total_goals = total_goals + excluded.total_goals,
                total_assists = COALESCE(total_assists, 0) + excluded.total_assists,
                wins = wins + excluded.wins,
                losses = losses + excluded.losses,
                draws = draws + excluded.draws,
                updated_at = CURRENT_TIMESTAMP
            """,
            (result.name, contact, *increments),
        )
        return

    row = find_statistics_row(cursor, result.name, None)
    if row:
        cursor.execute(
            """
            UPDATE player_statistics
            SET total_games = total_games + ?,
                total_goals = total_goals + ?,
                total_assists = COALESCE(total_assists, 0) + ?,
                wins = wins + ?,
                losses = losses + ?,
                draws = draws + ?,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
            """,
            (*increments, row["id"]),
        )
    else:
        cursor.execute(
            """
            INSERT INTO player_statistics
            (name, whatsapp, total_games, total_goals, total_assists, wins, losses, draws)
            VALUES (?, NULL, ?, ?, ?, ?, ?, ?)
            """,
            (result.name, *increments),
        )


class PlayerStatisticsRepository(BaseRepository, IPlayerStatisticsRepository):
    """
    Handles aggregate statistics keyed by identity.

    A row is identified by whatsapp when the player has one, otherwise by
    name (compared after trimming and lowercasing).
    """

    def get_by_whatsapps(self, whatsapps: list[str]) -> dict[str, PlayerAggregateStats]:
        """Stats for the given contacts, keyed by contact."""
        wanted = [w.strip() for w in whatsapps if w and w.strip()]
        if not wanted:
            return {}

        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT * FROM player_statistics
                WHERE whatsapp IN ({self.placeholders(wanted)})
                ORDER BY id
                """,
                wanted,
            )
            return {row["whatsapp"]: PlayerAggregateStats.from_row(row) for row in cursor.fetchall()}

    def get_by_names(self, names: list[str]) -> dict[str, PlayerAggregateStats]:
        """
        Stats for the given names, keyed by normalized name.

        When several rows share a normalized name the most recently created
        one wins.
        """
        wanted = sorted({normalize_name(n) for n in names if normalize_name(n)})
        if not wanted:
            return {}

        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT * FROM player_statistics
                WHERE normalize_name(name) IN ({self.placeholders(wanted)})
                ORDER BY id
                """,
                wanted,
            )
            stats = {}
            for row in cursor.fetchall():
                key = normalize_name(row["name"])
                if key in stats:
                    logger.debug(f"Duplicate statistics rows for name key {key!r}")
                stats[key] = PlayerAggregateStats.from_row(row)
            return stats

    def get_by_identity(self, name: str, whatsapp: str | None = None) -> dict | None:
        """Full statistics row for one identity, or None."""
        with self.connection() as conn:
            cursor = conn.cursor()
            row = find_statistics_row(cursor, name, whatsapp)
            return dict(row) if row else None

    def apply_game_result(
        self,
        name: str,
        whatsapp: str | None,
        goals: int,
        assists: int,
        won: bool,
        lost: bool,
        drew: bool,
    ) -> None:
        """Add one finished game to an identity's aggregate, creating it if needed."""
        result = PlayerGameResult(name, whatsapp, goals, assists, won=won, lost=lost, drew=drew)
        with self.connection() as conn:
            upsert_game_result(conn.cursor(), result)

    def get_leaderboard(
        self,
        search: str | None = None,
        min_goals: int | None = None,
        min_assists: int | None = None,
        sort_by: str = "total_goals",
        descending: bool = True,
        limit: int = 50,
    ) -> list[dict]:
        """
        Ranked statistics with optional filters.

        Ties are broken by wins, goals, assists and games (descending) and
        finally by name (ascending).

        Raises:
            ValueError: If sort_by is not a sortable column
        """
        if sort_by not in LEADERBOARD_SORT_COLUMNS:
            raise ValueError(f"Cannot sort statistics by {sort_by!r}")

        clauses = []
        params: list = []
        if search and search.strip():
            clauses.append("normalize_name(name) LIKE ?")
            params.append(f"%{normalize_name(search)}%")
        if min_goals is not None:
            clauses.append("total_goals >= ?")
            params.append(min_goals)
        if min_assists is not None:
            clauses.append("COALESCE(total_assists, 0) >= ?")
            params.append(min_assists)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        order = [f"{sort_by} {'DESC' if descending else 'ASC'}"]
        for column in _TIE_BREAKERS:
            if column == sort_by:
                continue
            order.append(f"{column} {'ASC' if column == 'name' else 'DESC'}")

        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT id, name, whatsapp, total_games, total_goals,
                       COALESCE(total_assists, 0) AS total_assists, wins, losses, draws
                FROM player_statistics
                {where}
                ORDER BY {', '.join(order)}
                LIMIT ?
                """,
                (*params, limit),
            )
            return [dict(row) for row in cursor.fetchall()]
