"""
Repository for games, sign-ups and team assignments.
"""

import logging

from domain.models.draw import RecentDrawnGame
from domain.models.player import Player, PlayerGameResult, identity_key
from repositories.base_repository import BaseRepository
from repositories.interfaces import IGameRepository
from repositories.player_statistics_repository import upsert_game_result

logger = logging.getLogger("racha.repositories.game")


class GameRepository(BaseRepository, IGameRepository):
    """
    Handles all game-related database operations.

    Responsibilities:
    - Game creation and lookup
    - Player sign-ups and RSVP status
    - Persisting drawn teams and the "teams drawn" flag
    - Recent drawn-game rosters for teammate history
    - Final score and per-player scoring
    """

    def create_game(
        self,
        date: str,
        players_per_team: int,
        time: str | None = None,
        location: str | None = None,
        ball_responsible: str | None = None,
        vest_responsible: str | None = None,
    ) -> int:
        """
        Create a new game.

        Args:
            date: ISO date (YYYY-MM-DD), used to order games by recency
            players_per_team: Team size for the draw
            time: Optional kick-off time
            location: Optional venue
            ball_responsible: Who brings the ball
            vest_responsible: Who brings the vests

        Returns:
            The new game_id
        """
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO games
                (date, time, location, players_per_team, ball_responsible, vest_responsible)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (date, time, location, players_per_team, ball_responsible, vest_responsible),
            )
            return cursor.lastrowid

    def get_game(self, game_id: int) -> dict | None:
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM games WHERE game_id = ?", (game_id,))
            row = cursor.fetchone()
            if not row:
                return None
            game = dict(row)
            game["teams_drawn"] = bool(game["teams_drawn"])
            game["finished"] = bool(game["finished"])
            return game

    def add_player(
        self,
        game_id: int,
        name: str,
        whatsapp: str | None = None,
        preferred_position: str | None = None,
        status: str = "confirmed",
    ) -> int:
        """Sign a player up for a game and return the sign-up id."""
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO game_players (game_id, name, whatsapp, preferred_position, status)
                VALUES (?, ?, ?, ?, ?)
                """,
                (game_id, name, whatsapp, preferred_position, status),
            )
            return cursor.lastrowid

    def remove_player(self, player_id: int) -> bool:
        """Delete a sign-up. Returns True if a row was removed."""
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM game_players WHERE id = ?", (player_id,))
            return cursor.rowcount > 0

    def get_player(self, player_id: int) -> Player | None:
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM game_players WHERE id = ?", (player_id,))
            row = cursor.fetchone()
            return self._row_to_player(row) if row else None

    def get_players(self, game_id: int) -> list[Player]:
        """All sign-ups of a game in sign-up order."""
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT * FROM game_players WHERE game_id = ? ORDER BY id",
                (game_id,),
            )
            return [self._row_to_player(row) for row in cursor.fetchall()]

    def get_confirmed_players(self, game_id: int) -> list[Player]:
        """Confirmed sign-ups of a game in sign-up order."""
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT * FROM game_players
                WHERE game_id = ? AND status = 'confirmed'
                ORDER BY id
                """,
                (game_id,),
            )
            return [self._row_to_player(row) for row in cursor.fetchall()]

    def update_player_status(self, player_id: int, status: str) -> bool:
        """
        Change RSVP status.

        Any team assignment of the player is cleared: a status change
        invalidates the draw for that player.
        """
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE game_players SET status = ?, team_number = NULL WHERE id = ?",
                (status, player_id),
            )
            return cursor.rowcount > 0

    def save_team_assignment(self, game_id: int, team1_ids: list[int], team2_ids: list[int]) -> None:
        """
        Replace the team assignment of a game and flag its teams as drawn.

        Raises:
            ValueError: If a player id does not belong to the game (nothing is written)
        """
        with self.atomic_transaction() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE game_players SET team_number = NULL WHERE game_id = ?",
                (game_id,),
            )
            for team_number, ids in ((1, team1_ids), (2, team2_ids)):
                for player_id in ids:
                    cursor.execute(
                        "UPDATE game_players SET team_number = ? WHERE id = ? AND game_id = ?",
                        (team_number, player_id, game_id),
                    )
                    if cursor.rowcount == 0:
                        raise ValueError(f"Player {player_id} is not signed up for game {game_id}")
            cursor.execute("UPDATE games SET teams_drawn = 1 WHERE game_id = ?", (game_id,))
            if cursor.rowcount == 0:
                raise ValueError(f"Game {game_id} not found")

    def get_recent_drawn_games(self, limit: int = 12) -> list[RecentDrawnGame]:
        """
        Rosters of the most recent games whose teams were drawn.

        Games are ordered by date descending; players are reduced to their
        identity keys.
        """
        if limit <= 0:
            return []

        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT game_id FROM games
                WHERE teams_drawn = 1
                ORDER BY date DESC, game_id DESC
                LIMIT ?
                """,
                (limit,),
            )
            game_ids = [row["game_id"] for row in cursor.fetchall()]
            if not game_ids:
                return []

            cursor.execute(
                f"""
                SELECT game_id, name, whatsapp, team_number
                FROM game_players
                WHERE game_id IN ({self.placeholders(game_ids)}) AND team_number IN (1, 2)
                ORDER BY id
                """,
                game_ids,
            )
            rosters: dict[int, dict[int, list[str]]] = {gid: {1: [], 2: []} for gid in game_ids}
            for row in cursor.fetchall():
                key = identity_key(row["name"], row["whatsapp"])
                rosters[row["game_id"]][row["team_number"]].append(key)

        return [
            RecentDrawnGame(
                team1=tuple(rosters[gid][1]),
                team2=tuple(rosters[gid][2]),
                game_id=gid,
            )
            for gid in game_ids
        ]

    def finish_game(
        self,
        game_id: int,
        final_score_team1: int,
        final_score_team2: int,
        player_scoring: dict[int, tuple[int, int]],
        results: list[PlayerGameResult] | None = None,
    ) -> None:
        """
        Mark a game finished with its final score and per-player scoring,
        and add each result to the lifetime statistics.

        Everything happens in one transaction: on failure the game stays
        open and no aggregate is touched, so finishing can be retried.

        Args:
            game_id: Game to finish
            final_score_team1: Goals of team 1
            final_score_team2: Goals of team 2
            player_scoring: Maps sign-up id -> (goals, assists)
            results: Aggregate updates for the players who took part

        Raises:
            ValueError: If the game does not exist or is already finished
        """
        with self.atomic_transaction() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE games
                SET finished = 1, final_score_team1 = ?, final_score_team2 = ?
                WHERE game_id = ? AND finished = 0
                """,
                (final_score_team1, final_score_team2, game_id),
            )
            if cursor.rowcount == 0:
                raise ValueError(f"Game {game_id} not found or already finished")
            for player_id, (goals, assists) in player_scoring.items():
                cursor.execute(
                    "UPDATE game_players SET goals = ?, assists = ? WHERE id = ? AND game_id = ?",
                    (goals, assists, player_id, game_id),
                )
                if cursor.rowcount == 0:
                    logger.warning(f"Scoring ignored for unknown player {player_id} in game {game_id}")
            for result in results or []:
                upsert_game_result(cursor, result)

    def _row_to_player(self, row) -> Player:
        """Convert database row to Player object."""
        return Player(
            id=row["id"],
            name=row["name"],
            whatsapp=row["whatsapp"] or None,
            preferred_position=self.column_or_default(row, "preferred_position"),
            status=row["status"],
            team_number=row["team_number"],
            goals=row["goals"] or 0,
            assists=row["assists"] or 0,
            game_id=row["game_id"],
        )
