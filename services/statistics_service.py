"""
Lifetime statistics queries.
"""

from config import LEADERBOARD_LIMIT
from domain.models.player import Player, PlayerAggregateStats, identity_key
from repositories.interfaces import IPlayerStatisticsRepository
from repositories.player_statistics_repository import LEADERBOARD_SORT_COLUMNS
from services import error_codes
from services.interfaces import IStatisticsService
from services.result import Result


class StatisticsService(IStatisticsService):
    """Read-side service over PlayerStatisticsRepository."""

    def __init__(self, stats_repo: IPlayerStatisticsRepository, leaderboard_limit: int = LEADERBOARD_LIMIT):
        self.stats_repo = stats_repo
        self.leaderboard_limit = leaderboard_limit

    def get_leaderboard(
        self,
        search: str | None = None,
        min_goals: int | None = None,
        min_assists: int | None = None,
        sort_by: str = "total_goals",
        descending: bool = True,
    ) -> Result[list[dict]]:
        """
        Ranked statistics.

        Args:
            search: Case-insensitive substring of the name
            min_goals: Only players with at least this many goals
            min_assists: Only players with at least this many assists
            sort_by: One of total_goals, total_assists, wins, total_games, name
            descending: Direction of the primary sort

        Returns:
            Result.ok(rows) or invalid_sort_column
        """
        if sort_by not in LEADERBOARD_SORT_COLUMNS:
            return Result.fail(
                f"Ordenação inválida: {sort_by}. Use {', '.join(LEADERBOARD_SORT_COLUMNS)}.",
                code=error_codes.INVALID_SORT_COLUMN,
            )
        rows = self.stats_repo.get_leaderboard(
            search=search,
            min_goals=min_goals,
            min_assists=min_assists,
            sort_by=sort_by,
            descending=descending,
            limit=self.leaderboard_limit,
        )
        return Result.ok(rows)

    def get_player_stats(self, player: Player) -> PlayerAggregateStats:
        """Aggregate stats for a player's identity; zero when there is no history."""
        key = identity_key(player.name, player.whatsapp)
        if player.whatsapp and player.whatsapp.strip():
            stats = self.stats_repo.get_by_whatsapps([player.whatsapp])
        else:
            stats = self.stats_repo.get_by_names([player.name])
        return stats.get(key, PlayerAggregateStats.zero())
