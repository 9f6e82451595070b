"""
Loads the history a draw needs: aggregate stats and recent drawn games.
"""

import logging

from config import DRAW_SETTINGS
from domain.models.draw import RecentDrawnGame
from domain.models.player import Player, PlayerAggregateStats, normalize_name
from repositories.interfaces import IGameRepository, IPlayerStatisticsRepository
from services import error_codes

logger = logging.getLogger("racha.services.draw_history")

STATS_BY_WHATSAPP = "stats_by_whatsapp"
STATS_BY_NAME = "stats_by_name"
RECENT_GAMES = "recent_drawn_games"


class DrawHistoryService:
    """
    Gathers draw inputs from the repositories.

    Every lookup degrades on its own: a failing query is logged, replaced by
    empty data and reported by name so the draw can still run.
    """

    def __init__(self, game_repo: IGameRepository, stats_repo: IPlayerStatisticsRepository):
        self.game_repo = game_repo
        self.stats_repo = stats_repo

    def load_aggregate_stats(
        self, confirmed: list[Player]
    ) -> tuple[dict[str, PlayerAggregateStats], list[str]]:
        """
        Aggregate stats for the confirmed players, keyed by identity key.

        Players with a whatsapp are looked up by contact, the others by
        normalized name. Players without history are simply absent.

        Returns:
            Tuple of (stats_by_key, degraded_sources)
        """
        whatsapps = sorted({p.whatsapp.strip() for p in confirmed if p.whatsapp and p.whatsapp.strip()})
        names = sorted({normalize_name(p.name) for p in confirmed if not (p.whatsapp and p.whatsapp.strip())})

        stats_by_key: dict[str, PlayerAggregateStats] = {}
        degraded: list[str] = []

        if whatsapps:
            try:
                stats_by_key.update(self.stats_repo.get_by_whatsapps(whatsapps))
            except Exception as exc:
                self._degrade(STATS_BY_WHATSAPP, exc, degraded)
        if names:
            try:
                stats_by_key.update(self.stats_repo.get_by_names(names))
            except Exception as exc:
                self._degrade(STATS_BY_NAME, exc, degraded)

        return stats_by_key, degraded

    def load_recent_drawn_games(self, window: int | None = None) -> tuple[list[RecentDrawnGame], list[str]]:
        """
        Most recent drawn games, newest first.

        Returns:
            Tuple of (recent_games, degraded_sources)
        """
        window = window if window is not None else DRAW_SETTINGS["recent_games_window"]
        try:
            return self.game_repo.get_recent_drawn_games(limit=window), []
        except Exception as exc:
            degraded: list[str] = []
            self._degrade(RECENT_GAMES, exc, degraded)
            return [], degraded

    @staticmethod
    def _degrade(source: str, exc: Exception, degraded: list[str]) -> None:
        logger.warning(f"{error_codes.HISTORY_UNAVAILABLE}: {source} lookup failed, drawing without it: {exc}")
        degraded.append(source)
