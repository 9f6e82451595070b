"""
Draw orchestration: load history, run the engine, persist the teams.
"""

import logging

from domain.models.draw import DrawResult
from repositories.interfaces import IGameRepository
from services import error_codes
from services.audit_service import AuditService
from services.draw_history_service import DrawHistoryService
from services.interfaces import IDrawService
from services.result import Result
from shuffler import BalancedShuffler

logger = logging.getLogger("racha.services.draw")


class DrawService(IDrawService):
    """
    Draws the two teams of a game.

    Flow: game checks -> confirmed players -> aggregate stats and recent
    games (each degrading to empty on failure) -> BalancedShuffler ->
    save_team_assignment -> audit event.
    """

    def __init__(
        self,
        game_repo: IGameRepository,
        history_service: DrawHistoryService,
        shuffler: BalancedShuffler | None = None,
        audit_service: AuditService | None = None,
        recent_games_window: int | None = None,
    ):
        self.game_repo = game_repo
        self.history_service = history_service
        self.shuffler = shuffler or BalancedShuffler()
        self.audit_service = audit_service or AuditService(None)
        self.recent_games_window = recent_games_window

    def draw_teams(self, game_id: int, *, overwrite: bool = False) -> Result[DrawResult]:
        """
        Draw and persist teams for a game.

        Args:
            game_id: Game to draw
            overwrite: Must be True to replace an existing draw

        Returns:
            Result.ok(DrawResult) on success.
            Result.fail with code game_not_found, game_finished,
            teams_already_drawn or insufficient_players (value: DrawShortfall)
            when the draw cannot run; no assignment is written.
            Result.fail with code persistence_failure (value: DrawResult)
            when the teams were computed but could not be saved.
        """
        game = self.game_repo.get_game(game_id)
        if game is None:
            return Result.fail(f"Jogo {game_id} não encontrado.", code=error_codes.GAME_NOT_FOUND)
        if game["finished"]:
            return Result.fail("Este jogo já foi finalizado.", code=error_codes.GAME_FINISHED)
        if game["teams_drawn"] and not overwrite:
            return Result.fail(
                "Os times já foram sorteados. Confirme para sortear novamente.",
                code=error_codes.TEAMS_ALREADY_DRAWN,
            )

        confirmed = self.game_repo.get_confirmed_players(game_id)
        stats_by_key, degraded = self.history_service.load_aggregate_stats(confirmed)
        recent_games, recent_degraded = self.history_service.load_recent_drawn_games(self.recent_games_window)
        degraded.extend(recent_degraded)

        result = self.shuffler.draw(
            confirmed,
            game["players_per_team"],
            stats_by_key=stats_by_key,
            recent_games=recent_games,
        )
        if not result.success:
            logger.info(f"Draw for game {game_id} not possible: {result.error}")
            return result

        draw = result.value
        draw.degraded_sources = degraded
        if degraded:
            logger.warning(f"Game {game_id} drawn with degraded history: {', '.join(degraded)}")
        return self.persist_draw(game_id, draw, redraw=bool(game["teams_drawn"]))

    def persist_draw(self, game_id: int, draw: DrawResult, redraw: bool = False) -> Result[DrawResult]:
        """
        Save a computed draw.

        Safe to call again with the same DrawResult after a persistence
        failure; the draw is not recomputed.
        """
        team1_ids, team2_ids = draw.team_ids()
        try:
            self.game_repo.save_team_assignment(game_id, team1_ids, team2_ids)
        except Exception:
            logger.exception(f"Failed to save team assignment for game {game_id}")
            return Result.fail(
                "Os times foram sorteados mas não puderam ser salvos. Tente salvar novamente.",
                code=error_codes.PERSISTENCE_FAILURE,
                value=draw,
            )

        self.audit_service.record(
            "teams_drawn",
            "game",
            game_id,
            {
                "team1": team1_ids,
                "team2": team2_ids,
                "excluded": [p.id for p in draw.excluded],
                "team1_strength": round(draw.team1_strength, 2),
                "team2_strength": round(draw.team2_strength, 2),
                "degraded_sources": list(draw.degraded_sources),
                "redraw": redraw,
            },
        )
        return Result.ok(draw)
