"""
Game lifecycle: creation, sign-ups, RSVP changes and final results.
"""

import logging
from datetime import date as date_cls

from config import (
    DEFAULT_PLAYERS_PER_TEAM,
    MAX_PLAYERS_PER_TEAM,
    MIN_PLAYERS_PER_TEAM,
    PLAYER_STATUSES,
    POSITIONS,
    STATUS_CONFIRMED,
)
from domain.models.player import Player, PlayerGameResult, normalize_name
from repositories.interfaces import IGameRepository
from services import error_codes
from services.audit_service import AuditService
from services.interfaces import IGameService
from services.result import Result
from utils.validation import clamp_number, is_valid_whatsapp, sanitize_string, whatsapp_digits

logger = logging.getLogger("racha.services.game")

FINISHED_MESSAGE = "Jogo finalizado: edição de presença desabilitada."


class GameService(IGameService):
    """
    Orchestrates everything around a game except the draw itself.

    Finished games are read-only: sign-ups, RSVP changes and removals are
    rejected with game_finished.
    """

    def __init__(
        self,
        game_repo: IGameRepository,
        audit_service: AuditService | None = None,
    ):
        self.game_repo = game_repo
        self.audit_service = audit_service or AuditService(None)

    # --- Games ---

    def create_game(
        self,
        date: str,
        players_per_team: int = DEFAULT_PLAYERS_PER_TEAM,
        time: str | None = None,
        location: str | None = None,
        ball_responsible: str | None = None,
        vest_responsible: str | None = None,
    ) -> Result[int]:
        """
        Create a game.

        Args:
            date: ISO date (YYYY-MM-DD)
            players_per_team: Between MIN_PLAYERS_PER_TEAM and MAX_PLAYERS_PER_TEAM

        Returns:
            Result.ok(game_id), or a validation failure
        """
        try:
            date_cls.fromisoformat(date)
        except (TypeError, ValueError):
            return Result.fail(f"Data inválida: {date!r}.", code=error_codes.VALIDATION_ERROR)

        if (
            not isinstance(players_per_team, int)
            or isinstance(players_per_team, bool)
            or not MIN_PLAYERS_PER_TEAM <= players_per_team <= MAX_PLAYERS_PER_TEAM
        ):
            return Result.fail(
                f"Jogadores por time deve estar entre {MIN_PLAYERS_PER_TEAM} e {MAX_PLAYERS_PER_TEAM}.",
                code=error_codes.INVALID_PLAYERS_PER_TEAM,
            )

        game_id = self.game_repo.create_game(
            date=date,
            players_per_team=players_per_team,
            time=sanitize_string(time, 10) or None,
            location=sanitize_string(location, 120) or None,
            ball_responsible=sanitize_string(ball_responsible) or None,
            vest_responsible=sanitize_string(vest_responsible) or None,
        )
        logger.info(f"Game {game_id} created for {date} ({players_per_team} per team)")
        self.audit_service.record("game_created", "game", game_id, {"date": date, "players_per_team": players_per_team})
        return Result.ok(game_id)

    def get_game(self, game_id: int) -> Result[dict]:
        """Game row plus its sign-ups under "players"."""
        game = self.game_repo.get_game(game_id)
        if game is None:
            return Result.fail(f"Jogo {game_id} não encontrado.", code=error_codes.GAME_NOT_FOUND)
        game["players"] = self.game_repo.get_players(game_id)
        return Result.ok(game)

    # --- Sign-ups ---

    def add_player(
        self,
        game_id: int,
        name: str,
        whatsapp: str | None = None,
        preferred_position: str | None = None,
        status: str = STATUS_CONFIRMED,
    ) -> Result[int]:
        """
        Sign a player up for a game.

        The name is sanitized and the whatsapp reduced to its digits. A player
        already signed up (same whatsapp, or same name when no whatsapp is
        given) is rejected with duplicate_player.

        Returns:
            Result.ok(player_id) or a failure
        """
        game_check = self._require_open_game(game_id)
        if not game_check.success:
            return game_check

        clean_name = sanitize_string(name)
        if not clean_name:
            return Result.fail("Informe o nome do jogador.", code=error_codes.VALIDATION_ERROR)

        raw_whatsapp = sanitize_string(whatsapp, 20)
        if not is_valid_whatsapp(raw_whatsapp):
            return Result.fail(
                "WhatsApp inválido: use de 10 a 15 dígitos.",
                code=error_codes.INVALID_WHATSAPP,
            )
        contact = whatsapp_digits(raw_whatsapp) or None

        position = sanitize_string(preferred_position, 40) or None
        if position is not None and position not in POSITIONS:
            return Result.fail(
                f"Posição inválida: {position}. Use {', '.join(POSITIONS)}.",
                code=error_codes.INVALID_POSITION,
            )

        if status not in PLAYER_STATUSES:
            return Result.fail(f"Status inválido: {status}.", code=error_codes.INVALID_STATUS)

        existing = self.game_repo.get_players(game_id)
        if self._is_duplicate(existing, clean_name, contact):
            return Result.fail("Jogador já confirmado para este jogo.", code=error_codes.DUPLICATE_PLAYER)

        player_id = self.game_repo.add_player(
            game_id,
            clean_name,
            whatsapp=contact,
            preferred_position=position,
            status=status,
        )
        self.audit_service.record("player_added", "game", game_id, {"name": clean_name, "whatsapp": contact})
        return Result.ok(player_id)

    @staticmethod
    def _is_duplicate(existing: list[Player], name: str, contact: str | None) -> bool:
        name_key = normalize_name(name)
        for player in existing:
            if contact:
                if whatsapp_digits(player.whatsapp) == contact:
                    return True
            elif normalize_name(player.name) == name_key:
                return True
        return False

    def set_player_status(self, player_id: int, status: str) -> Result[Player]:
        """
        Change a player's RSVP status.

        The player's team assignment is cleared; the draw has to be redone
        for the change to be reflected in the teams.
        """
        if status not in PLAYER_STATUSES:
            return Result.fail(f"Status inválido: {status}.", code=error_codes.INVALID_STATUS)

        player = self.game_repo.get_player(player_id)
        if player is None:
            return Result.fail("Jogador não encontrado.", code=error_codes.PLAYER_NOT_FOUND)

        game_check = self._require_open_game(player.game_id)
        if not game_check.success:
            return game_check

        self.game_repo.update_player_status(player_id, status)
        self.audit_service.record(
            "player_status_changed",
            "game",
            player.game_id,
            {"player_id": player_id, "from": player.status, "to": status},
        )
        return Result.ok(self.game_repo.get_player(player_id))

    def remove_player(self, player_id: int) -> Result[None]:
        player = self.game_repo.get_player(player_id)
        if player is None:
            return Result.fail("Jogador não encontrado.", code=error_codes.PLAYER_NOT_FOUND)

        game_check = self._require_open_game(player.game_id)
        if not game_check.success:
            return game_check

        self.game_repo.remove_player(player_id)
        self.audit_service.record("player_deleted", "game", player.game_id, {"player_id": player_id})
        return Result.ok()

    # --- Results ---

    def finish_game(
        self,
        game_id: int,
        final_score_team1: int,
        final_score_team2: int,
        player_stats: dict[int, tuple[int, int]] | None = None,
    ) -> Result[dict]:
        """
        Close a game with its final score and update lifetime statistics.

        Every player placed on team 1 or 2 gets one more game, the goals and
        assists given in player_stats (negative values count as 0), and a
        win, loss or draw from the score. The score, the per-player scoring
        and the statistics are saved together; on persistence_failure nothing
        was written and the call can be repeated.

        Args:
            game_id: Game to finish
            final_score_team1: Goals of team 1
            final_score_team2: Goals of team 2
            player_stats: Maps player id -> (goals, assists)

        Returns:
            Result.ok(summary dict) or a failure
        """
        for score in (final_score_team1, final_score_team2):
            if not isinstance(score, int) or isinstance(score, bool) or score < 0:
                return Result.fail("Placar inválido.", code=error_codes.INVALID_SCORE)

        game = self.game_repo.get_game(game_id)
        if game is None:
            return Result.fail(f"Jogo {game_id} não encontrado.", code=error_codes.GAME_NOT_FOUND)
        if game["finished"]:
            return Result.fail("Este jogo já foi finalizado.", code=error_codes.GAME_FINISHED)

        scoring = {
            player_id: (int(clamp_number(goals)), int(clamp_number(assists)))
            for player_id, (goals, assists) in (player_stats or {}).items()
        }

        team1_won = final_score_team1 > final_score_team2
        team2_won = final_score_team2 > final_score_team1
        drew = final_score_team1 == final_score_team2

        results = []
        for player in self.game_repo.get_players(game_id):
            if player.team_number not in (1, 2):
                continue
            goals, assists = scoring.get(player.id, (0, 0))
            results.append(
                PlayerGameResult(
                    player.name,
                    player.whatsapp,
                    goals,
                    assists,
                    won=(player.team_number == 1 and team1_won) or (player.team_number == 2 and team2_won),
                    lost=(player.team_number == 1 and team2_won) or (player.team_number == 2 and team1_won),
                    drew=drew,
                )
            )
        if not results:
            logger.warning(f"Game {game_id} finished without drawn teams; no statistics updated")

        try:
            self.game_repo.finish_game(game_id, final_score_team1, final_score_team2, scoring, results)
        except Exception:
            logger.exception(f"Failed to finish game {game_id}; nothing was saved")
            return Result.fail(
                "Não foi possível salvar o resultado. Nada foi alterado, tente novamente.",
                code=error_codes.PERSISTENCE_FAILURE,
                value={"game_id": game_id, "players_updated": 0},
            )
        updated = len(results)

        summary = {
            "game_id": game_id,
            "final_score_team1": final_score_team1,
            "final_score_team2": final_score_team2,
            "players_updated": updated,
        }
        logger.info(f"Game {game_id} finished {final_score_team1}x{final_score_team2}, {updated} players updated")
        self.audit_service.record(
            "game_finished",
            "game",
            game_id,
            {"final_score_team1": final_score_team1, "final_score_team2": final_score_team2},
        )
        return Result.ok(summary)

    def _require_open_game(self, game_id: int | None) -> Result[dict]:
        game = self.game_repo.get_game(game_id) if game_id is not None else None
        if game is None:
            return Result.fail(f"Jogo {game_id} não encontrado.", code=error_codes.GAME_NOT_FOUND)
        if game["finished"]:
            return Result.fail(FINISHED_MESSAGE, code=error_codes.GAME_FINISHED)
        return Result.ok(game)
