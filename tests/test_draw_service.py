"""
Tests for DrawService and DrawHistoryService: the full draw pipeline.
"""

import sqlite3
from unittest.mock import MagicMock, patch

from domain.models.draw import DrawResult, DrawShortfall
from domain.models.player import Player
from services import error_codes
from services.draw_history_service import RECENT_GAMES, STATS_BY_NAME, STATS_BY_WHATSAPP, DrawHistoryService
from services.draw_service import DrawService
from tests.conftest import TEST_GAME_DATE


def _teams(game_repository, game_id):
    players = game_repository.get_players(game_id)
    team1 = [p.name for p in players if p.team_number == 1]
    team2 = [p.name for p in players if p.team_number == 2]
    return team1, team2


class TestDrawTeams:
    """Happy path and game-state checks."""

    def test_draw_persists_teams(self, draw_service, game_repository, game_with_players):
        """Teams are saved and the game is flagged as drawn."""
        game_id, _ = game_with_players
        result = draw_service.draw_teams(game_id)

        assert result.success
        assert [p.name for p in result.value.team1] == ["P1", "P2", "P3"]
        assert [p.name for p in result.value.team2] == ["P4", "P5", "P6"]
        assert _teams(game_repository, game_id) == (["P1", "P2", "P3"], ["P4", "P5", "P6"])
        assert game_repository.get_game(game_id)["teams_drawn"] is True
        assert result.value.degraded_sources == []

    def test_draw_writes_audit_event(self, draw_service, audit_repository, game_with_players):
        """A teams_drawn event records both rosters."""
        game_id, player_ids = game_with_players
        draw_service.draw_teams(game_id)

        events = audit_repository.get_events(entity_type="game", entity_id=game_id)
        drawn = [e for e in events if e["event"] == "teams_drawn"]
        assert len(drawn) == 1
        assert drawn[0]["details"]["team1"] == player_ids[:3]
        assert drawn[0]["details"]["redraw"] is False

    def test_unknown_game(self, draw_service):
        """Drawing an unknown game fails with game_not_found."""
        result = draw_service.draw_teams(999)
        assert result.error_code == error_codes.GAME_NOT_FOUND

    def test_finished_game(self, draw_service, game_service, game_with_players):
        """Finished games cannot be drawn again."""
        game_id, _ = game_with_players
        draw_service.draw_teams(game_id)
        game_service.finish_game(game_id, 1, 0)

        result = draw_service.draw_teams(game_id, overwrite=True)
        assert result.error_code == error_codes.GAME_FINISHED

    def test_redraw_requires_overwrite(self, draw_service, game_with_players):
        """An existing draw is only replaced with overwrite=True."""
        game_id, _ = game_with_players
        draw_service.draw_teams(game_id)

        result = draw_service.draw_teams(game_id)
        assert not result.success
        assert result.error_code == error_codes.TEAMS_ALREADY_DRAWN

    def test_redraw_uses_previous_draw_as_history(self, draw_service, game_repository, game_with_players):
        """The previous draw of the same game counts as recent history."""
        game_id, _ = game_with_players
        draw_service.draw_teams(game_id)

        result = draw_service.draw_teams(game_id, overwrite=True)
        assert result.success
        assert _teams(game_repository, game_id) == (["P1", "P3", "P4"], ["P2", "P5", "P6"])

    def test_redraw_after_status_change(self, draw_service, game_service, game_repository, game_with_players):
        """A player dropping out is replaced on redraw."""
        game_id, player_ids = game_with_players
        game_service.add_player(game_id, "P7")
        draw_service.draw_teams(game_id)

        game_service.set_player_status(player_ids[0], "not_going")
        result = draw_service.draw_teams(game_id, overwrite=True)

        placed = [p.name for p in result.value.team1 + result.value.team2]
        assert "P1" not in placed
        assert "P7" in placed
        assert game_repository.get_player(player_ids[0]).team_number is None


class TestInsufficientPlayers:
    """Too few confirmed players."""

    def test_reports_shortfall_without_writing(self, draw_service, game_service, game_repository):
        """5 confirmed for 3 per team: no assignment, game not drawn."""
        game_id = game_service.create_game(TEST_GAME_DATE, players_per_team=3).unwrap()
        for i in range(5):
            game_service.add_player(game_id, f"P{i}")
        game_service.add_player(game_id, "Talvez", status="maybe")

        result = draw_service.draw_teams(game_id)

        assert result.error_code == error_codes.INSUFFICIENT_PLAYERS
        assert result.value == DrawShortfall(required=6, confirmed=5)
        assert _teams(game_repository, game_id) == ([], [])
        assert game_repository.get_game(game_id)["teams_drawn"] is False


class TestHistoryDegradation:
    """History lookups fail independently without aborting the draw."""

    def test_stats_by_name_failure(self, game_repository, shuffler, game_with_players, caplog):
        """A failing name lookup is reported and the draw still completes."""
        game_id, _ = game_with_players
        stats_repo = MagicMock()
        stats_repo.get_by_names.side_effect = sqlite3.OperationalError("no such column: total_assists")
        service = DrawService(game_repository, DrawHistoryService(game_repository, stats_repo), shuffler)

        with caplog.at_level("WARNING"):
            result = service.draw_teams(game_id)

        assert result.success
        assert result.value.degraded_sources == [STATS_BY_NAME]
        assert result.value.is_degraded
        assert error_codes.HISTORY_UNAVAILABLE in caplog.text
        assert game_repository.get_game(game_id)["teams_drawn"] is True

    def test_recent_games_failure(self, draw_service, game_repository, game_with_players):
        """A failing recent-games query degrades to no teammate history."""
        game_id, _ = game_with_players
        with patch.object(game_repository, "get_recent_drawn_games", side_effect=sqlite3.DatabaseError("boom")):
            result = draw_service.draw_teams(game_id)

        assert result.success
        assert result.value.degraded_sources == [RECENT_GAMES]

    def test_each_lookup_degrades_separately(self, game_repository):
        """A whatsapp lookup failure keeps the name results."""
        stats_repo = MagicMock()
        stats_repo.get_by_whatsapps.side_effect = sqlite3.OperationalError("locked")
        stats_repo.get_by_names.return_value = {"bia": "stats"}
        history = DrawHistoryService(game_repository, stats_repo)

        stats, degraded = history.load_aggregate_stats(
            [Player(id=1, name="Ana", whatsapp="11911110000"), Player(id=2, name="Bia")]
        )
        assert stats == {"bia": "stats"}
        assert degraded == [STATS_BY_WHATSAPP]
        stats_repo.get_by_names.assert_called_once_with(["bia"])

    def test_no_lookups_for_empty_groups(self, game_repository):
        """Without contact-less players the name query is skipped."""
        stats_repo = MagicMock()
        stats_repo.get_by_whatsapps.return_value = {}
        history = DrawHistoryService(game_repository, stats_repo)
        history.load_aggregate_stats([Player(id=1, name="Ana", whatsapp="11911110000")])
        stats_repo.get_by_names.assert_not_called()


class TestPersistenceFailure:
    """A computed draw survives a failed save."""

    def test_failure_returns_draw_for_retry(self, draw_service, game_repository, game_with_players):
        """The failed result carries the DrawResult; persist_draw saves it later."""
        game_id, _ = game_with_players
        with patch.object(
            game_repository, "save_team_assignment", side_effect=sqlite3.OperationalError("database is locked")
        ):
            result = draw_service.draw_teams(game_id)

        assert not result.success
        assert result.error_code == error_codes.PERSISTENCE_FAILURE
        assert isinstance(result.value, DrawResult)
        assert game_repository.get_game(game_id)["teams_drawn"] is False

        retry = draw_service.persist_draw(game_id, result.value)
        assert retry.success
        assert retry.value is result.value
        team1_ids, team2_ids = result.value.team_ids()
        assert [p.id for p in game_repository.get_players(game_id) if p.team_number == 1] == team1_ids
        assert [p.id for p in game_repository.get_players(game_id) if p.team_number == 2] == team2_ids

    def test_failure_not_audited(self, draw_service, game_repository, audit_repository, game_with_players):
        """No teams_drawn event is written when the save fails."""
        game_id, _ = game_with_players
        with patch.object(game_repository, "save_team_assignment", side_effect=sqlite3.OperationalError("x")):
            draw_service.draw_teams(game_id)
        assert not [e for e in audit_repository.get_events() if e["event"] == "teams_drawn"]
