"""Tests for ServiceContainer."""

import pytest

from infrastructure.service_container import ServiceConfig, ServiceContainer
from tests.conftest import TEST_GAME_DATE, ZeroRandom


@pytest.fixture
def config(temp_db_path):
    """Create a test configuration with deterministic draws."""
    return ServiceConfig(db_path=temp_db_path, rng=ZeroRandom())


class TestServiceContainerInitialization:
    """Tests for ServiceContainer initialization."""

    def test_initialize_creates_all_repositories(self, config):
        """All repositories are created after initialization."""
        container = ServiceContainer(config)
        container.initialize()

        assert container.game_repo is not None
        assert container.statistics_repo is not None
        assert container.audit_repo is not None

    def test_initialize_creates_all_services(self, config):
        """All services are created after initialization."""
        container = ServiceContainer(config)
        container.initialize()

        assert container.game_service is not None
        assert container.draw_service is not None
        assert container.draw_history_service is not None
        assert container.statistics_service is not None
        assert container.audit_service is not None

    def test_initialize_is_idempotent(self, config):
        """Calling initialize multiple times is safe."""
        container = ServiceContainer(config)

        container.initialize()
        first_draw_service = container.draw_service

        container.initialize()

        assert container.draw_service is first_draw_service

    def test_is_initialized_flag(self, config):
        """is_initialized returns correct state."""
        container = ServiceContainer(config)
        assert container.is_initialized is False
        assert container.game_service is None

        container.initialize()

        assert container.is_initialized is True


class TestServiceContainerConfig:
    """Configuration flows into the wired services."""

    def test_draw_settings_override(self, temp_db_path):
        """Overridden settings reach the shuffler and draw service."""
        config = ServiceConfig(
            db_path=temp_db_path,
            draw_settings={"position_weight": 2.0, "recent_games_window": 5},
        )
        container = ServiceContainer(config)
        container.initialize()

        assert container.draw_service.shuffler.balancing_service.position_weight == 2.0
        assert container.draw_service.shuffler.balancing_service.strength_weight == 1.0
        assert container.draw_service.recent_games_window == 5

    def test_audit_can_be_disabled(self, temp_db_path):
        container = ServiceContainer(ServiceConfig(db_path=temp_db_path, audit_log_enabled=False))
        container.initialize()
        container.game_service.create_game(TEST_GAME_DATE, players_per_team=3)
        assert container.audit_repo.get_events() == []

    def test_leaderboard_limit(self, temp_db_path):
        container = ServiceContainer(ServiceConfig(db_path=temp_db_path, leaderboard_limit=7))
        container.initialize()
        assert container.statistics_service.leaderboard_limit == 7


class TestServiceContainerWorkflow:
    """A full game through the wired container."""

    def test_create_draw_finish(self, config):
        """Sign-ups, draw, result and leaderboard work end to end."""
        container = ServiceContainer(config)
        container.initialize()
        games = container.game_service

        game_id = games.create_game(TEST_GAME_DATE, players_per_team=3).unwrap()
        ids = [games.add_player(game_id, f"P{i}").unwrap() for i in range(1, 8)]

        draw = container.draw_service.draw_teams(game_id).unwrap()
        assert len(draw.team1) == 3 and len(draw.team2) == 3
        assert [p.id for p in draw.excluded] == [ids[6]]

        summary = games.finish_game(game_id, 2, 1, {ids[0]: (2, 0)}).unwrap()
        assert summary["players_updated"] == 6

        rows = container.statistics_service.get_leaderboard().unwrap()
        assert rows[0]["name"] == "P1"
        assert rows[0]["total_goals"] == 2
        assert len(rows) == 6
