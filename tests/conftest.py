"""
Pytest fixtures for tests.

Performance optimization: Uses a session-scoped schema template to avoid
running the migrations for every test. Instead, we run them once and copy
the resulting database file.

Draws are randomized by jitter; tests inject ZeroRandom so every draw is
reproducible.
"""

import shutil

import pytest

from database import Database
from domain.models.player import Player
from repositories.audit_repository import AuditRepository
from repositories.game_repository import GameRepository
from repositories.player_statistics_repository import PlayerStatisticsRepository
from services.audit_service import AuditService
from services.draw_history_service import DrawHistoryService
from services.draw_service import DrawService
from services.game_service import GameService
from services.statistics_service import StatisticsService
from shuffler import BalancedShuffler


# =============================================================================
# CENTRALIZED CONSTANTS
# =============================================================================

TEST_GAME_DATE = "2024-05-04"
"""Default date for games created in tests."""


class ZeroRandom:
    """Random source whose random() is always 0, pinning all jitter to zero."""

    def random(self) -> float:
        return 0.0


class SequenceRandom:
    """Random source replaying a fixed sequence of values (cycled)."""

    def __init__(self, values):
        self.values = list(values)
        self.index = 0

    def random(self) -> float:
        value = self.values[self.index % len(self.values)]
        self.index += 1
        return value


@pytest.fixture(scope="session")
def _schema_template_path(tmp_path_factory):
    """
    Create a schema template database once per test session.

    All migrations run ONCE here. Tests copy from this template
    instead of running schema initialization each time.
    """
    template_dir = tmp_path_factory.mktemp("schema_template")
    template_path = str(template_dir / "template.db")
    Database(template_path)
    yield template_path


@pytest.fixture
def temp_db_path(tmp_path):
    """Create a temporary database path (no schema)."""
    path = str(tmp_path / "temp.db")
    yield path


@pytest.fixture
def repo_db_path(_schema_template_path, tmp_path):
    """
    Create a temporary database with initialized schema for repository tests.

    Fast: file copy instead of schema initialization.
    """
    test_db_path = str(tmp_path / "test.db")
    shutil.copy2(_schema_template_path, test_db_path)
    yield test_db_path


@pytest.fixture
def zero_rng():
    return ZeroRandom()


@pytest.fixture
def make_player():
    """Factory for confirmed players with sequential ids."""
    counter = {"next_id": 1}

    def _make(name, whatsapp=None, position=None, status="confirmed"):
        player = Player(
            id=counter["next_id"],
            name=name,
            whatsapp=whatsapp,
            preferred_position=position,
            status=status,
        )
        counter["next_id"] += 1
        return player

    return _make


@pytest.fixture
def shuffler(zero_rng):
    """Shuffler with default weights and all jitter pinned to zero."""
    return BalancedShuffler(rng=zero_rng)


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def game_repository(repo_db_path):
    """Create a game repository with temp database."""
    return GameRepository(repo_db_path)


@pytest.fixture
def statistics_repository(repo_db_path):
    """Create a player statistics repository with temp database."""
    return PlayerStatisticsRepository(repo_db_path)


@pytest.fixture
def audit_repository(repo_db_path):
    """Create an audit repository with temp database."""
    return AuditRepository(repo_db_path)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def audit_service(audit_repository):
    return AuditService(audit_repository, enabled=True)


@pytest.fixture
def game_service(game_repository, audit_service):
    """Create a game service with all dependencies wired."""
    return GameService(
        game_repo=game_repository,
        audit_service=audit_service,
    )


@pytest.fixture
def draw_history_service(game_repository, statistics_repository):
    return DrawHistoryService(game_repository, statistics_repository)


@pytest.fixture
def draw_service(game_repository, draw_history_service, shuffler, audit_service):
    """Create a draw service with zero jitter."""
    return DrawService(
        game_repo=game_repository,
        history_service=draw_history_service,
        shuffler=shuffler,
        audit_service=audit_service,
    )


@pytest.fixture
def statistics_service(statistics_repository):
    return StatisticsService(statistics_repository)


# =============================================================================
# GAME FIXTURES
# =============================================================================


@pytest.fixture
def game_with_players(game_service):
    """Create a 3-per-team game with 6 confirmed players (no history).

    Returns (game_id, [player_ids]) for players P1..P6 without whatsapp.
    """
    game_id = game_service.create_game(TEST_GAME_DATE, players_per_team=3).unwrap()
    player_ids = [game_service.add_player(game_id, f"P{i}").unwrap() for i in range(1, 7)]
    return game_id, player_ids
