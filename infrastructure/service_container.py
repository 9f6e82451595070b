"""
Service container for dependency injection and initialization.

This module centralizes repository and service creation so callers (a web
handler, a script, tests) get a fully wired racha organizer from one object.

Usage:
    container = ServiceContainer(ServiceConfig(db_path="racha.db"))
    container.initialize()

    # Access services
    result = container.draw_service.draw_teams(game_id)
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Any

from config import AUDIT_LOG_ENABLED, DB_PATH, DRAW_SETTINGS, LEADERBOARD_LIMIT
from database import Database
from repositories.audit_repository import AuditRepository
from repositories.game_repository import GameRepository
from repositories.player_statistics_repository import PlayerStatisticsRepository
from services.audit_service import AuditService
from services.draw_history_service import DrawHistoryService
from services.draw_service import DrawService
from services.game_service import GameService
from services.statistics_service import StatisticsService
from shuffler import BalancedShuffler

logger = logging.getLogger("racha.infrastructure.container")


@dataclass
class RepositoryContainer:
    """Container for all repositories."""

    game: GameRepository | None = None
    statistics: PlayerStatisticsRepository | None = None
    audit: AuditRepository | None = None


@dataclass
class ServiceConfig:
    """Configuration for service initialization."""

    # Database
    db_path: str = DB_PATH

    # Draw settings (weights, jitter amplitudes, recent window)
    draw_settings: dict[str, Any] = field(default_factory=lambda: dict(DRAW_SETTINGS))

    # Random source for the draw jitter; None uses a fresh random.Random()
    rng: Any = None

    leaderboard_limit: int = LEADERBOARD_LIMIT
    audit_log_enabled: bool = AUDIT_LOG_ENABLED


class ServiceContainer:
    """
    Central container for all application services.

    Handles proper initialization order and dependency injection.

    Example:
        container = ServiceContainer(config)
        container.initialize()

        # Services are now available
        game_service = container.game_service
    """

    def __init__(self, config: ServiceConfig | None = None):
        """
        Initialize the container with configuration.

        Args:
            config: Service configuration (uses defaults if None)
        """
        self.config = config or ServiceConfig()
        self._initialized = False
        self._repos = RepositoryContainer()

        self._database: Database | None = None
        self._services: dict[str, Any] = {}

    @property
    def is_initialized(self) -> bool:
        """Check if container has been initialized."""
        return self._initialized

    def initialize(self) -> None:
        """
        Initialize all services in correct order.

        This method is idempotent - calling it multiple times has no effect.
        """
        if self._initialized:
            logger.debug("ServiceContainer already initialized, skipping")
            return

        logger.info("Initializing ServiceContainer...")

        self._init_database()
        self._init_repositories()
        self._init_services()

        self._initialized = True
        logger.info("ServiceContainer initialization complete")

    def _init_database(self) -> None:
        """Initialize database and run migrations."""
        logger.debug(f"Initializing database at {self.config.db_path}")
        self._database = Database(self.config.db_path)

    def _init_repositories(self) -> None:
        logger.debug("Initializing repositories")

        db_path = self.config.db_path
        self._repos.game = GameRepository(db_path)
        self._repos.statistics = PlayerStatisticsRepository(db_path)
        self._repos.audit = AuditRepository(db_path)

    def _init_services(self) -> None:
        logger.debug("Initializing services")

        settings = {**DRAW_SETTINGS, **self.config.draw_settings}

        audit = AuditService(self._repos.audit, enabled=self.config.audit_log_enabled)
        self._services["audit"] = audit

        self._services["game"] = GameService(
            game_repo=self._repos.game,
            audit_service=audit,
        )

        shuffler = BalancedShuffler(
            strength_weight=settings["strength_weight"],
            position_weight=settings["position_weight"],
            teammate_weight=settings["teammate_weight"],
            strength_jitter=settings["strength_jitter"],
            cost_jitter=settings["cost_jitter"],
            rng=self.config.rng if self.config.rng is not None else random.Random(),
        )
        self._services["draw_history"] = DrawHistoryService(
            game_repo=self._repos.game,
            stats_repo=self._repos.statistics,
        )
        self._services["draw"] = DrawService(
            game_repo=self._repos.game,
            history_service=self._services["draw_history"],
            shuffler=shuffler,
            audit_service=audit,
            recent_games_window=settings["recent_games_window"],
        )

        self._services["statistics"] = StatisticsService(
            stats_repo=self._repos.statistics,
            leaderboard_limit=self.config.leaderboard_limit,
        )

    # =========================================================================
    # Service accessors
    # =========================================================================

    @property
    def game_repo(self) -> GameRepository:
        return self._repos.game

    @property
    def statistics_repo(self) -> PlayerStatisticsRepository:
        return self._repos.statistics

    @property
    def audit_repo(self) -> AuditRepository:
        return self._repos.audit

    @property
    def game_service(self) -> "GameService | None":
        return self._services.get("game")

    @property
    def draw_service(self) -> "DrawService | None":
        return self._services.get("draw")

    @property
    def draw_history_service(self) -> "DrawHistoryService | None":
        return self._services.get("draw_history")

    @property
    def statistics_service(self) -> "StatisticsService | None":
        return self._services.get("statistics")

    @property
    def audit_service(self) -> "AuditService | None":
        return self._services.get("audit")
