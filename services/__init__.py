"""
Application services layer.

Services orchestrate business operations using repositories and domain services.
DrawService is imported from services.draw_service directly: it depends on the
shuffler module, which itself uses services.result.
"""

from services.audit_service import AuditService
from services.draw_history_service import DrawHistoryService
from services.game_service import GameService
from services.statistics_service import StatisticsService

# Result type for consistent error handling
from services.result import Result

# Service interfaces (ABCs)
from services.interfaces import IDrawService, IGameService, IStatisticsService

__all__ = [
    # Concrete services
    "AuditService",
    "DrawHistoryService",
    "GameService",
    "StatisticsService",
    # Result type
    "Result",
    # Interfaces
    "IDrawService",
    "IGameService",
    "IStatisticsService",
]
