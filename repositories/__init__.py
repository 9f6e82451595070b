"""
Repository layer for data access abstraction.
"""

from repositories.audit_repository import AuditRepository
from repositories.base_repository import BaseRepository
from repositories.game_repository import GameRepository
from repositories.interfaces import (
    IAuditRepository,
    IGameRepository,
    IPlayerStatisticsRepository,
)
from repositories.player_statistics_repository import PlayerStatisticsRepository

__all__ = [
    "BaseRepository",
    "GameRepository",
    "PlayerStatisticsRepository",
    "AuditRepository",
    "IGameRepository",
    "IPlayerStatisticsRepository",
    "IAuditRepository",
]
