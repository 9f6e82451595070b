"""
Domain models - pure data structures representing business entities.
"""

from domain.models.draw import Candidate, DrawResult, DrawShortfall, RecentDrawnGame
from domain.models.player import Player, PlayerAggregateStats, PlayerGameResult, identity_key, normalize_name
from domain.models.team import Team

__all__ = [
    "Candidate",
    "DrawResult",
    "DrawShortfall",
    "Player",
    "PlayerAggregateStats",
    "PlayerGameResult",
    "RecentDrawnGame",
    "Team",
    "identity_key",
    "normalize_name",
]
