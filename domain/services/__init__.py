"""
Domain services containing pure business logic.
"""

from domain.services.pairing_history_service import PairCount, PairingHistoryService, canonical_pair
from domain.services.strength_service import StrengthScorer
from domain.services.team_balancing_service import TeamBalancingService

__all__ = [
    "PairCount",
    "PairingHistoryService",
    "StrengthScorer",
    "TeamBalancingService",
    "canonical_pair",
]
