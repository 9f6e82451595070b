"""
Team balancing domain service.

Handles placement cost calculations for the greedy draw.
"""

from collections.abc import Iterable

from config import DRAW_SETTINGS, POSITIONS
from domain.models.draw import Candidate
from domain.models.team import Team
from domain.services.pairing_history_service import PairCount


class TeamBalancingService:
    """
    Pure domain service for team balancing logic.

    Responsibilities:
    - Strength difference after a hypothetical placement
    - Position imbalance after a hypothetical placement
    - Teammate repetition penalty
    - Weighted placement cost (lower is better)
    """

    def __init__(
        self,
        strength_weight: float | None = None,
        position_weight: float | None = None,
        teammate_weight: float | None = None,
        positions: Iterable[str] | None = None,
    ):
        """
        Initialize team balancing service.

        Args:
            strength_weight: Weight of the strength difference term (default 1.0)
            position_weight: Weight of the position imbalance term (default 1.3)
            teammate_weight: Weight of the repeated-teammate term (default 1.0)
            positions: Position vocabulary counted for balance
        """
        self.strength_weight = (
            strength_weight if strength_weight is not None else DRAW_SETTINGS["strength_weight"]
        )
        self.position_weight = (
            position_weight if position_weight is not None else DRAW_SETTINGS["position_weight"]
        )
        self.teammate_weight = (
            teammate_weight if teammate_weight is not None else DRAW_SETTINGS["teammate_weight"]
        )
        self.positions = tuple(positions) if positions is not None else POSITIONS

    def calculate_strength_diff_after(self, team: Team, other: Team, candidate: Candidate) -> float:
        """|strength(team + candidate) - strength(other)|"""
        return abs(team.get_strength() + candidate.strength - other.get_strength())

    def calculate_position_imbalance_after(
        self, team: Team, other: Team, candidate: Candidate
    ) -> int:
        """
        Sum over positions of |count(team) - count(other)| with the candidate
        added to team.

        A candidate without a known position leaves the counts untouched.
        """
        team_counts = team.get_position_counts(self.positions)
        other_counts = other.get_position_counts(self.positions)
        if candidate.position in team_counts:
            team_counts[candidate.position] += 1
        return sum(abs(team_counts[pos] - other_counts[pos]) for pos in self.positions)

    def calculate_teammate_penalty(
        self, team: Team, candidate: Candidate, pair_counts: PairCount
    ) -> int:
        """Sum of recent teammate counts between the candidate and current members."""
        return sum(
            pair_counts.get(member.identity_key, candidate.identity_key) for member in team.members
        )

    def calculate_placement_cost(
        self,
        team: Team,
        other: Team,
        candidate: Candidate,
        pair_counts: PairCount,
        jitter: float = 0.0,
    ) -> float:
        """
        Calculate the cost of placing a candidate on team (lower is better).

        Combines strength difference, position imbalance and teammate
        repetition, plus a caller-supplied tie-break jitter.
        """
        strength_diff = self.calculate_strength_diff_after(team, other, candidate)
        position_imbalance = self.calculate_position_imbalance_after(team, other, candidate)
        teammate_penalty = self.calculate_teammate_penalty(team, candidate, pair_counts)

        return (
            self.strength_weight * strength_diff
            + self.position_weight * position_imbalance
            + self.teammate_weight * teammate_penalty
            + jitter
        )

    def get_team_stats(self, team: Team) -> dict:
        """
        Get detailed stats for a team.

        Args:
            team: Team to analyze

        Returns:
            Dictionary with team statistics
        """
        return {
            "size": len(team),
            "strength": team.get_strength(),
            "position_distribution": team.get_position_counts(self.positions),
        }
