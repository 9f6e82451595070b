"""
Balanced team draw algorithm.
"""

import logging
import random
from collections.abc import Iterable, Mapping

from config import DRAW_SETTINGS
from domain.models.draw import Candidate, DrawResult, DrawShortfall, RecentDrawnGame
from domain.models.player import Player, PlayerAggregateStats
from domain.models.team import Team
from domain.services.pairing_history_service import PairCount, PairingHistoryService
from domain.services.strength_service import RandomSource, StrengthScorer
from domain.services.team_balancing_service import TeamBalancingService
from services import error_codes
from services.result import Result

logger = logging.getLogger("racha.shuffler")


class BalancedShuffler:
    """
    Implements the greedy two-team draw.

    Candidates are processed strongest first. While both teams have room the
    candidate goes to the team with the lower placement cost (team 1 on
    ties); once one team is full the rest is forced onto the other, and
    once both are full remaining candidates are left out.
    """

    def __init__(
        self,
        strength_weight: float | None = None,
        position_weight: float | None = None,
        teammate_weight: float | None = None,
        strength_jitter: float | None = None,
        cost_jitter: float | None = None,
        positions: Iterable[str] | None = None,
        rng: RandomSource | None = None,
    ):
        """
        Initialize the shuffler.

        Args:
            strength_weight: Weight of the strength difference (default 1.0)
            position_weight: Weight of the position imbalance (default 1.3)
            teammate_weight: Weight of repeated teammates (default 1.0)
            strength_jitter: Upper bound of per-candidate strength jitter (default 0.1)
            cost_jitter: Upper bound of per-evaluation cost jitter (default 0.05)
            positions: Position vocabulary (default Zagueiro, Meio-Campo, Atacante)
            rng: Random source shared by both jitters; inject one returning 0
                for reproducible draws
        """
        settings = DRAW_SETTINGS
        self.rng = rng if rng is not None else random.Random()
        self.cost_jitter = cost_jitter if cost_jitter is not None else settings["cost_jitter"]
        self.scorer = StrengthScorer(strength_jitter=strength_jitter, rng=self.rng)
        self.pairing_service = PairingHistoryService()
        self.balancing_service = TeamBalancingService(
            strength_weight=strength_weight,
            position_weight=position_weight,
            teammate_weight=teammate_weight,
            positions=positions,
        )

    def _jitter(self) -> float:
        return self.rng.random() * self.cost_jitter

    def assign_teams(
        self,
        candidates: list[Candidate],
        players_per_team: int,
        pair_counts: PairCount | None = None,
    ) -> tuple[Team, Team, list[Candidate]]:
        """
        Run the draw state machine over already-sorted candidates.

        Args:
            candidates: Candidates in assignment order (strongest first)
            players_per_team: Capacity of each team
            pair_counts: Recent teammate counts (empty if None)

        Returns:
            Tuple of (team1, team2, left_out_candidates)
        """
        pair_counts = pair_counts if pair_counts is not None else PairCount()
        team1 = Team(1, players_per_team)
        team2 = Team(2, players_per_team)

        for index, candidate in enumerate(candidates):
            room1 = team1.has_room()
            room2 = team2.has_room()
            if not room1 and not room2:
                return team1, team2, list(candidates[index:])
            if room1 and not room2:
                team1.add(candidate)
                continue
            if room2 and not room1:
                team2.add(candidate)
                continue

            cost1 = self.balancing_service.calculate_placement_cost(
                team1, team2, candidate, pair_counts, jitter=self._jitter()
            )
            cost2 = self.balancing_service.calculate_placement_cost(
                team2, team1, candidate, pair_counts, jitter=self._jitter()
            )
            if cost1 <= cost2:
                team1.add(candidate)
            else:
                team2.add(candidate)

        return team1, team2, []

    def draw(
        self,
        players: list[Player],
        players_per_team: int,
        stats_by_key: Mapping[str, PlayerAggregateStats] | None = None,
        recent_games: Iterable[RecentDrawnGame] | None = None,
    ) -> Result[DrawResult]:
        """
        Draw two balanced teams from the confirmed players.

        Args:
            players: Players of the game; only confirmed ones are eligible
            players_per_team: Team size
            stats_by_key: Aggregate stats by identity key (missing = no history)
            recent_games: Recent drawn games for teammate repetition

        Returns:
            Result with a DrawResult, or a failure with code
            insufficient_players carrying a DrawShortfall
        """
        if players_per_team <= 0:
            raise ValueError(f"players_per_team must be positive, got {players_per_team}")

        confirmed = [p for p in players if p.is_confirmed()]
        required = players_per_team * 2
        if len(confirmed) < required:
            shortfall = DrawShortfall(required=required, confirmed=len(confirmed))
            return Result.fail(
                f"É necessário {required} jogadores confirmados "
                f"(confirmados: {len(confirmed)}, faltam {shortfall.missing}).",
                code=error_codes.INSUFFICIENT_PLAYERS,
                value=shortfall,
            )

        candidates = self.scorer.build_candidates(confirmed, stats_by_key or {})
        pair_counts = self.pairing_service.build_pair_counts(
            (c.identity_key for c in candidates), recent_games or []
        )
        team1, team2, left_out = self.assign_teams(candidates, players_per_team, pair_counts)

        result = DrawResult(
            team1=team1.players,
            team2=team2.players,
            excluded=[c.player for c in left_out],
            team1_strength=team1.get_strength(),
            team2_strength=team2.get_strength(),
        )
        logger.info(
            f"Draw complete: {len(team1)}x{len(team2)} players, "
            f"strength {result.team1_strength:.2f} vs {result.team2_strength:.2f}, "
            f"{len(pair_counts)} repeated pairs considered, {len(left_out)} left out"
        )
        return Result.ok(result)
