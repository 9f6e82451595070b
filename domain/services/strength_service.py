"""
Strength scoring domain service.

Turns a player's lifetime aggregate into a scalar used to order and balance
the draw.
"""

import random
from collections.abc import Iterable, Mapping
from typing import Protocol

from config import DRAW_SETTINGS, STRENGTH_WEIGHTS
from domain.models.draw import Candidate
from domain.models.player import Player, PlayerAggregateStats


class RandomSource(Protocol):
    """Anything with a random() returning a float in [0, 1)."""

    def random(self) -> float: ...


class StrengthScorer:
    """
    Pure domain service computing draw strength.

    strength = wins*2 + goals*1 + assists*0.5 + draws*0.5 - losses*0.5 + jitter

    The jitter is uniform in [0, strength_jitter) and drawn fresh per
    candidate, so tied pools do not always split the same way.
    """

    def __init__(
        self,
        weights: Mapping[str, float] | None = None,
        strength_jitter: float | None = None,
        rng: RandomSource | None = None,
    ):
        """
        Initialize the scorer.

        Args:
            weights: Per-counter multipliers (wins, goals, assists, draws, losses)
            strength_jitter: Exclusive upper bound of the tie-break jitter (default 0.1)
            rng: Random source; pass one returning 0 to make scores reproducible
        """
        self.weights = dict(STRENGTH_WEIGHTS)
        if weights:
            self.weights.update(weights)
        self.strength_jitter = (
            strength_jitter if strength_jitter is not None else DRAW_SETTINGS["strength_jitter"]
        )
        self.rng = rng if rng is not None else random.Random()

    def calculate_base_strength(self, stats: PlayerAggregateStats | None) -> float:
        """Strength without jitter; missing stats count as all zeros."""
        stats = stats or PlayerAggregateStats.zero()
        w = self.weights
        return (
            stats.wins * w["wins"]
            + stats.total_goals * w["goals"]
            + stats.total_assists * w["assists"]
            + stats.draws * w["draws"]
            + stats.losses * w["losses"]
        )

    def calculate_strength(self, stats: PlayerAggregateStats | None) -> float:
        """Base strength plus a fresh jitter sample."""
        return self.calculate_base_strength(stats) + self.rng.random() * self.strength_jitter

    def score_player(
        self, player: Player, stats_by_key: Mapping[str, PlayerAggregateStats]
    ) -> Candidate:
        """Build the draw candidate for one player."""
        key = player.identity_key
        return Candidate(
            player=player,
            identity_key=key,
            strength=self.calculate_strength(stats_by_key.get(key)),
            position=player.preferred_position or None,
        )

    def build_candidates(
        self,
        players: Iterable[Player],
        stats_by_key: Mapping[str, PlayerAggregateStats] | None = None,
    ) -> list[Candidate]:
        """
        Score players and sort them strongest first.

        The sort is stable: exact ties keep the input order.
        """
        stats_by_key = stats_by_key or {}
        candidates = [self.score_player(p, stats_by_key) for p in players]
        return sorted(candidates, key=lambda c: c.strength, reverse=True)
