"""
Draw domain models: candidates, recent-game history and draw results.
"""

from dataclasses import dataclass, field

from domain.models.player import Player


@dataclass(frozen=True)
class Candidate:
    """
    Ephemeral per-draw record for one confirmed player.

    Created fresh on every draw; never persisted.
    """

    player: Player
    identity_key: str
    strength: float
    position: str | None = None


@dataclass(frozen=True)
class RecentDrawnGame:
    """Identity keys placed on each side of a past game whose teams were drawn."""

    team1: tuple[str, ...] = ()
    team2: tuple[str, ...] = ()
    game_id: int | None = None


@dataclass(frozen=True)
class DrawShortfall:
    """Describes why a draw could not start."""

    required: int
    confirmed: int

    @property
    def missing(self) -> int:
        return max(0, self.required - self.confirmed)


@dataclass
class DrawResult:
    """
    Output of one draw.

    team1/team2 hold exactly players_per_team players each. Confirmed players
    beyond double capacity end up in excluded.
    """

    team1: list[Player]
    team2: list[Player]
    excluded: list[Player] = field(default_factory=list)
    team1_strength: float = 0.0
    team2_strength: float = 0.0
    # Names of history lookups that failed and were replaced by empty data
    degraded_sources: list[str] = field(default_factory=list)

    @property
    def strength_diff(self) -> float:
        return abs(self.team1_strength - self.team2_strength)

    @property
    def is_degraded(self) -> bool:
        return bool(self.degraded_sources)

    def team_ids(self) -> tuple[list[int], list[int]]:
        """Player ids per team, in assignment order."""
        return [p.id for p in self.team1], [p.id for p in self.team2]
