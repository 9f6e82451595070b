"""
Player domain model.
"""

from dataclasses import dataclass

from config import STATUS_CONFIRMED


def normalize_name(name: str | None) -> str:
    """
    Normalize a display name for identity matching.

    Trims surrounding whitespace and lowercases. Portuguese has no
    locale-specific case mappings beyond the Unicode defaults, so plain
    str.lower() matches the pt-BR behaviour (unlike casefold(), which would
    also rewrite characters such as the German sharp s).
    """
    return (name or "").strip().lower()


def identity_key(name: str | None, whatsapp: str | None = None) -> str:
    """
    Derive the de-duplication key for a player.

    The contact wins when present and non-empty; otherwise the normalized
    name is used. Two different people with the same name and no contact
    collapse into one identity.
    """
    if whatsapp and whatsapp.strip():
        return whatsapp.strip()
    return normalize_name(name)


@dataclass
class Player:
    """
    A player signed up for one game.

    This is a pure domain model with no infrastructure dependencies.
    """

    id: int | None
    name: str
    whatsapp: str | None = None
    preferred_position: str | None = None  # "Zagueiro", "Meio-Campo" or "Atacante"
    status: str = STATUS_CONFIRMED
    team_number: int | None = None  # 1, 2 or None when not drawn
    goals: int = 0
    assists: int = 0
    game_id: int | None = None

    @property
    def identity_key(self) -> str:
        """Contact if present, else normalized name."""
        return identity_key(self.name, self.whatsapp)

    def is_confirmed(self) -> bool:
        return self.status == STATUS_CONFIRMED

    def __str__(self) -> str:
        pos = self.preferred_position or "sem posição"
        return f"{self.name} ({pos}, {self.status})"


@dataclass(frozen=True)
class PlayerAggregateStats:
    """
    Lifetime counters for one identity.

    Read-only input to the draw; updated only when a game is finished.
    """

    wins: int = 0
    losses: int = 0
    draws: int = 0
    total_games: int = 0
    total_goals: int = 0
    total_assists: int = 0

    @classmethod
    def zero(cls) -> "PlayerAggregateStats":
        """Stats for a player with no history."""
        return cls()

    @classmethod
    def from_row(cls, row) -> "PlayerAggregateStats":
        """Build from a mapping, treating missing or NULL counters as 0."""
        keys = row.keys()

        def _get(column: str) -> int:
            if column not in keys:
                return 0
            return row[column] or 0

        return cls(
            wins=_get("wins"),
            losses=_get("losses"),
            draws=_get("draws"),
            total_games=_get("total_games"),
            total_goals=_get("total_goals"),
            total_assists=_get("total_assists"),
        )

    def get_win_rate(self) -> float | None:
        """Win rate as a percentage, or None if no games played."""
        if self.total_games == 0:
            return None
        return (self.wins / self.total_games) * 100


@dataclass(frozen=True)
class PlayerGameResult:
    """One player's contribution to the aggregates when a game is finished."""

    name: str
    whatsapp: str | None
    goals: int = 0
    assists: int = 0
    won: bool = False
    lost: bool = False
    drew: bool = False
