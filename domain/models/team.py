"""
Team domain model.
"""

from collections.abc import Iterable

from domain.models.draw import Candidate
from domain.models.player import Player


class Team:
    """
    A capacity-bounded roster built during a draw.

    This is a pure domain model with no infrastructure dependencies.
    """

    def __init__(self, number: int, capacity: int, members: Iterable[Candidate] | None = None):
        """
        Initialize a team.

        Args:
            number: Team number (1 or 2)
            capacity: Maximum number of members (players per team)
            members: Optional initial members
        """
        if capacity <= 0:
            raise ValueError(f"Team capacity must be positive, got {capacity}")
        self.number = number
        self.capacity = capacity
        self.members: list[Candidate] = []
        for candidate in members or []:
            self.add(candidate)

    def add(self, candidate: Candidate) -> None:
        """Append a candidate, raising ValueError when the team is full."""
        if self.is_full():
            raise ValueError(f"Team {self.number} is full ({self.capacity} players)")
        self.members.append(candidate)

    def is_full(self) -> bool:
        return len(self.members) >= self.capacity

    def has_room(self) -> bool:
        return not self.is_full()

    def get_strength(self) -> float:
        """Sum of member strengths."""
        return sum(c.strength for c in self.members)

    def get_position_counts(self, positions: Iterable[str]) -> dict[str, int]:
        """
        Count members per position.

        Members without a position, or with one outside the given vocabulary,
        are not counted.
        """
        counts = dict.fromkeys(positions, 0)
        for candidate in self.members:
            if candidate.position in counts:
                counts[candidate.position] += 1
        return counts

    @property
    def players(self) -> list[Player]:
        return [c.player for c in self.members]

    @property
    def identity_keys(self) -> list[str]:
        return [c.identity_key for c in self.members]

    def __len__(self) -> int:
        return len(self.members)

    def __str__(self) -> str:
        player_names = ", ".join(c.player.name for c in self.members)
        return f"Time {self.number}: {player_names}"
