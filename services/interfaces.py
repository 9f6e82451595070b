"""
Service layer interfaces (ABCs).

These abstract base classes define the contracts for the services of the
racha organizer. Services inherit from their interface so callers and tests
can depend on the contract instead of the concrete class.

Usage:
    class MyService(IMyService):
        def my_method(self, param: str) -> Result[dict]:
            ...
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.models.draw import DrawResult
    from domain.models.player import Player, PlayerAggregateStats
    from services.result import Result


class IGameService(ABC):
    """Interface for game creation, sign-ups and results."""

    @abstractmethod
    def create_game(
        self,
        date: str,
        players_per_team: int = ...,
        time: str | None = None,
        location: str | None = None,
        ball_responsible: str | None = None,
        vest_responsible: str | None = None,
    ) -> "Result[int]":
        """Create a game with a team size in the allowed range."""
        ...

    @abstractmethod
    def get_game(self, game_id: int) -> "Result[dict]":
        """Game with its sign-ups."""
        ...

    @abstractmethod
    def add_player(
        self,
        game_id: int,
        name: str,
        whatsapp: str | None = None,
        preferred_position: str | None = None,
        status: str = "confirmed",
    ) -> "Result[int]":
        """Sign a player up for an open game."""
        ...

    @abstractmethod
    def set_player_status(self, player_id: int, status: str) -> "Result[Player]":
        """Change RSVP status, clearing the player's team."""
        ...

    @abstractmethod
    def remove_player(self, player_id: int) -> "Result[None]":
        """Delete a sign-up from an open game."""
        ...

    @abstractmethod
    def finish_game(
        self,
        game_id: int,
        final_score_team1: int,
        final_score_team2: int,
        player_stats: dict[int, tuple[int, int]] | None = None,
    ) -> "Result[dict]":
        """Record the final score and update lifetime statistics."""
        ...


class IDrawService(ABC):
    """Interface for drawing teams."""

    @abstractmethod
    def draw_teams(self, game_id: int, *, overwrite: bool = False) -> "Result[DrawResult]":
        """Draw and persist balanced teams for a game."""
        ...

    @abstractmethod
    def persist_draw(self, game_id: int, draw: "DrawResult", redraw: bool = False) -> "Result[DrawResult]":
        """Save an already computed draw."""
        ...


class IStatisticsService(ABC):
    """Interface for lifetime statistics."""

    @abstractmethod
    def get_leaderboard(
        self,
        search: str | None = None,
        min_goals: int | None = None,
        min_assists: int | None = None,
        sort_by: str = "total_goals",
        descending: bool = True,
    ) -> "Result[list[dict]]":
        """Ranked, filtered statistics."""
        ...

    @abstractmethod
    def get_player_stats(self, player: "Player") -> "PlayerAggregateStats":
        """Aggregate stats of one identity."""
        ...
