"""
Abstract repository interfaces for data access.

These interfaces define the contracts implemented by concrete repositories.
"""

from abc import ABC, abstractmethod


class IGameRepository(ABC):
    @abstractmethod
    def create_game(
        self,
        date: str,
        players_per_team: int,
        time: str | None = None,
        location: str | None = None,
        ball_responsible: str | None = None,
        vest_responsible: str | None = None,
    ) -> int: ...

    @abstractmethod
    def get_game(self, game_id: int) -> dict | None: ...

    @abstractmethod
    def add_player(
        self,
        game_id: int,
        name: str,
        whatsapp: str | None = None,
        preferred_position: str | None = None,
        status: str = "confirmed",
    ) -> int: ...

    @abstractmethod
    def remove_player(self, player_id: int) -> bool: ...

    @abstractmethod
    def get_player(self, player_id: int): ...

    @abstractmethod
    def get_players(self, game_id: int): ...

    @abstractmethod
    def get_confirmed_players(self, game_id: int): ...

    @abstractmethod
    def update_player_status(self, player_id: int, status: str) -> bool: ...

    @abstractmethod
    def save_team_assignment(self, game_id: int, team1_ids: list[int], team2_ids: list[int]) -> None: ...

    @abstractmethod
    def get_recent_drawn_games(self, limit: int = 12):
        """Most recent games with drawn teams, newest first, as RecentDrawnGame."""
        ...

    @abstractmethod
    def finish_game(
        self,
        game_id: int,
        final_score_team1: int,
        final_score_team2: int,
        player_scoring: dict[int, tuple[int, int]],
        results: list | None = None,
    ) -> None:
        """Finish the game and apply the PlayerGameResult list in one transaction."""
        ...


class IPlayerStatisticsRepository(ABC):
    @abstractmethod
    def get_by_whatsapps(self, whatsapps: list[str]) -> dict:
        """Aggregate stats keyed by whatsapp."""
        ...

    @abstractmethod
    def get_by_names(self, names: list[str]) -> dict:
        """Aggregate stats keyed by normalized name."""
        ...

    @abstractmethod
    def apply_game_result(
        self,
        name: str,
        whatsapp: str | None,
        goals: int,
        assists: int,
        won: bool,
        lost: bool,
        drew: bool,
    ) -> None: ...

    @abstractmethod
    def get_leaderboard(
        self,
        search: str | None = None,
        min_goals: int | None = None,
        min_assists: int | None = None,
        sort_by: str = "total_goals",
        descending: bool = True,
        limit: int = 50,
    ) -> list[dict]: ...


class IAuditRepository(ABC):
    @abstractmethod
    def log_event(
        self,
        event: str,
        entity_type: str,
        entity_id: int | str | None,
        details: dict | None = None,
    ) -> None: ...

    @abstractmethod
    def get_events(self, entity_type: str | None = None, entity_id: int | str | None = None) -> list[dict]: ...
