"""
Pairing history domain service.

Counts how often currently confirmed players were teammates in recent drawn
games.
"""

from collections.abc import Iterable, Iterator

from domain.models.draw import RecentDrawnGame


def canonical_pair(key1: str, key2: str) -> tuple[str, str]:
    """Return keys in canonical order (smaller first)."""
    return (key1, key2) if key1 <= key2 else (key2, key1)


class PairCount:
    """
    Symmetric teammate counter keyed by canonical pair.

    get(a, b) == get(b, a) always; unknown pairs and self-pairs are 0.
    """

    def __init__(self):
        self._counts: dict[tuple[str, str], int] = {}

    def increment(self, key1: str, key2: str, amount: int = 1) -> None:
        if key1 == key2:
            return
        pair = canonical_pair(key1, key2)
        self._counts[pair] = self._counts.get(pair, 0) + amount

    def get(self, key1: str, key2: str) -> int:
        if key1 == key2:
            return 0
        return self._counts.get(canonical_pair(key1, key2), 0)

    def items(self) -> Iterator[tuple[tuple[str, str], int]]:
        return iter(self._counts.items())

    def as_dict(self) -> dict[tuple[str, str], int]:
        return dict(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __bool__(self) -> bool:
        return bool(self._counts)


class PairingHistoryService:
    """
    Pure domain service building teammate co-occurrence counts.

    Only same-team pairs are counted; opponents in the same game are not
    teammates. Identity keys outside the confirmed set are ignored.
    """

    def build_pair_counts(
        self,
        confirmed_keys: Iterable[str],
        recent_games: Iterable[RecentDrawnGame],
    ) -> PairCount:
        """
        Count intra-team pairs over the recent-game window.

        Args:
            confirmed_keys: Identity keys of the players in the current draw
            recent_games: Past drawn games, each with identity keys per side

        Returns:
            PairCount with 0 as default for absent pairs
        """
        current = set(confirmed_keys)
        pair_counts = PairCount()

        for game in recent_games:
            for roster in (game.team1, game.team2):
                self._count_roster(self._restrict(roster, current), pair_counts)

        return pair_counts

    @staticmethod
    def _restrict(roster: Iterable[str], current: set[str]) -> list[str]:
        """Keep confirmed keys only, once each, in roster order."""
        seen: set[str] = set()
        kept = []
        for key in roster:
            if key in current and key not in seen:
                seen.add(key)
                kept.append(key)
        return kept

    @staticmethod
    def _count_roster(keys: list[str], pair_counts: PairCount) -> None:
        for i, k1 in enumerate(keys):
            for k2 in keys[i + 1 :]:
                pair_counts.increment(k1, k2)
