"""
Tests for PlayerStatisticsRepository.
"""

import pytest

from domain.models.player import PlayerAggregateStats


def _apply(repo, name, whatsapp=None, goals=0, assists=0, result="win"):
    repo.apply_game_result(
        name,
        whatsapp,
        goals,
        assists,
        won=result == "win",
        lost=result == "loss",
        drew=result == "draw",
    )


class TestApplyGameResult:
    """Upserting lifetime aggregates."""

    def test_by_whatsapp_accumulates(self, statistics_repository):
        """Results for the same contact add up in one row."""
        _apply(statistics_repository, "Ana", "11911110000", goals=2, assists=1, result="win")
        _apply(statistics_repository, "Ana Paula", "11911110000", goals=1, result="draw")

        stats = statistics_repository.get_by_whatsapps(["11911110000"])
        assert stats == {
            "11911110000": PlayerAggregateStats(
                wins=1, losses=0, draws=1, total_games=2, total_goals=3, total_assists=1
            )
        }
        row = statistics_repository.get_by_identity("whatever", "11911110000")
        assert row["name"] == "Ana Paula"

    def test_by_name_is_case_insensitive(self, statistics_repository):
        """Contact-less players are matched by trimmed, lowercased name."""
        _apply(statistics_repository, "João", goals=1, result="loss")
        _apply(statistics_repository, "JOÃO ", goals=2, result="win")

        stats = statistics_repository.get_by_names(["joão"])
        assert stats["joão"].total_games == 2
        assert stats["joão"].total_goals == 3
        assert stats["joão"].wins == 1
        assert stats["joão"].losses == 1

    def test_negative_scoring_counts_as_zero(self, statistics_repository):
        """Negative goals or assists are clamped to 0."""
        _apply(statistics_repository, "Ana", "11911110000", goals=-3, assists=-1)
        stats = statistics_repository.get_by_whatsapps(["11911110000"])["11911110000"]
        assert stats.total_goals == 0
        assert stats.total_assists == 0
        assert stats.total_games == 1

    def test_contact_and_name_rows_are_separate(self, statistics_repository):
        """A contact row is never keyed by name in get_by_whatsapps."""
        _apply(statistics_repository, "Ana", "11911110000")
        _apply(statistics_repository, "Bia")
        assert set(statistics_repository.get_by_whatsapps(["11911110000", "000"])) == {"11911110000"}
        assert set(statistics_repository.get_by_names(["Bia", "Nobody"])) == {"bia"}


class TestLookups:
    """Batch lookups."""

    def test_empty_inputs(self, statistics_repository):
        """No keys means no query and no results."""
        assert statistics_repository.get_by_whatsapps([]) == {}
        assert statistics_repository.get_by_names(["", "  "]) == {}

    def test_get_by_identity_missing(self, statistics_repository):
        """Unknown identities return None."""
        assert statistics_repository.get_by_identity("Ninguém") is None


class TestLeaderboard:
    """Ranked listing with filters."""

    @pytest.fixture
    def populated(self, statistics_repository):
        _apply(statistics_repository, "Ana", "11911110000", goals=5, assists=1, result="win")
        _apply(statistics_repository, "Bia", "11922220000", goals=5, assists=3, result="loss")
        _apply(statistics_repository, "Caio", goals=2, assists=4, result="win")
        _apply(statistics_repository, "Duda", goals=0, assists=0, result="draw")
        return statistics_repository

    def test_default_sort_by_goals_with_tie_breakers(self, populated):
        """Ana and Bia tie on goals; Ana has more wins."""
        rows = populated.get_leaderboard()
        assert [r["name"] for r in rows] == ["Ana", "Bia", "Caio", "Duda"]

    def test_sort_by_assists(self, populated):
        """Any allowed column can be the primary sort."""
        rows = populated.get_leaderboard(sort_by="total_assists")
        assert [r["name"] for r in rows] == ["Caio", "Bia", "Ana", "Duda"]

    def test_ascending(self, populated):
        """descending=False flips the primary sort only."""
        rows = populated.get_leaderboard(sort_by="total_goals", descending=False)
        assert [r["name"] for r in rows] == ["Duda", "Caio", "Ana", "Bia"]

    def test_sort_by_name(self, populated):
        """Sorting by name ascending is alphabetical."""
        rows = populated.get_leaderboard(sort_by="name", descending=False)
        assert [r["name"] for r in rows] == ["Ana", "Bia", "Caio", "Duda"]

    def test_search_is_substring(self, populated):
        """Search matches part of the name, ignoring case."""
        rows = populated.get_leaderboard(search="a")
        assert {r["name"] for r in rows} == {"Ana", "Bia", "Caio", "Duda"}
        rows = populated.get_leaderboard(search="CAI")
        assert [r["name"] for r in rows] == ["Caio"]

    def test_search_ignores_case_of_accented_letters(self, statistics_repository):
        """Uppercase accented names are found by a lowercase search and vice versa."""
        _apply(statistics_repository, "JOÃO", goals=1)
        _apply(statistics_repository, "Ângela", goals=2)

        assert [r["name"] for r in statistics_repository.get_leaderboard(search="joão")] == ["JOÃO"]
        assert [r["name"] for r in statistics_repository.get_leaderboard(search="ÂNG")] == ["Ângela"]

    def test_min_filters(self, populated):
        """min_goals and min_assists are inclusive lower bounds."""
        rows = populated.get_leaderboard(min_goals=2, min_assists=3)
        assert [r["name"] for r in rows] == ["Bia", "Caio"]

    def test_limit(self, populated):
        """At most limit rows are returned."""
        assert len(populated.get_leaderboard(limit=2)) == 2

    def test_invalid_sort_column(self, populated):
        """Only whitelisted columns can be used for sorting."""
        with pytest.raises(ValueError):
            populated.get_leaderboard(sort_by="wins; DROP TABLE player_statistics")
