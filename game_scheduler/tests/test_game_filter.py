"""Tests for team and upcoming-game filtering."""

import logging
from datetime import datetime, timezone

from game_scheduler.services.game_filter import filter_games_for_teams, filter_upcoming_games

from helpers import make_game


NOW = datetime(2025, 1, 15, 18, 0, tzinfo=timezone.utc)


def _games():
    return [
        make_game(1, away="SEA", home="LAK"),
        make_game(2, away="DAL", home="BOS"),
        make_game(3, away="CHI", home="NYR"),
        make_game(4, away="TOR", home="DAL"),
    ]


class TestFilterGamesForTeams:
    def test_empty_team_list_returns_input_unchanged(self):
        games = _games()
        assert filter_games_for_teams(games, []) is games

    def test_keeps_games_with_either_home_or_away_team(self):
        result = filter_games_for_teams(_games(), [25])
        assert [game.id for game in result] == [2, 4]

    def test_membership_ignores_team_order_and_duplicates(self):
        games = _games()
        assert filter_games_for_teams(games, [55, 16]) == filter_games_for_teams(games, [16, 55, 16])

    def test_filter_is_idempotent(self):
        once = filter_games_for_teams(_games(), [25, 3])
        twice = filter_games_for_teams(once, [25, 3])
        assert twice == once
        assert [game.id for game in once] == [2, 3, 4]

    def test_no_match_returns_empty(self):
        assert filter_games_for_teams(_games(), [999]) == []


class TestFilterUpcomingGames:
    def test_keeps_only_games_strictly_after_now(self):
        games = [
            make_game(1, start="2025-01-15T17:00:00Z"),
            make_game(2, start="2025-01-15T18:00:00Z"),
            make_game(3, start="2025-01-15T18:00:01Z"),
            make_game(4, start="2025-01-16T00:30:00Z"),
        ]
        result = filter_upcoming_games(games, now=NOW)
        assert [game.id for game in result] == [3, 4]

    def test_offsets_are_compared_as_absolute_instants(self):
        # 13:30 at -05:00 is 18:30 UTC
        games = [make_game(1, start="2025-01-15T13:30:00-05:00")]
        assert filter_upcoming_games(games, now=NOW) == games

    def test_malformed_start_is_dropped_with_warning(self, caplog):
        games = [
            make_game(1, start="not-a-time"),
            make_game(2, start="2025-01-15"),
            make_game(3, start="2025-01-15T20:00:00"),
            make_game(4, start="2025-01-15T20:00:00Z"),
        ]
        with caplog.at_level(logging.WARNING):
            result = filter_upcoming_games(games, now=NOW)

        assert [game.id for game in result] == [4]
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 3
        assert "Could not parse start time for game 1" in warnings[0].getMessage()

    def test_preserves_input_order(self):
        games = [
            make_game(1, start="2025-01-16T03:00:00Z"),
            make_game(2, start="2025-01-15T23:00:00Z"),
        ]
        assert [game.id for game in filter_upcoming_games(games, now=NOW)] == [1, 2]
