"""
Game filtering

Narrows the raw schedule by team membership and by "not started yet".
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Sequence

from game_scheduler.schemas import Game
from game_scheduler.utils.timezone import DateFormatError, parse_rfc3339, utc_now


logger = logging.getLogger(__name__)


def filter_games_for_teams(games: Sequence[Game], team_ids: Iterable[int]) -> Sequence[Game]:
    """
    Keep games involving any of the given teams.

    An empty team list means all teams, and the input is returned unchanged.
    """
    wanted = set(team_ids)
    if not wanted:
        return games

    filtered = [
        game for game in games
        if game.home_team.id in wanted or game.away_team.id in wanted
    ]
    logger.info("Filtered to %s games involving specified teams", len(filtered))
    return filtered


def filter_upcoming_games(games: Sequence[Game], now: datetime | None = None) -> list[Game]:
    """
    Keep games whose start time is strictly after ``now``.

    Games with an unparsable start time are dropped with a warning.
    """
    cutoff = now or utc_now()
    upcoming: list[Game] = []

    for game in games:
        try:
            start_time = parse_rfc3339(game.start_time_utc)
        except DateFormatError as exc:
            logger.warning("Could not parse start time for game %s: %s", game.id, exc)
            continue

        if start_time > cutoff:
            upcoming.append(game)

    logger.info("Filtered to %s upcoming games", len(upcoming))
    return upcoming
