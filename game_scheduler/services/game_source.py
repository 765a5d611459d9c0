"""
Game collection for a run: either the predefined test game, or the fetched
schedule narrowed by team selection and (optionally) upcoming-only mode.
"""
from __future__ import annotations

import logging
from datetime import datetime

import httpx

from game_scheduler.schemas import Game, RunConfig, TeamInfo
from game_scheduler.services.game_filter import filter_games_for_teams, filter_upcoming_games
from game_scheduler.services.schedule_client import fetch_games_for_date
from game_scheduler.teams import DEFAULT_TEAM_ID
from game_scheduler.utils.timezone import format_rfc3339, utc_now


logger = logging.getLogger(__name__)

TEST_GAME_ID = 2024030411
SHOOTOUT_TEST_GAME_ID = 2024030412


def create_test_game(shootout: bool = False, now: datetime | None = None) -> Game:
    """Predefined DAL @ BOS game starting now, used in test mode."""
    started = now or utc_now()
    return Game(
        id=SHOOTOUT_TEST_GAME_ID if shootout else TEST_GAME_ID,
        game_date=started.date().isoformat(),
        start_time_utc=format_rfc3339(started),
        away_team=TeamInfo(
            id=DEFAULT_TEAM_ID,
            common_name={"default": "Stars"},
            place_name={"default": "Dallas"},
            place_name_with_preposition={"default": "Dallas"},
            abbrev="DAL",
        ),
        home_team=TeamInfo(
            id=1,
            common_name={"default": "Bruins"},
            place_name={"default": "Boston"},
            place_name_with_preposition={"default": "Boston"},
            abbrev="BOS",
        ),
    )


def collect_games(
    config: RunConfig,
    *,
    client: httpx.Client | None = None,
    now: datetime | None = None,
) -> list[Game]:
    """
    Build the filtered game list for a run.

    Raises:
        ScheduleFetchError: If the schedule cannot be fetched
    """
    if config.test_mode:
        logger.info("Running in test mode with predefined game data")
        return [create_test_game(shootout=config.shootout, now=now)]

    fetched = fetch_games_for_date(
        config.date,
        base_url=config.nhl_api_base_url,
        timeout=config.http_timeout_sec,
        client=client,
    )

    games = list(filter_games_for_teams(fetched, config.teams))

    if config.today:
        games = filter_upcoming_games(games, now=now)

    return games
