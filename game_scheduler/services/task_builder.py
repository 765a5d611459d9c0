"""
Task Builder Service

Turns one game into a dispatch task: target URL, JSON payload and the time
the task should fire. Pure transform, no I/O.
"""
import logging
from datetime import timedelta

from game_scheduler.schemas import Game, RunConfig, TaskGame, TaskPayload
from game_scheduler.services.dispatch_types import DispatchTask
from game_scheduler.utils.timezone import DateFormatError, format_rfc3339, parse_rfc3339


logger = logging.getLogger(__name__)

# Task fires this long before puck drop
TASK_LEAD_TIME = timedelta(minutes=5)
# Upper bound for how long the tracker follows a game
GAME_DURATION = timedelta(hours=4)


class UnparseableStartTime(DateFormatError):
    """Raised when a game's start time is not an RFC 3339 timestamp"""

    def __init__(self, game_id: str, start_time: str):
        self.game_id = game_id
        self.start_time = start_time
        super().__init__(f"failed to parse start time {start_time!r} for game {game_id}")


def select_target_url(config: RunConfig) -> str:
    """Local default endpoint in local mode, otherwise the caller's host URL."""
    if config.local_mode:
        return config.local_target_url
    return config.host_url


def build_task_payload(game: Game, execution_end: str | None, should_notify: bool) -> TaskPayload:
    """Build the payload forwarded to the game tracker, keeping the original start string."""
    return TaskPayload(
        game=TaskGame(
            id=str(game.id),
            game_date=game.game_date,
            start_time_utc=game.start_time_utc,
            home_team=game.home_team,
            away_team=game.away_team,
        ),
        execution_end=execution_end,
        should_notify=should_notify,
    )


def build_dispatch_task(game: Game, config: RunConfig) -> DispatchTask:
    """
    Build the dispatch task for a single game.

    Args:
        game: Game to schedule
        config: Run configuration (target selection and test mode)

    Returns:
        DispatchTask scheduled ``TASK_LEAD_TIME`` before the game starts

    Raises:
        UnparseableStartTime: If the game's start time cannot be parsed
    """
    try:
        start_time = parse_rfc3339(game.start_time_utc)
    except DateFormatError as exc:
        raise UnparseableStartTime(str(game.id), game.start_time_utc) from exc

    schedule_time = start_time - TASK_LEAD_TIME
    execution_end = start_time + GAME_DURATION

    payload = build_task_payload(
        game,
        execution_end=format_rfc3339(execution_end),
        should_notify=not config.test_mode,
    )

    logger.info(
        "Game %s scheduled for %s (execution end %s)",
        game.id,
        format_rfc3339(schedule_time),
        format_rfc3339(execution_end),
    )

    return DispatchTask(
        game_id=str(game.id),
        target_url=select_target_url(config),
        payload=payload.to_json_bytes(),
        schedule_time=schedule_time,
        execution_end=execution_end,
        should_notify=payload.should_notify,
    )
