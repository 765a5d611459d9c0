"""
Structured logging helpers for consistent log formatting.

Provides utilities for structured, clean logging without excessive decorative separators.
"""
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from game_scheduler.schemas import Game, RunConfig


def log_section_start(logger: logging.Logger, section_name: str) -> None:
    """
    Log the start of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being started
    """
    logger.info(f"Starting: {section_name}")


def log_section_end(logger: logging.Logger, section_name: str) -> None:
    """
    Log the end of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being ended
    """
    logger.info(f"Completed: {section_name}")


def log_run_start(logger: logging.Logger) -> None:
    """Log scheduling run start."""
    logger.info(f"Scheduling run started at {datetime.now(timezone.utc).isoformat()}")


def log_run_end(logger: logging.Logger, games_processed: int) -> None:
    """Log scheduling run end with the number of games handled."""
    logger.info(f"Successfully processed {games_processed} games")


def log_run_configuration(logger: logging.Logger, config: "RunConfig") -> None:
    """
    Log the effective configuration of a run.

    Args:
        logger: Logger instance
        config: Resolved run configuration
    """
    logger.info(
        "Configuration: Date=%s, Teams=%s, TestMode=%s, AllTeams=%s, Today=%s, Production=%s",
        config.date,
        config.teams,
        config.test_mode,
        config.all_teams,
        config.today,
        config.production,
    )
    logger.info(
        "Queue: projects/%s/locations/%s/queues/%s, Target: %s",
        config.project_id,
        config.location,
        config.queue_name,
        "local" if config.local_mode else config.host_url,
    )


def log_game_processing(logger: logging.Logger, idx: int, total: int, game: "Game") -> None:
    """
    Log the per-game processing line.

    Args:
        logger: Logger instance
        idx: Current game index (1-based)
        total: Total number of games
        game: Game being processed
    """
    logger.info(
        f"Processing game {idx}/{total} {game.id}: "
        f"{game.away_team.abbrev} @ {game.home_team.abbrev} at {game.start_time_utc}"
    )
