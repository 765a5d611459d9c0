"""
Command-line entry point

Fetches the NHL schedule, filters it, and creates one Cloud Tasks task per
game, either once or on a cron schedule.
"""
from __future__ import annotations

import argparse
import logging
from typing import Sequence

from croniter import croniter
from pydantic import ValidationError

from game_scheduler.config import ConfigurationError, settings, setup_logging
from game_scheduler.notifications import create_notification_sender
from game_scheduler.schemas import RunConfig
from game_scheduler.services.dispatch_service import dispatch_games
from game_scheduler.services.dispatch_types import DispatchOutcome
from game_scheduler.services.game_source import collect_games
from game_scheduler.services.queue_service import TransportConnectionError, connect_to_tasks_service
from game_scheduler.services.schedule_client import ScheduleFetchError
from game_scheduler.services.scheduler_service import GameTaskScheduler
from game_scheduler.teams import UnknownTeamIdentifier, resolve_team_selection
from game_scheduler.utils.logging_helpers import (
    log_run_configuration,
    log_run_end,
    log_run_start,
    log_section_end,
    log_section_start,
)
from game_scheduler.utils.timezone import today_iso


logger = logging.getLogger(__name__)

FATAL_ERRORS = (
    ConfigurationError,
    ValidationError,
    UnknownTeamIdentifier,
    ScheduleFetchError,
    TransportConnectionError,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="game-scheduler",
        description="Schedule NHL game-tracking tasks on Cloud Tasks",
    )
    parser.add_argument("--date", help="Specific date to query (YYYY-MM-DD). Defaults to today.")
    parser.add_argument(
        "--teams",
        help="Comma-separated team IDs or city codes (e.g. '25,CHI,DAL'). Defaults to Dallas Stars (25).",
    )
    parser.add_argument("--all", dest="all_teams", action="store_true",
                        help="Include all teams playing on the date")
    parser.add_argument("--today", action="store_true",
                        help="Only today's games that have not started yet (overrides --date)")
    parser.add_argument("--test", dest="test_mode", action="store_true",
                        help="Use a predefined test game and disable downstream notifications")
    parser.add_argument("--shootout", action="store_true",
                        help="Use the shootout test game ID in test mode")
    parser.add_argument("--prod", dest="production", action="store_true",
                        help="Use the production Cloud Tasks service instead of the emulator")
    parser.add_argument("--project", default=settings.gcp_project_id, help="GCP project ID")
    parser.add_argument("--location", default=settings.gcp_location, help="GCP location")
    parser.add_argument("--queue", default=settings.task_queue_name, help="Task queue name")

    destination = parser.add_mutually_exclusive_group()
    destination.add_argument("--local", dest="local_mode", action="store_true",
                             help=f"Send tasks to the local endpoint ({settings.local_target_url})")
    destination.add_argument("--host", dest="host_url", help="Custom endpoint URL to send tasks to")

    parser.add_argument("--discord-webhook", default=settings.discord_webhook_url,
                        help="Discord webhook URL (env DISCORD_WEBHOOK_URL)")
    parser.add_argument("--discord-user-id", default=settings.discord_user_id,
                        help="Discord user to mention in summaries (env DISCORD_USER_ID)")
    parser.add_argument("--redis-url", default=settings.redis_url,
                        help="Redis URL for queue-based notifications (env REDIS_URL)")
    parser.add_argument("--redis-queue", default=settings.redis_queue_name, help="Redis list name")
    parser.add_argument("--emulator", default=settings.cloud_tasks_emulator,
                        help="Cloud Tasks emulator host (env CLOUD_TASKS_EMULATOR)")
    parser.add_argument("--cron", nargs="?", const=settings.schedule_cron, default=None,
                        help=f"Keep running and schedule games on this cron expression "
                             f"(default '{settings.schedule_cron}')")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser


def resolve_run_date(date: str | None, today: bool) -> str:
    """Upcoming-only runs always use today's date."""
    if today or not date:
        return today_iso()
    return date


def build_run_config(args: argparse.Namespace) -> RunConfig:
    """
    Resolve parsed arguments into a validated RunConfig.

    Raises:
        UnknownTeamIdentifier: If a team selector token is invalid
        pydantic.ValidationError: If the destination or date is invalid
    """
    return RunConfig(
        date=resolve_run_date(args.date, args.today),
        teams=resolve_team_selection(args.teams, args.all_teams),
        test_mode=args.test_mode,
        all_teams=args.all_teams,
        today=args.today,
        production=args.production,
        shootout=args.shootout,
        project_id=args.project,
        location=args.location,
        queue_name=args.queue,
        local_mode=args.local_mode,
        host_url=args.host_url,
        local_target_url=settings.local_target_url,
        emulator_host=args.emulator,
        emulator_connect_timeout_sec=settings.emulator_connect_timeout_sec,
        nhl_api_base_url=settings.nhl_api_base_url,
        http_timeout_sec=settings.http_timeout_sec,
        discord_webhook_url=args.discord_webhook or None,
        discord_user_id=args.discord_user_id or None,
        redis_url=args.redis_url or None,
        redis_queue_name=args.redis_queue,
    )


def run_once(config: RunConfig) -> DispatchOutcome:
    """
    Execute one scheduling run.

    Raises:
        TransportConnectionError: If Cloud Tasks is unreachable
        ScheduleFetchError: If the schedule cannot be fetched
    """
    log_run_start(logger)
    log_run_configuration(logger, config)

    notifier = create_notification_sender(config)
    try:
        with connect_to_tasks_service(config) as transport:
            log_section_start(logger, "game collection")
            games = collect_games(config)
            log_section_end(logger, "game collection")

            log_section_start(logger, "task dispatch")
            outcome = dispatch_games(games, config, transport, notifier)
            log_section_end(logger, "task dispatch")
    finally:
        notifier.close()

    log_run_end(logger, outcome.games_processed)
    return outcome


def run_scheduled(args: argparse.Namespace) -> None:
    """Run on a cron schedule; options are re-resolved for every run so dates stay current."""
    # Validate once up front so obvious misconfiguration fails immediately
    # crontab triggers take exactly five fields; croniter also accepts seconds and years
    if len(args.cron.split()) != 5 or not croniter.is_valid(args.cron):
        raise ConfigurationError(f"Invalid cron expression '{args.cron}'")
    build_run_config(args)

    def job() -> None:
        run_once(build_run_config(args))

    GameTaskScheduler(job, cron=args.cron).start()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    logger.info("Starting NHL Game Tracker Scheduler")
    try:
        if args.cron:
            run_scheduled(args)
        else:
            run_once(build_run_config(args))
    except FATAL_ERRORS as exc:
        logger.error("Fatal: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
