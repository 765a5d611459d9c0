"""
Task Dispatch Service

Coordinates queue preparation, per-game task creation and the end-of-run
summary notification for one scheduling run.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol, Sequence

import grpc
from google.api_core.exceptions import GoogleAPIError

from game_scheduler.notifications.sender import GameInfo, NotificationError, NotificationSender
from game_scheduler.schemas import Game, RunConfig
from game_scheduler.services.dispatch_types import DispatchOutcome, EventResult
from game_scheduler.services.queue_service import QueueCreationError
from game_scheduler.services.task_builder import UnparseableStartTime, build_dispatch_task
from game_scheduler.utils.logging_helpers import log_game_processing


logger = logging.getLogger(__name__)


class TaskTransport(Protocol):
    def ensure_queue(self) -> bool: ...

    def create_task(self, target_url: str, payload: bytes, schedule_time: datetime) -> str: ...


class GameDispatchPipeline:
    """Turns a filtered game list into queued tasks plus one summary notification."""

    def __init__(
        self,
        transport: TaskTransport,
        notifier: NotificationSender,
        config: RunConfig,
    ) -> None:
        self.transport = transport
        self.notifier = notifier
        self.config = config

    def run(self, games: Sequence[Game]) -> DispatchOutcome:
        outcome = DispatchOutcome(games_processed=len(games))

        if not games:
            logger.info("No games found to process")
        else:
            outcome.queue_ready = self._ensure_queue()
            logger.info("Processing %s games", len(games))
            total = len(games)
            for index, game in enumerate(games, start=1):
                outcome.results.append(self._dispatch_game(index, total, game))

            logger.info(
                "Dispatch finished: %s tasks created, %s failed",
                outcome.tasks_created,
                outcome.tasks_failed,
            )

        outcome.summary_sent = self._send_summary(games)
        return outcome

    def _ensure_queue(self) -> bool:
        try:
            self.transport.ensure_queue()
        except QueueCreationError as exc:
            logger.warning("Failed to create queue: %s", exc)
            return False
        return True

    def _dispatch_game(self, index: int, total: int, game: Game) -> EventResult:
        log_game_processing(logger, index, total, game)

        try:
            task = build_dispatch_task(game, self.config)
        except UnparseableStartTime as exc:
            logger.error("Failed to build task for game %s: %s", game.id, exc)
            return EventResult(index=index, game_id=str(game.id), status="failed", error=str(exc))

        try:
            task_name = self.transport.create_task(task.target_url, task.payload, task.schedule_time)
        except (GoogleAPIError, grpc.RpcError) as exc:
            logger.error("Failed to create task for game %s: %s", game.id, exc)
            return EventResult(
                index=index,
                game_id=task.game_id,
                status="failed",
                schedule_time=task.schedule_time,
                error=str(exc),
            )

        return EventResult(
            index=index,
            game_id=task.game_id,
            status="success",
            schedule_time=task.schedule_time,
            task_name=task_name,
        )

    def _send_summary(self, games: Sequence[Game]) -> bool:
        if not self.notifier.is_enabled():
            return False

        try:
            self.notifier.send_schedule_summary([GameInfo.from_game(game) for game in games])
        except NotificationError as exc:
            logger.warning("Failed to send schedule summary notification: %s", exc)
            return False

        logger.info("Schedule summary notification sent for %s games", len(games))
        return True


def dispatch_games(
    games: Sequence[Game],
    config: RunConfig,
    transport: TaskTransport,
    notifier: NotificationSender,
) -> DispatchOutcome:
    """Run the dispatch pipeline once over ``games``."""
    return GameDispatchPipeline(transport, notifier, config).run(games)
