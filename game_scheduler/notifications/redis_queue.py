"""Redis list notification sender."""
from __future__ import annotations

import json
import logging
from typing import Sequence

import redis

from game_scheduler.notifications.sender import GameInfo, NoOpSender, NotificationError, NotificationSender
from game_scheduler.utils.timezone import iso_z, utc_now


logger = logging.getLogger(__name__)

DEFAULT_QUEUE_NAME = "game-notifications"


class RedisSender(NotificationSender):
    """Pushes notification messages onto a Redis list for another service to deliver."""

    def __init__(self, client: redis.Redis, queue_name: str = DEFAULT_QUEUE_NAME):
        self._client = client
        self.queue_name = queue_name or DEFAULT_QUEUE_NAME

    def send(self, message: str) -> None:
        self._push({
            "type": "simple",
            "message": message,
            "timestamp": iso_z(utc_now()),
        })

    def send_schedule_summary(self, games: Sequence[GameInfo]) -> None:
        message = {
            "type": "schedule_summary" if games else "no_games",
            "timestamp": iso_z(utc_now()),
        }
        if games:
            message["games"] = [game.to_dict() for game in games]
        self._push(message)

    def send_game_notification(self, game: GameInfo, event_type: str) -> None:
        self._push({
            "type": "game_event",
            "event_type": event_type,
            "games": [game.to_dict()],
            "timestamp": iso_z(utc_now()),
        })

    def is_enabled(self) -> bool:
        return self._client is not None

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def _push(self, message: dict) -> None:
        try:
            self._client.rpush(self.queue_name, json.dumps(message))
        except redis.RedisError as exc:
            raise NotificationError(f"failed to push message to Redis queue: {exc}") from exc


def create_redis_sender(redis_url: str | None, queue_name: str | None = None) -> NotificationSender:
    """
    Redis sender for the URL, or a no-op sender when Redis is not usable.

    An unparsable URL or a failed ping disables notifications with a warning
    instead of failing the run.
    """
    if not redis_url:
        return NoOpSender()

    try:
        client = redis.Redis.from_url(redis_url, socket_connect_timeout=5, socket_timeout=10)
    except ValueError as exc:
        logger.warning("Failed to parse Redis URL, notifications disabled: %s", exc)
        return NoOpSender()

    try:
        client.ping()
    except redis.RedisError as exc:
        logger.warning("Failed to connect to Redis, notifications disabled: %s", exc)
        client.close()
        return NoOpSender()

    return RedisSender(client, queue_name or DEFAULT_QUEUE_NAME)
