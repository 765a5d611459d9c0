"""
Notification senders

The sender variant is chosen once per run from configuration: a Discord
webhook when one is configured, otherwise a Redis queue, otherwise nothing.
"""
import logging

from game_scheduler.notifications.discord import DiscordSender, create_discord_sender, with_user_id
from game_scheduler.notifications.redis_queue import RedisSender, create_redis_sender
from game_scheduler.notifications.sender import GameInfo, NoOpSender, NotificationError, NotificationSender
from game_scheduler.notifications.summary import SummaryMessage, build_game_notification, build_schedule_summary
from game_scheduler.schemas import RunConfig


logger = logging.getLogger(__name__)


def create_notification_sender(config: RunConfig) -> NotificationSender:
    """Select the notification sender for a run."""
    if config.discord_webhook_url:
        options = [with_user_id(config.discord_user_id)] if config.discord_user_id else []
        logger.info("Discord notifications enabled")
        return create_discord_sender(config.discord_webhook_url, *options)

    if config.redis_url:
        sender = create_redis_sender(config.redis_url, config.redis_queue_name)
        if sender.is_enabled():
            logger.info("Redis notifications enabled (queue %s)", config.redis_queue_name)
        return sender

    logger.info("Notifications disabled")
    return NoOpSender()


__all__ = [
    'GameInfo',
    'NotificationError',
    'NotificationSender',
    'NoOpSender',
    'DiscordSender',
    'RedisSender',
    'SummaryMessage',
    'build_game_notification',
    'build_schedule_summary',
    'create_discord_sender',
    'create_redis_sender',
    'create_notification_sender',
    'with_user_id',
]
