"""Discord webhook notification sender."""
from __future__ import annotations

import logging
from typing import Callable, Sequence

import httpx

from game_scheduler.notifications.sender import GameInfo, NoOpSender, NotificationError, NotificationSender
from game_scheduler.notifications.summary import build_game_notification, build_schedule_summary


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SEC = 10.0

# Discord answers 204 No Content for webhooks without ?wait=true
_SUCCESS_STATUSES = {httpx.codes.OK, httpx.codes.NO_CONTENT}

DiscordOption = Callable[["DiscordSender"], None]


def with_user_id(user_id: str) -> DiscordOption:
    """Mention this Discord user at the end of schedule summaries."""
    def apply(sender: "DiscordSender") -> None:
        sender.user_id = user_id
    return apply


def with_timeout(timeout: float) -> DiscordOption:
    def apply(sender: "DiscordSender") -> None:
        sender.timeout = timeout
    return apply


def with_http_client(client: httpx.Client) -> DiscordOption:
    """Use a caller-owned client (it is not closed by the sender)."""
    def apply(sender: "DiscordSender") -> None:
        sender.http_client = client
    return apply


class DiscordSender(NotificationSender):
    """Sends notifications through a Discord webhook."""

    def __init__(self, webhook_url: str, *options: DiscordOption):
        self.webhook_url = webhook_url
        self.user_id: str | None = None
        self.timeout = DEFAULT_TIMEOUT_SEC
        self.http_client: httpx.Client | None = None
        for option in options:
            option(self)

    def send(self, message: str) -> None:
        self._send_payload({"content": message})

    def send_schedule_summary(self, games: Sequence[GameInfo]) -> None:
        """Send one embed summarizing all scheduled games (or that there were none)."""
        summary = build_schedule_summary(games, mention_user_id=self.user_id)
        self._send_payload({"embeds": [summary.to_embed()]})

    def send_game_notification(self, game: GameInfo, event_type: str) -> None:
        message = build_game_notification(game, event_type)
        self._send_payload({"embeds": [message.to_embed()]})

    def is_enabled(self) -> bool:
        return bool(self.webhook_url)

    def _send_payload(self, payload: dict) -> None:
        try:
            if self.http_client is not None:
                response = self.http_client.post(self.webhook_url, json=payload)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.post(self.webhook_url, json=payload)
        except httpx.HTTPError as exc:
            raise NotificationError(f"failed to send Discord notification: {exc}") from exc

        if response.status_code not in _SUCCESS_STATUSES:
            raise NotificationError(
                f"Discord webhook returned status {response.status_code}",
                status_code=response.status_code,
            )
        logger.debug("Discord notification delivered (status %s)", response.status_code)


def create_discord_sender(webhook_url: str | None, *options: DiscordOption) -> NotificationSender:
    """Discord sender for the webhook, or a no-op sender when no URL is set."""
    if not webhook_url:
        return NoOpSender()
    return DiscordSender(webhook_url, *options)
