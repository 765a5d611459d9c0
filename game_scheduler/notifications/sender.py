"""
Notification sender interface and the no-op implementation.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from game_scheduler.schemas import Game


class NotificationError(RuntimeError):
    """Raised when a notification could not be delivered"""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


@dataclass(slots=True, frozen=True)
class GameInfo:
    """Game fields shown in notifications."""
    id: str
    game_date: str
    start_time: str
    home_team: str
    away_team: str

    @classmethod
    def from_game(cls, game: Game) -> "GameInfo":
        return cls(
            id=str(game.id),
            game_date=game.game_date,
            start_time=game.start_time_utc,
            home_team=game.home_team.abbrev,
            away_team=game.away_team.abbrev,
        )

    def to_dict(self) -> dict:
        # Key names are shared with existing queue consumers
        return {
            "ID": self.id,
            "GameDate": self.game_date,
            "StartTime": self.start_time,
            "HomeTeam": self.home_team,
            "AwayTeam": self.away_team,
        }


class NotificationSender(ABC):
    """Outbound notification channel (Discord webhook, Redis queue, ...)."""

    @abstractmethod
    def send(self, message: str) -> None:
        """Send a plain text message. Raises NotificationError on failure."""

    @abstractmethod
    def send_schedule_summary(self, games: Sequence[GameInfo]) -> None:
        """Send one summary of the games scheduled in this run."""

    @abstractmethod
    def send_game_notification(self, game: GameInfo, event_type: str) -> None:
        """Send a single-game event (scheduled, started, ended, reminder)."""

    @abstractmethod
    def is_enabled(self) -> bool:
        ...

    def close(self) -> None:
        pass


class NoOpSender(NotificationSender):
    """Used when notifications are disabled."""

    def send(self, message: str) -> None:
        return None

    def send_schedule_summary(self, games: Sequence[GameInfo]) -> None:
        return None

    def send_game_notification(self, game: GameInfo, event_type: str) -> None:
        return None

    def is_enabled(self) -> bool:
        return False
