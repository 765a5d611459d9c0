"""
Test helper functions and fakes for the scheduling pipeline.
"""

from datetime import datetime
from typing import Sequence

from google.api_core.exceptions import InternalServerError

from game_scheduler.notifications.sender import GameInfo, NotificationError, NotificationSender
from game_scheduler.schemas import Game, TeamInfo
from game_scheduler.teams import team_by_code


def make_team(code: str) -> TeamInfo:
    team = team_by_code(code)
    return TeamInfo(
        id=team.id if team else 0,
        common_name={"default": team.name.split()[-1]} if team else None,
        abbrev=code,
    )


def make_game(
    game_id: int = 2024020001,
    away: str = "DAL",
    home: str = "BOS",
    game_date: str = "2025-01-15",
    start: str = "2025-01-16T00:00:00Z",
) -> Game:
    """Create a game between two directory teams."""
    return Game(
        id=game_id,
        game_date=game_date,
        start_time_utc=start,
        away_team=make_team(away),
        home_team=make_team(home),
    )


def schedule_payload(*weeks: tuple[str, list[dict]]) -> dict:
    """NHL API schedule body with one bucket per (date, games) pair."""
    return {"gameWeek": [{"date": date, "games": games} for date, games in weeks]}


def api_game(game_id: int, away: str, home: str, start: str, game_date: str = "2025-01-15") -> dict:
    away_team = team_by_code(away)
    home_team = team_by_code(home)
    return {
        "id": game_id,
        "season": 20242025,
        "gameDate": game_date,
        "startTimeUTC": start,
        "venue": {"default": "Arena"},
        "awayTeam": {
            "id": away_team.id,
            "commonName": {"default": away_team.name.split()[-1]},
            "placeName": {"default": away_team.name.rsplit(" ", 1)[0]},
            "abbrev": away,
            "logo": "https://assets.nhle.com/logo.svg",
        },
        "homeTeam": {
            "id": home_team.id,
            "commonName": {"default": home_team.name.split()[-1]},
            "placeName": {"default": home_team.name.rsplit(" ", 1)[0]},
            "abbrev": home,
        },
    }


class FakeTransport:
    """In-memory task transport recording every call."""

    def __init__(self, fail_game_ids: Sequence[str] = (), queue_error: Exception | None = None):
        self.fail_game_ids = set(fail_game_ids)
        self.queue_error = queue_error
        self.ensure_queue_calls = 0
        self.created: list[tuple[str, bytes, datetime]] = []

    def ensure_queue(self) -> bool:
        self.ensure_queue_calls += 1
        if self.queue_error:
            raise self.queue_error
        return True

    def create_task(self, target_url: str, payload: bytes, schedule_time: datetime) -> str:
        for game_id in self.fail_game_ids:
            if f'"id":"{game_id}"' in payload.decode("utf-8"):
                raise InternalServerError(f"task rejected for game {game_id}")
        self.created.append((target_url, payload, schedule_time))
        return f"projects/p/locations/l/queues/q/tasks/{len(self.created)}"


class RecordingNotifier(NotificationSender):
    """Notifier that records summaries instead of sending them."""

    def __init__(self, enabled: bool = True, error: Exception | None = None):
        self.enabled = enabled
        self.error = error
        self.messages: list[str] = []
        self.summaries: list[list[GameInfo]] = []
        self.events: list[tuple[GameInfo, str]] = []

    def send(self, message: str) -> None:
        self.messages.append(message)

    def send_schedule_summary(self, games: Sequence[GameInfo]) -> None:
        self.summaries.append(list(games))
        if self.error:
            raise self.error

    def send_game_notification(self, game: GameInfo, event_type: str) -> None:
        self.events.append((game, event_type))

    def is_enabled(self) -> bool:
        return self.enabled


def failing_notifier() -> RecordingNotifier:
    return RecordingNotifier(error=NotificationError("Discord webhook returned status 500", status_code=500))
