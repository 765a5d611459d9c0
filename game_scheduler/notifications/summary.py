"""
Notification message text

Builds the end-of-run summary message and single-game event messages. Pure
text construction: games are rendered in the order given, never sorted.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from game_scheduler.notifications.sender import GameInfo
from game_scheduler.utils.timezone import iso_z, utc_now

NO_GAMES_DESCRIPTION = "No games were identified to schedule."

# Discord embed colors (decimal)
COLOR_SCHEDULED = 3066993  # green
COLOR_STARTED = 3447003  # blue
COLOR_ENDED = 15158332  # red
COLOR_REMINDER = 16776960  # yellow
COLOR_NEUTRAL = 9807270  # gray

EVENT_COLORS = {
    "scheduled": COLOR_SCHEDULED,
    "started": COLOR_STARTED,
    "ended": COLOR_ENDED,
    "reminder": COLOR_REMINDER,
}


@dataclass(slots=True, frozen=True)
class SummaryMessage:
    title: str
    description: str
    color: int
    timestamp: str
    fields: tuple[tuple[str, str], ...] = ()

    def to_embed(self) -> dict:
        embed = {
            "title": self.title,
            "description": self.description,
            "color": self.color,
            "timestamp": self.timestamp,
        }
        if self.fields:
            embed["fields"] = [
                {"name": name, "value": value, "inline": True} for name, value in self.fields
            ]
        return embed


def format_game_line(game: GameInfo) -> str:
    return f"**{game.away_team} @ {game.home_team}**\n{game.game_date} at {game.start_time}\n\n"


def build_schedule_summary(
    games: Sequence[GameInfo],
    *,
    league: str = "NHL",
    mention_user_id: str | None = None,
    now: datetime | None = None,
) -> SummaryMessage:
    """
    Build the schedule summary for a run.

    The mention is appended once, after all games, and only when at least
    one game was scheduled.
    """
    timestamp = iso_z(now or utc_now())
    base_title = f"{league} Game Schedule"

    if not games:
        return SummaryMessage(
            title=base_title,
            description=NO_GAMES_DESCRIPTION,
            color=COLOR_NEUTRAL,
            timestamp=timestamp,
        )

    count = len(games)
    noun = "game" if count == 1 else "games"
    description = "".join(format_game_line(game) for game in games)
    if mention_user_id:
        description += f"<@{mention_user_id}>"

    return SummaryMessage(
        title=f"{base_title} ({count} {noun} scheduled)",
        description=description,
        color=COLOR_SCHEDULED,
        timestamp=timestamp,
    )


def build_game_notification(
    game: GameInfo,
    event_type: str,
    *,
    league: str = "NHL",
    now: datetime | None = None,
) -> SummaryMessage:
    """Single-game event message; unknown event types are shown in gray."""
    return SummaryMessage(
        title=f"{league} Game {event_type[:1].upper()}{event_type[1:]}",
        description=f"{game.away_team} vs {game.home_team}",
        color=EVENT_COLORS.get(event_type, COLOR_NEUTRAL),
        timestamp=iso_z(now or utc_now()),
        fields=(
            ("Game ID", game.id),
            ("Date", game.game_date),
            ("Start Time", game.start_time),
        ),
    )
