"""
Shared dataclasses used across the task dispatch pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from game_scheduler.utils.timezone import format_rfc3339


@dataclass(slots=True, frozen=True)
class DispatchTask:
    """A game's task, ready to hand to the queue transport."""
    game_id: str
    target_url: str
    payload: bytes
    schedule_time: datetime
    execution_end: datetime
    should_notify: bool


@dataclass(slots=True)
class EventResult:
    """Outcome of building and dispatching one game's task."""
    index: int
    game_id: str
    status: Literal["success", "failed"]
    schedule_time: datetime | None = None
    task_name: str | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        payload = {
            "index": self.index,
            "game_id": self.game_id,
            "status": self.status,
        }
        if self.schedule_time:
            payload["schedule_time"] = format_rfc3339(self.schedule_time)
        if self.task_name:
            payload["task_name"] = self.task_name
        if self.error:
            payload["error"] = self.error
        return payload


@dataclass(slots=True)
class DispatchOutcome:
    """Batch-level result of a pipeline run."""
    games_processed: int
    results: list[EventResult] = field(default_factory=list)
    status: Literal["success"] = "success"
    queue_ready: bool | None = None
    summary_sent: bool = False

    @property
    def tasks_created(self) -> int:
        return sum(1 for result in self.results if result.status == "success")

    @property
    def tasks_failed(self) -> int:
        return sum(1 for result in self.results if result.status == "failed")

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "games_processed": self.games_processed,
            "tasks_created": self.tasks_created,
            "tasks_failed": self.tasks_failed,
            "queue_ready": self.queue_ready,
            "summary_sent": self.summary_sent,
            "results": [result.to_dict() for result in self.results],
        }


__all__ = ["DispatchTask", "EventResult", "DispatchOutcome"]
