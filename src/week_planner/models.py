"""Data classes for the planner domain model.

Every entity is frozen; collections are tuples. Transitions build new values
with ``dataclasses.replace`` instead of mutating in place.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

CYCLE_WEEKS = 12
DEFAULT_TACTIC_MINUTES = 60


class TaskStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    SKIPPED = "SKIPPED"


@dataclass(frozen=True)
class Tactic:
    id: str
    title: str
    linked_goal_id: str
    duration_minutes: int = DEFAULT_TACTIC_MINUTES
    status: TaskStatus = TaskStatus.PENDING
    description: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "durationMinutes": self.duration_minutes,
            "status": self.status.value,
            "linkedGoalId": self.linked_goal_id,
        }
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Tactic":
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            linked_goal_id=data.get("linkedGoalId", ""),
            duration_minutes=int(data.get("durationMinutes", DEFAULT_TACTIC_MINUTES)),
            status=TaskStatus(data.get("status", TaskStatus.PENDING.value)),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class Goal:
    id: str
    title: str = ""
    description: str = ""
    tactics: tuple[Tactic, ...] = ()
    progress: int = 0  # display only

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "tactics": [t.to_dict() for t in self.tactics],
            "progress": self.progress,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Goal":
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            description=data.get("description", ""),
            tactics=tuple(Tactic.from_dict(t) for t in data.get("tactics", [])),
            progress=int(data.get("progress", 0)),
        )


@dataclass(frozen=True)
class WeekData:
    week_number: int
    start_date: str
    tactics_snapshot: tuple[Tactic, ...] = ()
    execution_score: int = 0
    reflection: str = ""
    is_reviewed: bool = False

    def to_dict(self) -> dict:
        return {
            "weekNumber": self.week_number,
            "startDate": self.start_date,
            "tacticsSnapshot": [t.to_dict() for t in self.tactics_snapshot],
            "executionScore": self.execution_score,
            "reflection": self.reflection,
            "isReviewed": self.is_reviewed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WeekData":
        return cls(
            week_number=int(data["weekNumber"]),
            start_date=data.get("startDate", ""),
            tactics_snapshot=tuple(Tactic.from_dict(t) for t in data.get("tacticsSnapshot", [])),
            execution_score=int(data.get("executionScore", 0)),
            reflection=data.get("reflection", ""),
            is_reviewed=bool(data.get("isReviewed", False)),
        )


@dataclass(frozen=True)
class AppState:
    vision: str = ""
    goals: tuple[Goal, ...] = ()
    current_week: int = 1
    weeks: tuple[WeekData, ...] = ()
    is_calendar_connected: bool = False
    connected_email: Optional[str] = None
    start_date: str = field(default_factory=lambda: datetime.now().isoformat())
    google_client_id: Optional[str] = None
    google_api_key: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "vision": self.vision,
            "goals": [g.to_dict() for g in self.goals],
            "currentWeek": self.current_week,
            "weeks": [w.to_dict() for w in self.weeks],
            "isCalendarConnected": self.is_calendar_connected,
            "connectedEmail": self.connected_email,
            "startDate": self.start_date,
        }
        if self.google_client_id is not None:
            data["googleClientId"] = self.google_client_id
        if self.google_api_key is not None:
            data["googleApiKey"] = self.google_api_key
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AppState":
        if not isinstance(data, dict):
            raise TypeError(f"stored state must be an object, got {type(data).__name__}")
        kwargs = {}
        if data.get("startDate"):
            kwargs["start_date"] = data["startDate"]
        return cls(
            vision=data.get("vision", ""),
            goals=tuple(Goal.from_dict(g) for g in data.get("goals", [])),
            current_week=max(1, min(int(data.get("currentWeek", 1)), CYCLE_WEEKS)),
            weeks=tuple(WeekData.from_dict(w) for w in data.get("weeks", [])),
            is_calendar_connected=bool(data.get("isCalendarConnected", False)),
            connected_email=data.get("connectedEmail"),
            google_client_id=data.get("googleClientId"),
            google_api_key=data.get("googleApiKey"),
            **kwargs,
        )
