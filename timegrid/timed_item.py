"""
Timed items laid out on the week grid.

The engine works on anything that exposes id, title, date, start_time and
end_time. Tasks and achievements are two such record kinds; achievements are
adapted to the task shape before they are shown.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from .time_mapping import parse_time_to_minutes


@runtime_checkable
class TimedItem(Protocol):
    id: str
    title: str
    date: str  # ISO date, YYYY-MM-DD
    start_time: str  # "HH:MM"
    end_time: str  # "HH:MM"


@dataclass
class Task:
    """A planned piece of work."""
    id: str
    title: str
    date: str
    start_time: str
    end_time: str
    urgency: str = "medium"  # "high", "medium" or "low"
    progress: int = 0  # percent complete
    project: str = ""
    description: str = ""
    user_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "urgency": self.urgency,
            "progress": self.progress,
            "project": self.project,
            "description": self.description,
            "userId": self.user_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Task':
        return cls(
            id=data["id"],
            title=data["title"],
            date=data["date"],
            start_time=data["startTime"],
            end_time=data["endTime"],
            urgency=data.get("urgency", "medium"),
            progress=data.get("progress", 0),
            project=data.get("project") or "",
            description=data.get("description") or "",
            user_id=data.get("userId"),
        )


@dataclass
class Achievement:
    """Recorded work actually done."""
    id: str
    title: str
    date: str
    start_time: str
    end_time: str
    user_id: str = ""
    project_id: Optional[str] = None
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "userId": self.user_id,
            "projectId": self.project_id,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Achievement':
        return cls(
            id=data["id"],
            title=data["title"],
            date=data["date"],
            start_time=data["startTime"],
            end_time=data["endTime"],
            user_id=data.get("userId") or "",
            project_id=data.get("projectId"),
            description=data.get("description") or "",
        )


def achievement_as_task(achievement: Achievement) -> Task:
    """Adapt an achievement to the task shape (achievements have no urgency)."""
    return Task(
        id=achievement.id,
        title=achievement.title,
        date=achievement.date,
        start_time=achievement.start_time,
        end_time=achievement.end_time,
        urgency="low",
        progress=0,
        project=achievement.project_id or "",
        description=achievement.description,
        user_id=achievement.user_id,
    )


@dataclass(frozen=True)
class TimeInterval:
    """Half-open [start_minutes, end_minutes) interval."""
    start_minutes: int
    end_minutes: int

    @classmethod
    def of(cls, item: TimedItem) -> 'TimeInterval':
        return cls(
            parse_time_to_minutes(item.start_time),
            parse_time_to_minutes(item.end_time),
        )

    @property
    def duration(self) -> int:
        return self.end_minutes - self.start_minutes

    def overlaps(self, other: 'TimeInterval') -> bool:
        return self.start_minutes < other.end_minutes and other.start_minutes < self.end_minutes


def load_items(path: Path) -> tuple[list[Task], list[Achievement]]:
    """
    Load tasks and achievements from a JSON file.

    Expected shape: {"tasks": [...], "achievements": [...]} with camelCase
    keys as produced by to_dict().
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    tasks = [Task.from_dict(d) for d in data.get("tasks", [])]
    achievements = [Achievement.from_dict(d) for d in data.get("achievements", [])]
    return tasks, achievements
