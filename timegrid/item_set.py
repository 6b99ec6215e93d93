"""
In-memory working set of the items shown in the week grid.

Holds the tasks and achievements handed over by the data layer, applies
create/move/resize/edit requests coming from the grid and notifies listeners
after every change so views can re-run the layout. Nothing is persisted
here; listeners forward changes to whatever storage the host uses.
"""

import dataclasses
import uuid
from typing import Callable, Iterable, Optional

from .config import LabelsConfig, debug_print
from .day_window import DayWindow
from .event_layout import LayoutAssignment, layout_days
from .relocation import RelocationController
from .selection import CreateRequest
from .time_mapping import TimeMapper
from .timed_item import Achievement, Task, achievement_as_task


def _new_task_id() -> str:
    return f"task-{uuid.uuid4()}"


class ItemSet:
    """
    Tasks and achievements of the visible week.

    Only tasks are editable; achievements are shown read-only next to them.
    """

    def __init__(
        self,
        window: DayWindow,
        mapper: Optional[TimeMapper] = None,
        labels: Optional[LabelsConfig] = None,
        tasks: Iterable[Task] = (),
        achievements: Iterable[Achievement] = (),
    ):
        self.window = window
        self.mapper = mapper or TimeMapper()
        self.labels = labels or LabelsConfig()
        self._tasks: list[Task] = list(tasks)
        self._achievements: list[Achievement] = list(achievements)
        self._listeners: list[Callable[[], None]] = []
        self._relocation = RelocationController(self._resolve_date, self.mapper)

    def _resolve_date(self, day_index: int) -> str:
        # Looked up on each call so a shifted window is picked up
        return self.window.date_for(day_index)

    # ==================== Access ====================

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def achievements(self) -> list[Achievement]:
        return list(self._achievements)

    @property
    def relocation(self) -> RelocationController:
        return self._relocation

    def get(self, item_id: str) -> Task:
        return self._tasks[self._index_of(item_id)]

    def is_editable(self, item_id: str) -> bool:
        return any(t.id == item_id for t in self._tasks)

    def displayed_items(self) -> list[Task]:
        """Tasks followed by achievements adapted to the task shape."""
        return self._tasks + [achievement_as_task(a) for a in self._achievements]

    def items_for_day(self, day_index: int) -> list[Task]:
        day = self.window.date_for(day_index)
        return [item for item in self.displayed_items() if item.date == day]

    def layout_week(self) -> dict[int, list[LayoutAssignment]]:
        return layout_days(self.displayed_items(), self.window)

    # ==================== Window ====================

    def set_window(self, window: DayWindow) -> None:
        self.window = window
        self._notify()

    # ==================== Changes ====================

    def create(self, request: CreateRequest) -> Task:
        """Create a task with default metadata covering the requested span."""
        task = Task(
            id=_new_task_id(),
            title=self.labels.new_item_title,
            date=request.date,
            start_time=request.start_time,
            end_time=request.end_time,
            urgency="medium",
            progress=0,
            project="",
        )
        self._tasks.append(task)
        debug_print(f"created {task.id} on {task.date} {task.start_time}-{task.end_time}")
        self._notify()
        return task

    def relocate(self, item_id: str, day_index: int, dropped_minutes: int) -> Task:
        idx = self._index_of(item_id)
        updated = self._relocation.relocate(self._tasks[idx], day_index, dropped_minutes)
        self._tasks[idx] = updated
        self._notify()
        return updated

    def resize(self, item_id: str, start_time: str, end_time: str) -> Task:
        idx = self._index_of(item_id)
        updated = self._relocation.resize(self._tasks[idx], start_time, end_time)
        self._tasks[idx] = updated
        self._notify()
        return updated

    def update(self, item_id: str, **changes) -> Task:
        """Change display metadata such as urgency, progress or project."""
        idx = self._index_of(item_id)
        if "id" in changes:
            raise ValueError("The id of an item cannot be changed")
        updated = dataclasses.replace(self._tasks[idx], **changes)
        self._tasks[idx] = updated
        self._notify()
        return updated

    def delete(self, item_id: str) -> Task:
        idx = self._index_of(item_id)
        removed = self._tasks.pop(idx)
        debug_print(f"deleted {item_id}")
        self._notify()
        return removed

    def duplicate(self, item_id: str) -> Task:
        """Copy a task under a fresh id with the copy suffix on its title."""
        original = self.get(item_id)
        copy = dataclasses.replace(
            original,
            id=_new_task_id(),
            title=f"{original.title}{self.labels.copy_suffix}",
        )
        self._tasks.append(copy)
        self._notify()
        return copy

    # ==================== Listeners ====================

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

    def _index_of(self, item_id: str) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == item_id:
                return i
        raise ValueError(f"Unknown item: {item_id}")
