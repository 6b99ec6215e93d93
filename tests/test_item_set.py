"""
tests/test_item_set.py

Covers:
  - Creating tasks from selection requests with default metadata
  - Moving, resizing, editing, duplicating and deleting tasks
  - Achievements shown read-only next to tasks
  - Listener notification on every change and on window shifts
  - Layout of the visible week
"""

from datetime import date

import pytest

from timegrid.config import LabelsConfig
from timegrid.day_window import DayWindow
from timegrid.item_set import ItemSet
from timegrid.selection import CreateRequest
from timegrid.timed_item import Achievement, Task


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def window():
    return DayWindow(date(2024, 1, 15))


@pytest.fixture
def tasks():
    return [
        Task(id="t1", title="Write report", date="2024-01-15", start_time="09:00", end_time="10:30",
             urgency="high", progress=20, project="docs"),
        Task(id="t2", title="Review", date="2024-01-16", start_time="14:00", end_time="15:00"),
    ]


@pytest.fixture
def achievements():
    return [
        Achievement(id="a1", title="Standup", date="2024-01-15", start_time="09:30", end_time="09:45",
                    user_id="u1", project_id="ops"),
    ]


@pytest.fixture
def item_set(window, tasks, achievements):
    return ItemSet(window, tasks=tasks, achievements=achievements)


class Recorder:
    """Counts listener notifications."""

    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


@pytest.fixture
def recorder(item_set):
    rec = Recorder()
    item_set.add_listener(rec)
    return rec


# ── Access ────────────────────────────────────────────────────────────────────

class TestAccess:

    def test_get(self, item_set):
        assert item_set.get("t1").title == "Write report"

    def test_get_unknown(self, item_set):
        with pytest.raises(ValueError):
            item_set.get("missing")

    def test_achievements_not_editable(self, item_set):
        assert item_set.is_editable("t1")
        assert not item_set.is_editable("a1")
        with pytest.raises(ValueError):
            item_set.relocate("a1", 0, 600)

    def test_displayed_items(self, item_set):
        displayed = item_set.displayed_items()
        assert [i.id for i in displayed] == ["t1", "t2", "a1"]
        assert displayed[2].urgency == "low"
        assert displayed[2].project == "ops"

    def test_items_for_day(self, item_set):
        assert [i.id for i in item_set.items_for_day(0)] == ["t1", "a1"]
        assert [i.id for i in item_set.items_for_day(1)] == ["t2"]
        assert item_set.items_for_day(5) == []

    def test_tasks_is_a_copy(self, item_set):
        item_set.tasks.clear()
        assert len(item_set.tasks) == 2


# ── Layout ────────────────────────────────────────────────────────────────────

class TestLayoutWeek:

    def test_task_and_achievement_side_by_side(self, item_set):
        monday = {a.item_id: a for a in item_set.layout_week()[0]}
        assert monday["t1"].column == 0
        assert monday["a1"].column == 1
        assert monday["t1"].total_columns == 2

    def test_follows_window(self, item_set):
        item_set.set_window(item_set.window.shifted(1))
        assert all(v == [] for v in item_set.layout_week().values())


# ── Create ────────────────────────────────────────────────────────────────────

class TestCreate:

    def test_defaults(self, item_set):
        task = item_set.create(CreateRequest("2024-01-17", "10:00", "11:00", 2))
        assert task.id.startswith("task-")
        assert (task.title, task.urgency, task.progress, task.project) == ("New Task", "medium", 0, "")
        assert (task.date, task.start_time, task.end_time) == ("2024-01-17", "10:00", "11:00")
        assert item_set.get(task.id) == task

    def test_unique_ids(self, item_set):
        request = CreateRequest("2024-01-17", "10:00", "11:00", 2)
        assert item_set.create(request).id != item_set.create(request).id

    def test_title_from_labels(self, window):
        item_set = ItemSet(window, labels=LabelsConfig(new_item_title="Neue Aufgabe"))
        task = item_set.create(CreateRequest("2024-01-15", "08:00", "09:00", 0))
        assert task.title == "Neue Aufgabe"

    def test_notifies(self, item_set, recorder):
        item_set.create(CreateRequest("2024-01-17", "10:00", "11:00", 2))
        assert recorder.calls == 1


# ── Move and resize ───────────────────────────────────────────────────────────

class TestRelocateResize:

    def test_relocate(self, item_set, recorder):
        moved = item_set.relocate("t1", 2, 615)
        assert (moved.date, moved.start_time, moved.end_time) == ("2024-01-17", "10:15", "11:45")
        assert item_set.get("t1") == moved
        assert recorder.calls == 1

    def test_relocate_uses_current_window(self, item_set):
        item_set.set_window(item_set.window.shifted(1))
        moved = item_set.relocate("t1", 0, 540)
        assert moved.date == "2024-01-22"

    def test_resize(self, item_set, recorder):
        resized = item_set.resize("t2", "13:30", "15:15")
        assert (resized.start_time, resized.end_time) == ("13:30", "15:15")
        assert recorder.calls == 1

    def test_unknown_item(self, item_set, recorder):
        with pytest.raises(ValueError):
            item_set.resize("missing", "10:00", "11:00")
        assert recorder.calls == 0


# ── Edit, duplicate, delete ───────────────────────────────────────────────────

class TestEditing:

    def test_update_urgency(self, item_set, recorder):
        updated = item_set.update("t2", urgency="high", progress=50)
        assert (updated.urgency, updated.progress) == ("high", 50)
        assert recorder.calls == 1

    def test_update_id_rejected(self, item_set):
        with pytest.raises(ValueError):
            item_set.update("t1", id="t9")

    def test_duplicate(self, item_set):
        copy = item_set.duplicate("t1")
        assert copy.id != "t1"
        assert copy.title == "Write report (copy)"
        assert (copy.date, copy.start_time, copy.end_time, copy.urgency) == \
            ("2024-01-15", "09:00", "10:30", "high")
        assert len(item_set.tasks) == 3

    def test_duplicate_custom_suffix(self, window, tasks):
        item_set = ItemSet(window, labels=LabelsConfig(copy_suffix=" (コピー)"), tasks=tasks)
        assert item_set.duplicate("t2").title == "Review (コピー)"

    def test_delete(self, item_set, recorder):
        removed = item_set.delete("t1")
        assert removed.id == "t1"
        assert [t.id for t in item_set.tasks] == ["t2"]
        assert recorder.calls == 1


# ── Listeners ─────────────────────────────────────────────────────────────────

class TestListeners:

    def test_window_change_notifies(self, item_set, recorder):
        item_set.set_window(item_set.window.shifted(-1))
        assert recorder.calls == 1

    def test_remove_listener(self, item_set, recorder):
        item_set.remove_listener(recorder)
        item_set.delete("t2")
        assert recorder.calls == 0

    def test_remove_unknown_listener(self, item_set):
        item_set.remove_listener(Recorder())
