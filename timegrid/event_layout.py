"""
Column layout for overlapping items of a single day.

Items are placed side by side so that no two overlapping items share a
column. Placement is greedy interval partitioning: sort by start time and put
each item into the first column whose last item has already ended.
"""

from dataclasses import dataclass
from typing import Any, Iterable

from .day_window import DayWindow
from .timed_item import TimedItem, TimeInterval


@dataclass(frozen=True)
class LayoutAssignment:
    """Column position of one item within its day."""
    item_id: str
    column: int  # 0-based
    total_columns: int  # columns used by the items this one overlaps
    item: Any = None

    @property
    def left_fraction(self) -> float:
        return self.column / self.total_columns

    @property
    def right_fraction(self) -> float:
        return (self.total_columns - self.column - 1) / self.total_columns

    @property
    def width_fraction(self) -> float:
        return 1 / self.total_columns


def layout(items: Iterable[TimedItem]) -> list[LayoutAssignment]:
    """
    Assign a (column, total_columns) pair to every item of one day.

    Items are returned in start-time order. Ties keep their input order.

    total_columns counts only the items that directly overlap the item
    itself, not the whole chain of transitively overlapping items, so
    neighbours in one cluster may report different widths.
    """
    items = list(items)
    if not items:
        return []

    intervals = [TimeInterval.of(item) for item in items]

    # sorted() is stable, so equal start times keep their input order
    order = sorted(range(len(items)), key=lambda i: intervals[i].start_minutes)

    # Each column holds item indices in increasing start time
    columns: list[list[int]] = []
    column_of: dict[int, int] = {}

    for i in order:
        # Find first column where this item fits
        assigned = False
        for col_idx, column in enumerate(columns):
            last = column[-1]
            if not intervals[i].overlaps(intervals[last]):
                column.append(i)
                column_of[i] = col_idx
                assigned = True
                break

        if not assigned:
            # Need a new column
            column_of[i] = len(columns)
            columns.append([i])

    assignments = []
    for i in order:
        max_columns = 1
        for j in order:
            if intervals[i].overlaps(intervals[j]):
                max_columns = max(max_columns, column_of[j] + 1)
        assignments.append(LayoutAssignment(
            item_id=items[i].id,
            column=column_of[i],
            total_columns=max_columns,
            item=items[i],
        ))

    return assignments


def layout_days(items: Iterable[TimedItem], window: DayWindow) -> dict[int, list[LayoutAssignment]]:
    """
    Lay out each day of the window independently.

    Items dated outside the window are skipped. Every day index of the
    window is present in the result, possibly with an empty list.
    """
    by_day: dict[int, list[TimedItem]] = {i: [] for i in range(window.length)}
    for item in items:
        day_index = window.index_of(item.date)
        if day_index is not None:
            by_day[day_index].append(item)
    return {day_index: layout(day_items) for day_index, day_items in by_day.items()}


def column_count(assignments: Iterable[LayoutAssignment]) -> int:
    """Number of distinct columns used by a day's layout."""
    return len({a.column for a in assignments})
