"""
Moving and resizing existing items.

A move keeps the item's duration and only changes where it starts and on
which day. A resize writes new start/end times through unchanged.
"""

import copy
import dataclasses
from typing import Callable, TypeVar

from .config import debug_print
from .time_mapping import TimeMapper, format_minutes
from .timed_item import TimeInterval

ItemT = TypeVar('ItemT')


def _updated_copy(item: ItemT, **changes) -> ItemT:
    """Copy of item with changes applied; works for any TimedItem."""
    if dataclasses.is_dataclass(item) and not isinstance(item, type):
        return dataclasses.replace(item, **changes)
    updated = copy.copy(item)
    for name, value in changes.items():
        setattr(updated, name, value)
    return updated


class RelocationController:
    """Computes updated items for drag-and-drop moves and resizes."""

    def __init__(self, resolve_date: Callable[[int], str], mapper: TimeMapper):
        self._resolve_date = resolve_date
        self._mapper = mapper

    def drop_minutes(self, slot_index: int, relative_y: float) -> int:
        """Snapped start minutes for a drop at relative_y inside an hour slot."""
        return self._mapper.drop_minutes(slot_index, relative_y)

    def relocate(self, item: ItemT, day_index: int, dropped_minutes: int) -> ItemT:
        """
        Return a copy of item starting at dropped_minutes on day_index.

        The duration is taken from the item's current start and end. Other
        items are not consulted; overlapping is allowed.
        """
        duration = TimeInterval.of(item).duration
        new_start = dropped_minutes
        new_end = new_start + duration

        updated = _updated_copy(
            item,
            date=self._resolve_date(day_index),
            start_time=format_minutes(new_start),
            end_time=format_minutes(new_end),
        )
        debug_print(
            f"relocate {item.id} -> {updated.date} "
            f"{updated.start_time}-{updated.end_time}"
        )
        return updated

    def resize(self, item: ItemT, start_time: str, end_time: str) -> ItemT:
        """Return a copy of item with the given start and end times."""
        return _updated_copy(item, start_time=start_time, end_time=end_time)
