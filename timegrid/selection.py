"""
Drag selection on a day column to create a new item.

Pointer down on empty grid space starts a selection, pointer moves on the
same day column extend it, pointer up turns it into a create request unless
the dragged span is shorter than the minimum selection duration.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .config import debug_print
from .gestures import Gesture, GestureOwner, get_gesture_owner
from .time_mapping import TimeMapper, format_minutes


class SelectionState(Enum):
    IDLE = "idle"
    SELECTING = "selecting"


@dataclass(frozen=True)
class CreateRequest:
    """Request to create an item covering a selected span."""
    date: str
    start_time: str
    end_time: str
    day_index: int


@dataclass
class _Selection:
    day_index: int
    start_y: float
    end_y: float


class SelectionController:
    """
    State machine for drag selection within a single day column.

    Args:
        resolve_date: Maps a day index to its ISO date
        mapper: Pixel/time conversions for the grid
        min_selection_minutes: Selections shorter than this are discarded
        gesture_owner: Shared gesture owner (defaults to the global one)
    """

    def __init__(
        self,
        resolve_date: Callable[[int], str],
        mapper: TimeMapper,
        min_selection_minutes: int = 30,
        gesture_owner: Optional[GestureOwner] = None,
    ):
        self._resolve_date = resolve_date
        self._mapper = mapper
        self._min_selection_minutes = min_selection_minutes
        self._gestures = gesture_owner if gesture_owner is not None else get_gesture_owner()
        self._selection: Optional[_Selection] = None

    @property
    def state(self) -> SelectionState:
        return SelectionState.SELECTING if self._selection is not None else SelectionState.IDLE

    @property
    def min_height(self) -> float:
        """Minimum drag distance in pixels for a selection to count."""
        return self._min_selection_minutes / 60 * self._mapper.px_per_hour

    def pointer_down(self, day_index: int, y: float, on_item: bool = False) -> bool:
        """
        Start a selection at y on the given day column.

        Presses on an existing item are not selections. Returns True if a
        selection was started.
        """
        if on_item:
            return False
        if not self._gestures.acquire(Gesture.SELECTING):
            return False

        snapped_y = self._mapper.snap_selection_y(y)
        self._selection = _Selection(day_index, snapped_y, snapped_y)
        return True

    def pointer_move(self, day_index: int, y: float) -> None:
        """Extend the selection; moves over other day columns are ignored."""
        if self._selection is None or self._selection.day_index != day_index:
            return
        self._selection.end_y = self._mapper.snap_selection_y(y)

    def pointer_up(self) -> Optional[CreateRequest]:
        """Finish the selection and return a create request, if any."""
        selection = self._selection
        self._selection = None
        self._gestures.release(Gesture.SELECTING)

        if selection is None:
            return None

        if abs(selection.end_y - selection.start_y) < self.min_height:
            debug_print(
                f"selection discarded, {abs(selection.end_y - selection.start_y)}px "
                f"< {self.min_height}px"
            )
            return None

        actual_start_y = min(selection.start_y, selection.end_y)
        actual_end_y = max(selection.start_y, selection.end_y)

        # Floor the start and ceil the end so the item covers the dragged span
        px_per_hour = self._mapper.px_per_hour
        start_minutes = math.floor(actual_start_y / px_per_hour * 60)
        end_minutes = math.ceil(actual_end_y / px_per_hour * 60)

        request = CreateRequest(
            date=self._resolve_date(selection.day_index),
            start_time=format_minutes(start_minutes),
            end_time=format_minutes(end_minutes),
            day_index=selection.day_index,
        )
        debug_print(f"selection -> {request.date} {request.start_time}-{request.end_time}")
        return request

    def pointer_leave(self, day_index: int) -> Optional[CreateRequest]:
        """Leaving the owning day column ends the selection like pointer up."""
        if self._selection is None or self._selection.day_index != day_index:
            return None
        return self.pointer_up()

    def cancel(self) -> None:
        """Discard the selection without creating anything."""
        if self._selection is not None:
            self._selection = None
            self._gestures.release(Gesture.SELECTING)

    def preview(self) -> Optional[tuple[int, float, float]]:
        """Return (day_index, top, height) of the selection being dragged."""
        if self._selection is None:
            return None
        s = self._selection
        return s.day_index, min(s.start_y, s.end_y), abs(s.end_y - s.start_y)
