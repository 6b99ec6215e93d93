"""
Single owner of the active pointer-drag gesture.

Drag selection on a day column and dragging the grid's scrollbar both track
the pointer beyond the widget they started on. Only one of them may hold the
pointer at a time; whoever acquires the gesture first owns it until release.
"""

from enum import Enum
from typing import Optional

from .config import debug_print


class Gesture(Enum):
    """Kind of pointer drag in progress."""
    NONE = "none"
    SELECTING = "selecting"
    SCROLLBAR_DRAGGING = "scrollbar_dragging"


class GestureOwner:
    """Tracks which gesture currently owns the pointer."""

    def __init__(self):
        self._active = Gesture.NONE

    @property
    def active(self) -> Gesture:
        return self._active

    @property
    def is_idle(self) -> bool:
        return self._active is Gesture.NONE

    def acquire(self, gesture: Gesture) -> bool:
        """
        Take ownership of the pointer for gesture.

        Returns False if a different gesture is already active. Re-acquiring
        the active gesture succeeds.
        """
        if gesture is Gesture.NONE:
            raise ValueError("Cannot acquire Gesture.NONE")
        if self._active is gesture:
            return True
        if self._active is not Gesture.NONE:
            debug_print(f"gesture {gesture.value} blocked by {self._active.value}")
            return False
        self._active = gesture
        return True

    def release(self, gesture: Gesture) -> None:
        """Release the pointer if gesture is the one holding it."""
        if self._active is gesture:
            self._active = Gesture.NONE


# Global owner instance (created lazily)
_global_owner: Optional[GestureOwner] = None


def get_gesture_owner() -> GestureOwner:
    """Get the process-wide GestureOwner."""
    global _global_owner
    if _global_owner is None:
        _global_owner = GestureOwner()
    return _global_owner


def reset_gesture_owner() -> None:
    """Drop the process-wide GestureOwner."""
    global _global_owner
    _global_owner = None
