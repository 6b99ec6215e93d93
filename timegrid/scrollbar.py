"""
Geometry and dragging for the time grid's custom scrollbar.
"""

from dataclasses import dataclass
from typing import Optional

from .gestures import Gesture, GestureOwner, get_gesture_owner


@dataclass(frozen=True)
class ThumbGeometry:
    """Thumb size and position as percentages of the track."""
    height_percent: float
    top_percent: float


class ScrollbarController:
    """Maps between scroll offsets and thumb/track positions."""

    def __init__(self, gesture_owner: Optional[GestureOwner] = None, min_thumb_percent: float = 10):
        self._gestures = gesture_owner if gesture_owner is not None else get_gesture_owner()
        self.min_thumb_percent = min_thumb_percent
        self._dragging = False

    @property
    def dragging(self) -> bool:
        return self._dragging

    def thumb_geometry(self, scroll_height: float, client_height: float,
                       scroll_top: float) -> Optional[ThumbGeometry]:
        """Thumb geometry, or None when the content fits without scrolling."""
        if scroll_height <= client_height:
            return None

        ratio = client_height / scroll_height
        height_percent = max(ratio * 100, self.min_thumb_percent)

        scroll_percent = scroll_top / (scroll_height - client_height)
        top_percent = scroll_percent * (100 - height_percent)
        return ThumbGeometry(height_percent, top_percent)

    def scroll_top_for(self, pointer_y: float, track_height: float,
                       scroll_height: float, client_height: float) -> float:
        """Scroll offset for a pointer position on the track."""
        if track_height <= 0:
            return 0.0
        scroll_percent = max(0.0, min(1.0, pointer_y / track_height))
        return scroll_percent * max(0.0, scroll_height - client_height)

    def begin_drag(self) -> bool:
        """Start dragging the thumb. Fails while another gesture is active."""
        if not self._gestures.acquire(Gesture.SCROLLBAR_DRAGGING):
            return False
        self._dragging = True
        return True

    def drag_to(self, pointer_y: float, track_height: float,
                scroll_height: float, client_height: float) -> Optional[float]:
        """New scroll offset while dragging, None when not dragging."""
        if not self._dragging:
            return None
        return self.scroll_top_for(pointer_y, track_height, scroll_height, client_height)

    def end_drag(self) -> None:
        if self._dragging:
            self._dragging = False
            self._gestures.release(Gesture.SCROLLBAR_DRAGGING)
