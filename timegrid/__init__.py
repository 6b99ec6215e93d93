"""
Timegrid Engine

Qt-free core of the week planner:
- Configuration parsing (config.py)
- Time/pixel conversions and snapping (time_mapping.py)
- Timed item records (timed_item.py)
- Day column to date mapping (day_window.py)
- Column layout of overlapping items (event_layout.py)
- Drag selection, drag-and-drop and scrollbar controllers
  (selection.py, relocation.py, scrollbar.py, gestures.py)
- Working set of items (item_set.py)
"""

from .config import Config
from .time_mapping import TimeMapper, TimeFormatError, parse_time_to_minutes, format_minutes
from .timed_item import TimedItem, Task, Achievement, TimeInterval, achievement_as_task, load_items
from .day_window import DayWindow
from .event_layout import LayoutAssignment, layout, layout_days
from .gestures import Gesture, GestureOwner, get_gesture_owner
from .selection import SelectionController, SelectionState, CreateRequest
from .relocation import RelocationController
from .scrollbar import ScrollbarController, ThumbGeometry
from .item_set import ItemSet

__all__ = [
    'Config',
    'TimeMapper',
    'TimeFormatError',
    'parse_time_to_minutes',
    'format_minutes',
    'TimedItem',
    'Task',
    'Achievement',
    'TimeInterval',
    'achievement_as_task',
    'load_items',
    'DayWindow',
    'LayoutAssignment',
    'layout',
    'layout_days',
    'Gesture',
    'GestureOwner',
    'get_gesture_owner',
    'SelectionController',
    'SelectionState',
    'CreateRequest',
    'RelocationController',
    'ScrollbarController',
    'ThumbGeometry',
    'ItemSet',
]
