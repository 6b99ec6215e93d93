"""
Timegrid GUI Widgets

Custom widgets for displaying the week grid.
"""

from .item_widget import ItemWidget, DraggableItemWidget, DragMode
from .time_grid import DayColumnWidget, GridScrollBar, WeekView

__all__ = ['ItemWidget', 'DraggableItemWidget', 'DragMode', 'DayColumnWidget', 'GridScrollBar', 'WeekView']
