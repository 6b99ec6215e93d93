"""
Week time grid: seven day columns with absolutely positioned items.
"""

from datetime import date, datetime
from typing import Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QScrollArea, QFrame,
    QApplication, QToolTip,
)
from PySide6.QtCore import Qt, Signal, QTimer, QPoint
from PySide6.QtGui import QMouseEvent, QPainter, QColor, QBrush

from timegrid.config import Config, ColorsConfig, WeekConfig
from timegrid.day_window import DayWindow
from timegrid.event_layout import LayoutAssignment
from timegrid.relocation import RelocationController
from timegrid.scrollbar import ScrollbarController
from timegrid.selection import SelectionController
from timegrid.time_mapping import TimeMapper, format_minutes, parse_time_to_minutes, snap_minutes
from timegrid.timed_item import Task
from .item_widget import (
    ItemWidget, DraggableItemWidget, DragMode,
    set_item_colors_config, set_item_labels_config,
)

# Module-level configs (set by MainWindow at startup)
_colors_config: ColorsConfig = ColorsConfig()
_week_config: WeekConfig = WeekConfig()


def set_grid_configs(config: Config):
    """Set the configuration for this module and item widgets."""
    global _colors_config, _week_config
    _colors_config = config.colors
    _week_config = config.week
    set_item_colors_config(config.colors)
    set_item_labels_config(config.labels)


TIME_COLUMN_WIDTH = 48
HOURS = 24


class DayColumnWidget(QWidget):
    """
    A single day column with absolute positioning for items.

    Items span according to their duration; overlapping items are placed
    side by side. Dragging over empty space selects a span for a new item,
    dragging an item moves or resizes it.
    """

    create_requested = Signal(object)  # CreateRequest
    item_clicked = Signal(object)
    item_dropped = Signal(str, int, int)  # item id, day index, start minutes
    item_resized = Signal(str, str, str)  # item id, start time, end time
    duplicate_requested = Signal(str)
    delete_requested = Signal(str)
    urgency_changed = Signal(str, str)

    def __init__(self, day_index: int, for_date: date, mapper: TimeMapper, relocation: RelocationController,
                 selection: SelectionController, parent=None):
        super().__init__(parent)
        self.day_index = day_index
        self._date = for_date
        self._mapper = mapper
        self._relocation = relocation
        self._selection = selection
        self._layout: list[LayoutAssignment] = []
        self._editable_ids: set[str] = set()
        self._selected_id: Optional[str] = None
        self._item_widgets: list[ItemWidget] = []

        # Drag state
        self._dragging_item: Optional[Task] = None

        self._setup_ui()
        self._setup_time_indicator()

    def _setup_ui(self):
        hour_height = self._mapper.px_per_hour
        self.setFixedHeight(HOURS * hour_height)
        self.setMinimumWidth(100)
        self.setStyleSheet(f"background-color: {_colors_config.day_column_background};")

        # Hour lines with a fainter half-hour mark
        for hour in range(HOURS):
            if hour > 0:
                line = QFrame(self)
                line.setStyleSheet(f"background-color: {_colors_config.hour_line};")
                line.setGeometry(0, hour * hour_height, 4000, 1)
            half = QFrame(self)
            half.setStyleSheet(f"background-color: {_colors_config.half_hour_line};")
            half.setGeometry(0, hour * hour_height + hour_height // 2, 4000, 1)

        self._selection_overlay = QFrame(self)
        self._selection_overlay.setStyleSheet(
            f"background-color: {_colors_config.selection_fill}; "
            f"border: 2px solid {_colors_config.selection_border}; border-radius: 2px;"
        )
        self._selection_overlay.setAttribute(Qt.WA_TransparentForMouseEvents)
        self._selection_overlay.hide()

    def _setup_time_indicator(self):
        """Set up the current time indicator line."""
        self._time_indicator = QFrame(self)
        self._time_indicator.setStyleSheet("background-color: #d32f2f;")
        self._time_indicator.setAttribute(Qt.WA_TransparentForMouseEvents)

        self._time_timer = QTimer(self)
        self._time_timer.timeout.connect(self._update_time_indicator)
        self._time_timer.start(60000)
        self._update_time_indicator()

    def _update_time_indicator(self):
        if self._date != date.today():
            self._time_indicator.hide()
            return
        self._time_indicator.show()
        now = datetime.now()
        y_pos = int(self._mapper.minutes_to_pixels(now.hour * 60 + now.minute))
        self._time_indicator.setGeometry(0, y_pos, self.width(), 2)
        self._time_indicator.raise_()

    @property
    def column_date(self) -> date:
        return self._date

    def set_date(self, new_date: date):
        self._date = new_date
        self._update_time_indicator()

    def set_layout(self, assignments: list[LayoutAssignment], editable_ids: set[str],
                   selected_id: Optional[str] = None):
        """Replace the items shown in this column."""
        self._layout = list(assignments)
        self._editable_ids = editable_ids
        self._selected_id = selected_id
        self._create_item_widgets()

    def _create_item_widgets(self):
        for widget in self._item_widgets:
            widget.deleteLater()
        self._item_widgets.clear()

        for assignment in self._layout:
            item = assignment.item
            selected = item.id == self._selected_id
            if item.id in self._editable_ids:
                widget = DraggableItemWidget(item, selected=selected, parent=self)
                widget.drag_started.connect(self._on_drag_started)
                widget.drag_moved.connect(self._on_drag_moved)
                widget.drag_finished.connect(self._on_drag_finished)
                widget.duplicate_requested.connect(self.duplicate_requested.emit)
                widget.delete_requested.connect(self.delete_requested.emit)
                widget.urgency_changed.connect(self.urgency_changed.emit)
            else:
                widget = ItemWidget(item, selected=selected, parent=self)
            widget.clicked.connect(self.item_clicked.emit)
            self._item_widgets.append(widget)
            widget.show()

        self._position_item_widgets()
        self._time_indicator.raise_()

    def _position_item_widgets(self):
        """Position all item widgets based on their layout."""
        available_width = self.width() - 4  # Leave 2px margin on each side

        for widget, assignment in zip(self._item_widgets, self._layout):
            top, height = self._mapper.item_geometry(assignment.item)
            x = 2 + int(assignment.left_fraction * available_width)
            width = int(assignment.width_fraction * available_width) - 1  # 1px gap between columns
            widget.setGeometry(x, int(top) + 1, max(width, 1), int(height) - 2)

    # ==================== Selection ====================

    def _is_on_item(self, pos: QPoint) -> bool:
        child = self.childAt(pos)
        while child is not None and child is not self:
            if isinstance(child, ItemWidget):
                return True
            child = child.parentWidget()
        return False

    def _update_selection_overlay(self):
        preview = self._selection.preview()
        if preview is None or preview[0] != self.day_index:
            self._selection_overlay.hide()
            return
        _, top, height = preview
        self._selection_overlay.setGeometry(0, int(top), self.width(), max(int(height), 1))
        self._selection_overlay.show()
        self._selection_overlay.raise_()

    def _finish_selection(self, request):
        self._update_selection_overlay()
        if request is not None:
            self.create_requested.emit(request)

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.LeftButton:
            pos = event.position().toPoint()
            if self._selection.pointer_down(self.day_index, pos.y(), on_item=self._is_on_item(pos)):
                self._update_selection_overlay()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        pos = event.position().toPoint()
        preview = self._selection.preview()
        if preview is not None and preview[0] == self.day_index:
            if 0 <= pos.x() < self.width():
                self._selection.pointer_move(self.day_index, pos.y())
                self._update_selection_overlay()
            else:
                # The pointer left this column: the selection ends here
                self._finish_selection(self._selection.pointer_leave(self.day_index))
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() == Qt.LeftButton:
            preview = self._selection.preview()
            if preview is not None and preview[0] == self.day_index:
                self._finish_selection(self._selection.pointer_up())
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        preview = self._selection.preview()
        if preview is not None and preview[0] == self.day_index:
            self._finish_selection(self._selection.pointer_leave(self.day_index))
        super().leaveEvent(event)

    # ==================== Drag and drop ====================

    def _y_to_minutes(self, y: int) -> int:
        """Convert Y position to minutes, snapped to the drop granularity."""
        minutes = self._mapper.pixels_to_minutes(max(0, min(self.height(), y)))
        return snap_minutes(minutes, self._mapper.drop_snap_minutes)

    def _drop_minutes_at(self, y: int) -> int:
        """Minutes for a drop at y, resolved through the hour slot under it."""
        hour_height = self._mapper.px_per_hour
        slot_index = max(0, min(HOURS - 1, int(y // hour_height)))
        relative_y = y - slot_index * hour_height
        return self._relocation.drop_minutes(slot_index, relative_y)

    def _find_target_day_column(self, global_pos) -> tuple['DayColumnWidget', int]:
        """Find which DayColumnWidget is under the global position.

        Returns:
            Tuple of (target_column, local_y) where the item should be placed.
        """
        target = self
        local_y = self.mapFromGlobal(global_pos).y()

        widget_at_pos = QApplication.widgetAt(global_pos)
        current = widget_at_pos
        while current is not None:
            if isinstance(current, DayColumnWidget):
                target = current
                local_y = current.mapFromGlobal(global_pos).y()
                break
            current = current.parentWidget()

        return (target, local_y)

    def _resized_times(self, item: Task, mode: DragMode, y: int) -> tuple[str, str]:
        start = parse_time_to_minutes(item.start_time)
        end = parse_time_to_minutes(item.end_time)
        snap = self._mapper.drop_snap_minutes
        if mode == DragMode.RESIZE_TOP:
            start = self._y_to_minutes(y)
            # Don't allow start after end
            if start >= end:
                start = end - snap
        else:
            end = self._y_to_minutes(y)
            # Don't allow end before start
            if end <= start:
                end = start + snap
        return format_minutes(max(0, start)), format_minutes(end)

    def _on_drag_started(self, item: Task, mode: DragMode):
        self._dragging_item = item

    def _on_drag_moved(self, item: Task, mode: DragMode, global_pos):
        """Show the projected times as a tooltip during the drag."""
        if self._dragging_item is None:
            return
        if mode == DragMode.MOVE:
            target, y = self._find_target_day_column(global_pos)
            start = target._drop_minutes_at(y)
            duration = parse_time_to_minutes(item.end_time) - parse_time_to_minutes(item.start_time)
            time_str = f"{format_minutes(max(0, start))} - {format_minutes(max(0, start) + duration)}"
        elif mode in (DragMode.RESIZE_TOP, DragMode.RESIZE_BOTTOM):
            y = self.mapFromGlobal(global_pos).y()
            start_str, end_str = self._resized_times(item, mode, y)
            time_str = f"{start_str} - {end_str}"
        else:
            return
        QToolTip.showText(global_pos, time_str, self)

    def _on_drag_finished(self, item: Task, mode: DragMode, global_pos):
        """Handle drag completion - calculate new times and emit signal."""
        if self._dragging_item is None:
            return
        self._dragging_item = None

        if mode == DragMode.MOVE:
            target, y = self._find_target_day_column(global_pos)
            minutes = max(0, target._drop_minutes_at(y))
            self.item_dropped.emit(item.id, target.day_index, minutes)
        elif mode in (DragMode.RESIZE_TOP, DragMode.RESIZE_BOTTOM):
            y = self.mapFromGlobal(global_pos).y()
            start_str, end_str = self._resized_times(item, mode, y)
            self.item_resized.emit(item.id, start_str, end_str)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._position_item_widgets()
        self._update_time_indicator()
        self._update_selection_overlay()


class GridScrollBar(QWidget):
    """
    Thin custom scrollbar for the time grid.

    Thumb dragging shares the global gesture owner with drag selection, so a
    selection in progress blocks the thumb and the other way round.
    """

    WIDTH = 12

    def __init__(self, scroll_area: QScrollArea, controller: ScrollbarController, parent=None):
        super().__init__(parent)
        self._scroll_area = scroll_area
        self._controller = controller
        self._hovered = False
        self.setFixedWidth(self.WIDTH)
        self.setMouseTracking(True)

        bar = scroll_area.verticalScrollBar()
        bar.valueChanged.connect(self.update)
        bar.rangeChanged.connect(lambda *_: self.update())

    def _metrics(self) -> tuple[float, float, float]:
        """Return (scroll_height, client_height, scroll_top)."""
        bar = self._scroll_area.verticalScrollBar()
        client_height = self._scroll_area.viewport().height()
        scroll_height = bar.maximum() + client_height
        return scroll_height, client_height, bar.value()

    def _scroll_to(self, pointer_y: float, dragging: bool):
        scroll_height, client_height, _ = self._metrics()
        if dragging:
            top = self._controller.drag_to(pointer_y, self.height(), scroll_height, client_height)
        else:
            top = self._controller.scroll_top_for(pointer_y, self.height(), scroll_height, client_height)
        if top is not None:
            self._scroll_area.verticalScrollBar().setValue(int(top))

    def _thumb_rect(self) -> Optional[tuple[float, float]]:
        geometry = self._controller.thumb_geometry(*self._metrics())
        if geometry is None:
            return None
        h = self.height()
        return geometry.top_percent / 100 * h, geometry.height_percent / 100 * h

    def paintEvent(self, event):
        thumb = self._thumb_rect()
        if thumb is None or not (self._hovered or self._controller.dragging):
            return
        top, height = thumb
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(QColor(_colors_config.scrollbar_thumb)))
        painter.drawRoundedRect(2, int(top), self.width() - 4, int(height), 4, 4)
        painter.end()

    def enterEvent(self, event):
        self._hovered = True
        self.update()
        super().enterEvent(event)

    def leaveEvent(self, event):
        self._hovered = False
        self.update()
        super().leaveEvent(event)

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.LeftButton:
            return super().mousePressEvent(event)
        y = event.position().y()
        thumb = self._thumb_rect()
        if thumb is not None and thumb[0] <= y <= thumb[0] + thumb[1]:
            if self._controller.begin_drag():
                self.update()
        else:
            self._scroll_to(y, dragging=False)

    def mouseMoveEvent(self, event: QMouseEvent):
        if self._controller.dragging:
            self._scroll_to(event.position().y(), dragging=True)
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() == Qt.LeftButton and self._controller.dragging:
            self._controller.end_drag()
            self.update()
        super().mouseReleaseEvent(event)


class WeekView(QWidget):
    """Week view showing the seven days of a DayWindow side by side."""

    create_requested = Signal(object)
    item_clicked = Signal(object)
    item_dropped = Signal(str, int, int)
    item_resized = Signal(str, str, str)
    duplicate_requested = Signal(str)
    delete_requested = Signal(str)
    urgency_changed = Signal(str, str)

    def __init__(self, window: DayWindow, mapper: TimeMapper, relocation: RelocationController,
                 selection: SelectionController, scrollbar: ScrollbarController, parent=None):
        super().__init__(parent)
        self._window = window
        self._relocation = relocation
        self._mapper = mapper
        self._selection = selection
        self._scrollbar_controller = scrollbar
        self._day_columns: list[DayColumnWidget] = []
        self._setup_ui()

    def _setup_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        header = QWidget()
        header.setStyleSheet(f"background: {_colors_config.header_background};")
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(TIME_COLUMN_WIDTH, 0, GridScrollBar.WIDTH, 0)
        header_layout.setSpacing(1)

        self._header_labels = []
        for _ in range(self._window.length):
            label = QLabel()
            label.setAlignment(Qt.AlignCenter)
            header_layout.addWidget(label, 1)
            self._header_labels.append(label)
        main_layout.addWidget(header)

        grid_row = QHBoxLayout()
        grid_row.setContentsMargins(0, 0, 0, 0)
        grid_row.setSpacing(0)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        scroll.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        scroll.setFrameShape(QFrame.NoFrame)

        content = QWidget()
        content_layout = QHBoxLayout(content)
        content_layout.setContentsMargins(0, 0, 0, 0)
        content_layout.setSpacing(1)

        hour_height = self._mapper.px_per_hour
        time_widget = QWidget()
        time_widget.setFixedWidth(TIME_COLUMN_WIDTH)
        time_widget.setFixedHeight(HOURS * hour_height)
        time_widget.setStyleSheet(f"background: {_colors_config.header_background};")
        for hour in range(HOURS):
            lbl = QLabel(f"{hour}:00", time_widget)
            lbl.setGeometry(4, hour * hour_height + 1, TIME_COLUMN_WIDTH - 6, 16)
        content_layout.addWidget(time_widget)

        for day_index, d in enumerate(self._window.dates()):
            col = DayColumnWidget(day_index, d, self._mapper, self._relocation, self._selection)
            col.create_requested.connect(self.create_requested.emit)
            col.item_clicked.connect(self.item_clicked.emit)
            col.item_dropped.connect(self.item_dropped.emit)
            col.item_resized.connect(self.item_resized.emit)
            col.duplicate_requested.connect(self.duplicate_requested.emit)
            col.delete_requested.connect(self.delete_requested.emit)
            col.urgency_changed.connect(self.urgency_changed.emit)
            content_layout.addWidget(col, 1)
            self._day_columns.append(col)

        scroll.setWidget(content)
        self._scroll = scroll
        grid_row.addWidget(scroll, 1)

        self._scrollbar = GridScrollBar(scroll, self._scrollbar_controller)
        grid_row.addWidget(self._scrollbar)
        main_layout.addLayout(grid_row, 1)

        self._update_headers()

    def get_scroll_position(self) -> int:
        return self._scroll.verticalScrollBar().value()

    def set_scroll_position(self, position: int):
        self._scroll.verticalScrollBar().setValue(position)

    def _update_headers(self):
        for label, d in zip(self._header_labels, self._window.dates()):
            day_name = _week_config.get_day_name(d.weekday())
            label.setText(f"{d.month}/{d.day}\n{day_name}")
            if d == date.today():
                label.setStyleSheet(
                    f"font-weight: bold; padding: 6px; background: {_colors_config.today_highlight_background}; "
                    f"color: {_colors_config.today_highlight_text};"
                )
            else:
                label.setStyleSheet(f"font-weight: bold; padding: 6px; background: {_colors_config.header_background};")

    def set_window(self, window: DayWindow):
        self._window = window
        for col, d in zip(self._day_columns, window.dates()):
            col.set_date(d)
        self._update_headers()

    def set_layouts(self, layouts: dict[int, list[LayoutAssignment]], editable_ids: set[str],
                    selected_id: Optional[str] = None):
        for day_index, col in enumerate(self._day_columns):
            col.set_layout(layouts.get(day_index, []), editable_ids, selected_id)
