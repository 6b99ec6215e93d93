"""
Main Window for Timegrid.

The primary application window with the week grid and navigation.
"""

from datetime import date
from typing import Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QToolBar, QPushButton, QLabel,
    QStatusBar, QSizePolicy,
)
from PySide6.QtCore import QTimer
from PySide6.QtGui import QCloseEvent, QFont, QKeySequence, QShortcut

from timegrid.config import Config, debug_print
from timegrid.day_window import DayWindow
from timegrid.gestures import get_gesture_owner
from timegrid.item_set import ItemSet
from timegrid.scrollbar import ScrollbarController
from timegrid.selection import CreateRequest, SelectionController
from timegrid.time_mapping import TimeMapper
from timegrid.timed_item import Achievement, Task

from .widgets.time_grid import WeekView, set_grid_configs


# Hour shown at the top of the grid on startup
INITIAL_SCROLL_HOUR = 8


class MainWindow(QMainWindow):
    """
    Main application window.

    Contains:
    - Toolbar with week navigation
    - Week grid with drag selection, drag-and-drop and resize
    - Status bar reporting the last change
    """

    def __init__(self, config: Config, tasks: list[Task] = (), achievements: list[Achievement] = (),
                 start_date: Optional[date] = None, parent=None):
        super().__init__(parent)
        self.config = config

        # Set configs for the grid widgets BEFORE creating UI
        set_grid_configs(config)

        self._mapper = TimeMapper.from_config(config.grid)
        window = DayWindow.week_of(start_date or date.today(), config.week.first_weekday)

        self.item_set = ItemSet(window, self._mapper, config.labels, tasks, achievements)
        self.item_set.add_listener(self._refresh_items)

        gestures = get_gesture_owner()
        self._selection = SelectionController(
            lambda day_index: self.item_set.window.date_for(day_index),
            self._mapper,
            config.grid.min_selection_minutes,
            gestures,
        )
        self._scrollbar = ScrollbarController(gestures)
        self._selected_id: Optional[str] = None

        self._setup_window()
        self._setup_ui()
        self._setup_toolbar()
        self._setup_shortcuts()
        self._setup_statusbar()

        self._refresh_items()
        QTimer.singleShot(0, lambda: self._week_view.set_scroll_position(
            int(self._mapper.minutes_to_pixels(INITIAL_SCROLL_HOUR * 60))
        ))

    def _setup_window(self):
        self.setWindowTitle(self.config.labels.window_title)
        self.setMinimumSize(800, 600)
        self.resize(1200, 800)

    def _setup_ui(self):
        main_widget = QWidget()
        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)

        self._week_view = WeekView(self.item_set.window, self._mapper, self.item_set.relocation,
                                   self._selection, self._scrollbar)
        self._week_view.create_requested.connect(self._on_create_requested)
        self._week_view.item_clicked.connect(self._on_item_clicked)
        self._week_view.item_dropped.connect(self._on_item_dropped)
        self._week_view.item_resized.connect(self._on_item_resized)
        self._week_view.duplicate_requested.connect(self._on_duplicate_requested)
        self._week_view.delete_requested.connect(self._on_delete_requested)
        self._week_view.urgency_changed.connect(self._on_urgency_changed)

        main_layout.addWidget(self._week_view)
        self.setCentralWidget(main_widget)

    def _setup_toolbar(self):
        """Set up the navigation toolbar."""
        toolbar = QToolBar("Navigation")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self._date_label = QLabel()
        date_font = QFont(self.font())
        date_font.setBold(True)
        self._date_label.setFont(date_font)
        self._date_label.setMinimumWidth(200)
        toolbar.addWidget(self._date_label)

        toolbar.addSeparator()

        self._prev_btn = QPushButton(self.config.labels.button_prev)
        self._prev_btn.setToolTip("Previous week")
        self._prev_btn.clicked.connect(self.go_previous)
        toolbar.addWidget(self._prev_btn)

        self._today_btn = QPushButton(self.config.labels.button_today)
        self._today_btn.clicked.connect(self.go_today)
        toolbar.addWidget(self._today_btn)

        self._next_btn = QPushButton(self.config.labels.button_next)
        self._next_btn.setToolTip("Next week")
        self._next_btn.clicked.connect(self.go_next)
        toolbar.addWidget(self._next_btn)

        spacer = QWidget()
        spacer.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        toolbar.addWidget(spacer)

        self._update_date_label()

    def _setup_shortcuts(self):
        """Set up keyboard shortcuts from config bindings."""
        bindings = self.config.bindings
        QShortcut(QKeySequence(bindings.prev), self).activated.connect(self.go_previous)
        QShortcut(QKeySequence(bindings.next), self).activated.connect(self.go_next)
        if bindings.today:
            QShortcut(QKeySequence(bindings.today), self).activated.connect(self.go_today)

    def _setup_statusbar(self):
        self._statusbar = QStatusBar()
        self.setStatusBar(self._statusbar)
        self._statusbar.showMessage("Ready")

    # ==================== Navigation ====================

    def _set_window(self, window: DayWindow):
        self._selection.cancel()
        self._week_view.set_window(window)
        self.item_set.set_window(window)
        self._update_date_label()

    def go_previous(self):
        self._set_window(self.item_set.window.shifted(-1))

    def go_next(self):
        self._set_window(self.item_set.window.shifted(1))

    def go_today(self):
        self._set_window(DayWindow.week_of(date.today(), self.config.week.first_weekday))

    def _update_date_label(self):
        """Update the date label in the toolbar using yyyy/mm/dd format."""
        dates = self.item_set.window.dates()
        week_start, week_end = dates[0], dates[-1]
        if week_start.year == week_end.year and week_start.month == week_end.month:
            text = f"{week_start.strftime('%Y/%m/%d')}-{week_end.day:02d}"
        else:
            text = f"{week_start.strftime('%Y/%m/%d')} - {week_end.strftime('%Y/%m/%d')}"
        self._date_label.setText(text)

    # ==================== Item changes ====================

    def _refresh_items(self):
        editable_ids = {task.id for task in self.item_set.tasks}
        self._week_view.set_layouts(self.item_set.layout_week(), editable_ids, self._selected_id)

    def _on_create_requested(self, request: CreateRequest):
        task = self.item_set.create(request)
        count = len(self.item_set.items_for_day(request.day_index))
        self._statusbar.showMessage(
            f"Created '{task.title}' {task.date} {task.start_time}-{task.end_time} ({count} items that day)", 3000
        )

    def _on_item_clicked(self, item: Task):
        self._selected_id = item.id
        self._refresh_items()

    def _on_item_dropped(self, item_id: str, day_index: int, minutes: int):
        task = self.item_set.relocate(item_id, day_index, minutes)
        self._statusbar.showMessage(f"Moved '{task.title}' to {task.date} {task.start_time}-{task.end_time}", 3000)

    def _on_item_resized(self, item_id: str, start_time: str, end_time: str):
        task = self.item_set.resize(item_id, start_time, end_time)
        self._statusbar.showMessage(f"Resized '{task.title}' to {task.start_time}-{task.end_time}", 3000)

    def _on_duplicate_requested(self, item_id: str):
        self.item_set.duplicate(item_id)

    def _on_delete_requested(self, item_id: str):
        if self._selected_id == item_id:
            self._selected_id = None
        self.item_set.delete(item_id)

    def _on_urgency_changed(self, item_id: str, urgency: str):
        self.item_set.update(item_id, urgency=urgency)

    def closeEvent(self, event: QCloseEvent):
        debug_print(f"closing with {len(self.item_set.tasks)} tasks")
        self._selection.cancel()
        self._scrollbar.end_drag()
        super().closeEvent(event)
