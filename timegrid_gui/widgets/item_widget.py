"""
Item Widget for displaying individual tasks in the week grid.

Shows item blocks colored by urgency with title, time range, project and a
progress bar. Supports drag-and-drop for moving items and resize handles
for changing their start or end.
"""

from enum import Enum

from PySide6.QtWidgets import QLabel, QVBoxLayout, QFrame, QSizePolicy, QMenu, QWidget
from PySide6.QtCore import Qt, Signal, QPoint, QRectF
from PySide6.QtGui import QColor, QFont, QMouseEvent, QPainter, QBrush

from timegrid.config import ColorsConfig, LabelsConfig
from timegrid.timed_item import Task


class DragMode(Enum):
    """Type of drag operation."""
    NONE = "none"
    MOVE = "move"           # Moving the entire item
    RESIZE_TOP = "resize_top"      # Resizing by dragging top edge
    RESIZE_BOTTOM = "resize_bottom"  # Resizing by dragging bottom edge


# Module-level configs (set by MainWindow at startup via time_grid)
_colors_config: ColorsConfig = ColorsConfig()
_labels_config: LabelsConfig = LabelsConfig()


def set_item_colors_config(config: ColorsConfig):
    """Set the colors configuration for item widgets."""
    global _colors_config
    _colors_config = config


def set_item_labels_config(config: LabelsConfig):
    """Set the labels configuration for item widgets."""
    global _labels_config
    _labels_config = config


def darken_color(hex_color: str, factor: float = 0.5) -> str:
    """Darken a hex color by the given factor."""
    color = hex_color.lstrip('#')
    if len(color) == 3:
        color = ''.join([c*2 for c in color])

    try:
        r = int(color[0:2], 16)
        g = int(color[2:4], 16)
        b = int(color[4:6], 16)
    except (ValueError, IndexError):
        return hex_color

    r = int(r * (1 - factor))
    g = int(g * (1 - factor))
    b = int(b * (1 - factor))

    return f"#{r:02x}{g:02x}{b:02x}"


class ItemWidget(QFrame):
    """
    Widget representing a single item in the week grid.

    Displays the title, time range and project. Achievements use this
    widget directly and cannot be dragged.
    """

    # Signal emitted when the item is clicked
    clicked = Signal(object)

    # Progress bar height in pixels
    PROGRESS_HEIGHT = 3

    def __init__(self, item: Task, selected: bool = False, parent: QWidget = None):
        super().__init__(parent)
        self.item = item
        self.selected = selected

        self._setup_ui()
        self._apply_style()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 2, 4, 2 + self.PROGRESS_HEIGHT)
        layout.setSpacing(0)
        layout.setAlignment(Qt.AlignTop)

        title_label = QLabel(' '.join(self.item.title.split()))
        title_label.setWordWrap(False)
        title_label.setTextFormat(Qt.PlainText)
        title_font = QFont(self.font())
        title_font.setBold(True)
        title_label.setFont(title_font)
        layout.addWidget(title_label)

        time_label = QLabel(f"{self.item.start_time} - {self.item.end_time}")
        time_label.setTextFormat(Qt.PlainText)
        layout.addWidget(time_label)

        if self.item.project:
            project_label = QLabel(self.item.project)
            project_label.setTextFormat(Qt.PlainText)
            layout.addWidget(project_label)

        self.setFrameStyle(QFrame.StyledPanel | QFrame.Plain)
        self.setCursor(Qt.PointingHandCursor)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Minimum)
        self.setToolTip(
            f"<b>{self.item.title}</b><br>{self.item.start_time} - {self.item.end_time}"
            + (f"<br><i>{self.item.project}</i>" if self.item.project else "")
        )

    def _apply_style(self) -> None:
        """Apply color styling based on the item's urgency."""
        bg_color = _colors_config.urgency_color(self.item.urgency)
        text_color = darken_color(bg_color, 0.7)
        border_color = _colors_config.selected_item_border if self.selected else darken_color(bg_color, 0.15)
        border_width = 2 if self.selected else 1

        self.setStyleSheet(f"""
            ItemWidget, DraggableItemWidget {{
                background-color: {bg_color};
                border: {border_width}px solid {border_color};
                border-radius: 4px;
                color: {text_color};
            }}
            QLabel {{
                color: {text_color};
                background: transparent;
                border: none;
                padding: 0px;
                margin: 0px;
            }}
        """)

    def mousePressEvent(self, mouse_event: QMouseEvent) -> None:
        if mouse_event.button() == Qt.LeftButton:
            self.clicked.emit(self.item)
            # Presses on an item never start a grid selection
            mouse_event.accept()
            return
        super().mousePressEvent(mouse_event)

    def paintEvent(self, event) -> None:
        """Draw the progress bar along the bottom edge."""
        super().paintEvent(event)

        progress = max(0, min(100, self.item.progress))
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setPen(Qt.NoPen)

        w = self.width() - 4
        y = self.height() - self.PROGRESS_HEIGHT - 2
        painter.setBrush(QBrush(QColor(0, 0, 0, 50)))
        painter.drawRoundedRect(QRectF(2, y, w, self.PROGRESS_HEIGHT), 1.5, 1.5)
        if progress:
            bg_color = _colors_config.urgency_color(self.item.urgency)
            painter.setBrush(QBrush(QColor(darken_color(bg_color, 0.5))))
            painter.drawRoundedRect(QRectF(2, y, w * progress / 100, self.PROGRESS_HEIGHT), 1.5, 1.5)

        painter.end()


class DraggableItemWidget(ItemWidget):
    """
    ItemWidget with drag-and-drop, resize support and a context menu.

    Drag the body to move the item to another time or day, drag the top or
    bottom edge to change its start or end.
    """

    # Signals for drag operations
    drag_started = Signal(object, DragMode)  # Item, drag mode
    drag_moved = Signal(object, DragMode, QPoint)  # Item, mode, global position
    drag_finished = Signal(object, DragMode, QPoint)  # Item, mode, final global position

    # Context menu actions
    duplicate_requested = Signal(str)
    delete_requested = Signal(str)
    urgency_changed = Signal(str, str)

    # Resize zone height in pixels
    RESIZE_ZONE_HEIGHT = 6

    # Drag threshold in pixels (to distinguish from click)
    DRAG_THRESHOLD = 5

    def __init__(self, item: Task, selected: bool = False, parent: QWidget = None):
        super().__init__(item, selected, parent)

        # Drag state
        self._drag_mode = DragMode.NONE
        self._press_pos: QPoint = None
        self._is_dragging = False

        # Enable mouse tracking for cursor changes
        self.setMouseTracking(True)
        self.setContextMenuPolicy(Qt.CustomContextMenu)
        self.customContextMenuRequested.connect(self._show_context_menu)

    def _get_drag_mode_at_pos(self, pos: QPoint) -> DragMode:
        """Determine what drag mode should be used based on mouse position."""
        h = self.height()
        y = pos.y()

        if y <= self.RESIZE_ZONE_HEIGHT:
            return DragMode.RESIZE_TOP
        elif y >= h - self.RESIZE_ZONE_HEIGHT:
            return DragMode.RESIZE_BOTTOM
        else:
            return DragMode.MOVE

    def _update_cursor(self, mode: DragMode) -> None:
        if mode == DragMode.RESIZE_TOP or mode == DragMode.RESIZE_BOTTOM:
            self.setCursor(Qt.SizeVerCursor)
        elif mode == DragMode.MOVE:
            self.setCursor(Qt.OpenHandCursor)
        else:
            self.setCursor(Qt.PointingHandCursor)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._press_pos is not None and event.buttons() & Qt.LeftButton:
            if not self._is_dragging:
                distance = (event.pos() - self._press_pos).manhattanLength()
                if distance >= self.DRAG_THRESHOLD:
                    self._is_dragging = True
                    self.setCursor(Qt.ClosedHandCursor)
                    self.drag_started.emit(self.item, self._drag_mode)

            if self._is_dragging:
                self.drag_moved.emit(self.item, self._drag_mode, event.globalPosition().toPoint())
        else:
            self._update_cursor(self._get_drag_mode_at_pos(event.pos()))

        # Don't call super() during drag to prevent event propagation issues
        if not self._is_dragging:
            super().mouseMoveEvent(event)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        """Handle mouse press - start potential drag."""
        if event.button() == Qt.LeftButton:
            self._press_pos = event.pos()
            self._drag_mode = self._get_drag_mode_at_pos(event.pos())
            self._is_dragging = False
            # Don't emit clicked yet - wait to see if this is a drag
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        """Handle mouse release - complete drag or emit click."""
        if event.button() == Qt.LeftButton:
            if self._is_dragging:
                self.drag_finished.emit(self.item, self._drag_mode, event.globalPosition().toPoint())
                self.setCursor(Qt.OpenHandCursor)
            elif self._press_pos is not None:
                self.clicked.emit(self.item)

            # Reset drag state
            self._press_pos = None
            self._drag_mode = DragMode.NONE
            self._is_dragging = False
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    def leaveEvent(self, event) -> None:
        if not self._is_dragging:
            self.setCursor(Qt.PointingHandCursor)
        super().leaveEvent(event)

    def _show_context_menu(self, pos: QPoint) -> None:
        menu = QMenu(self)
        duplicate_action = menu.addAction(_labels_config.action_duplicate)
        delete_action = menu.addAction(_labels_config.action_delete)

        urgency_menu = menu.addMenu(_labels_config.urgency_menu)
        urgency_actions = {}
        for urgency in ("high", "medium", "low"):
            action = urgency_menu.addAction(urgency)
            action.setCheckable(True)
            action.setChecked(self.item.urgency == urgency)
            urgency_actions[action] = urgency

        chosen = menu.exec(self.mapToGlobal(pos))
        if chosen is None:
            return
        if chosen is duplicate_action:
            self.duplicate_requested.emit(self.item.id)
        elif chosen is delete_action:
            self.delete_requested.emit(self.item.id)
        elif chosen in urgency_actions:
            self.urgency_changed.emit(self.item.id, urgency_actions[chosen])
