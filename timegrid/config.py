"""
Configuration parser for Timegrid.

Handles TOML file parsing into plain dataclasses.
"""

import tomllib
import os
import sys
from datetime import datetime
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional


_debug_enabled: bool = False


def set_debug(enabled: bool):
    """Enable or disable debug output on stderr."""
    global _debug_enabled
    _debug_enabled = enabled


def debug_print(message: str) -> None:
    if not _debug_enabled:
        return
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] {message}", file=sys.stderr)


@dataclass
class GridConfig:
    """Configuration for the time grid geometry and snapping."""
    hour_height: int = 60  # Height of an hour slot in pixels
    drop_snap_minutes: int = 15  # Granularity of drag-and-drop placement
    min_selection_minutes: int = 30  # Shorter drag selections are discarded
    min_item_height: int = 30  # Visual floor for short items, in pixels
    selection_snap_divisions: int = 4  # Selection snaps to hour_height / divisions

    def validate(self) -> None:
        if self.hour_height <= 0:
            raise ValueError(f"hour_height must be positive, got {self.hour_height}")
        if self.drop_snap_minutes <= 0:
            raise ValueError(f"drop_snap_minutes must be positive, got {self.drop_snap_minutes}")
        if self.selection_snap_divisions <= 0:
            raise ValueError(
                f"selection_snap_divisions must be positive, got {self.selection_snap_divisions}"
            )
        if self.min_selection_minutes < 0:
            raise ValueError(
                f"min_selection_minutes must not be negative, got {self.min_selection_minutes}"
            )


@dataclass
class WeekConfig:
    """Configuration for the seven-day window."""
    first_weekday: int = 0  # 0=Monday, 6=Sunday
    day_names: list[str] = None  # Mon Tue Wed Thu Fri Sat Sun

    def __post_init__(self):
        if self.day_names is None:
            self.day_names = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

    def get_day_name(self, weekday: int) -> str:
        """Get localized day name for weekday (0=Monday, 6=Sunday)."""
        return self.day_names[weekday] if 0 <= weekday < len(self.day_names) else ""


@dataclass
class BindingsConfig:
    """Configuration for keyboard bindings."""
    next: str = "Right"  # Key to go to next week
    prev: str = "Left"   # Key to go to previous week
    today: str = "T"     # Key to jump to the current week


@dataclass
class ColorsConfig:
    """Configuration for UI colors."""
    day_column_background: str = "#ffffff"
    hour_line: str = "#e8e8e8"
    half_hour_line: str = "#f3f3f3"
    cell_border: str = "#e0e0e0"
    header_background: str = "#f5f5f5"
    today_highlight_background: str = "#e3f2fd"
    today_highlight_text: str = "#1976d2"
    selection_fill: str = "rgba(25, 118, 210, 0.2)"
    selection_border: str = "#1976d2"
    selected_item_border: str = "#1976d2"
    scrollbar_thumb: str = "#c8c8c8"

    urgency_high: str = "#fee2e2"
    urgency_medium: str = "#dbeafe"
    urgency_low: str = "#dcfce7"

    def urgency_color(self, urgency: str) -> str:
        return {
            "high": self.urgency_high,
            "medium": self.urgency_medium,
            "low": self.urgency_low,
        }.get(urgency, self.urgency_medium)


@dataclass
class LabelsConfig:
    """Configuration for UI labels."""
    window_title: str = "Timegrid"
    new_item_title: str = "New Task"
    copy_suffix: str = " (copy)"
    button_prev: str = "◀"
    button_next: str = "▶"
    button_today: str = "Today"
    action_duplicate: str = "Duplicate"
    action_delete: str = "Delete"
    urgency_menu: str = "Urgency"


@dataclass
class Config:
    """Main configuration container for Timegrid."""

    grid: GridConfig = field(default_factory=GridConfig)
    week: WeekConfig = field(default_factory=WeekConfig)
    bindings: BindingsConfig = field(default_factory=BindingsConfig)
    colors: ColorsConfig = field(default_factory=ColorsConfig)
    labels: LabelsConfig = field(default_factory=LabelsConfig)

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'timegrid' / 'timegrid.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """
        Load configuration from a TOML file.

        An explicit path must exist. Without a path the default location is
        tried and built-in defaults are used when nothing is there.
        """
        if config_path is None:
            config_path = cls.get_default_config_path()
            if not config_path.exists():
                debug_print(f"No configuration at {config_path}, using defaults")
                return cls()

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Build a configuration from already parsed TOML data."""
        grid_data = data.get('Grid', {})
        grid = GridConfig(
            hour_height=grid_data.get('hour_height', GridConfig.hour_height),
            drop_snap_minutes=grid_data.get('drop_snap_minutes', GridConfig.drop_snap_minutes),
            min_selection_minutes=grid_data.get('min_selection_minutes', GridConfig.min_selection_minutes),
            min_item_height=grid_data.get('min_item_height', GridConfig.min_item_height),
            selection_snap_divisions=grid_data.get(
                'selection_snap_divisions', GridConfig.selection_snap_divisions
            ),
        )
        grid.validate()

        week_data = data.get('Week', {})
        first_weekday = week_data.get('first_weekday', WeekConfig.first_weekday)
        if not 0 <= first_weekday <= 6:
            raise ValueError(f"first_weekday must be between 0 and 6, got {first_weekday}")
        # Space-separated day names (if provided)
        day_names_str = week_data.get('day_names', '')
        week = WeekConfig(
            first_weekday=first_weekday,
            day_names=day_names_str.split() if day_names_str else None,
        )

        colors_data = data.get('Colors', {})
        colors = ColorsConfig(**{
            name: colors_data[name]
            for name in ColorsConfig.__dataclass_fields__
            if name in colors_data
        })

        bindings_data = data.get('Bindings', {})
        bindings = BindingsConfig(
            next=bindings_data.get('next', BindingsConfig.next),
            prev=bindings_data.get('prev', BindingsConfig.prev),
            today=bindings_data.get('today', BindingsConfig.today),
        )

        labels_data = data.get('Labels', {})
        labels = LabelsConfig(**{
            name: labels_data[name]
            for name in LabelsConfig.__dataclass_fields__
            if name in labels_data
        })

        debug_print(
            f"grid hour_height={grid.hour_height} "
            f"drop_snap={grid.drop_snap_minutes} min_selection={grid.min_selection_minutes}"
        )

        return cls(grid=grid, week=week, bindings=bindings, colors=colors, labels=labels)
