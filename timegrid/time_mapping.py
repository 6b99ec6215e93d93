"""
Conversions between "HH:MM" strings, minutes since midnight and pixel offsets.

All vertical geometry of the time grid goes through this module. Rounding is
half-up everywhere: a value exactly between two grid lines snaps to the
later one, independent of Python's banker's rounding.
"""

import math
import re
from dataclasses import dataclass

from .config import GridConfig


_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


class TimeFormatError(ValueError):
    """Raised for time strings that are not "HH:MM"."""


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def parse_time_to_minutes(time: str) -> int:
    """
    Parse an "HH:MM" string into minutes since midnight.

    Hours of 24 and above are accepted: a relocated item may end after
    midnight (e.g. "24:30").

    Raises:
        TimeFormatError: If the string is not "HH:MM" or minutes exceed 59.
    """
    m = _TIME_RE.match(time.strip()) if isinstance(time, str) else None
    if not m:
        raise TimeFormatError(f"Malformed time string: {time!r}")
    hours = int(m.group(1))
    minutes = int(m.group(2))
    if minutes >= 60:
        raise TimeFormatError(f"Minutes out of range in time string: {time!r}")
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as a zero-padded "HH:MM" string."""
    if minutes < 0:
        raise ValueError(f"Cannot format negative minutes: {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def minutes_to_top_pixels(minutes: float, px_per_hour: float) -> float:
    return minutes / 60 * px_per_hour


def duration_to_height_pixels(start_minutes: float, end_minutes: float, px_per_hour: float) -> float:
    return (end_minutes - start_minutes) / 60 * px_per_hour


def pixels_to_minutes(pixels: float, px_per_hour: float) -> int:
    return round_half_up(pixels / px_per_hour * 60)


def snap_minutes(minutes: float, granularity: int) -> int:
    """Round minutes to the nearest multiple of granularity."""
    return round_half_up(minutes / granularity) * granularity


def snap_pixels(y: float, px_per_hour: float, divisions: int = 4) -> float:
    """Snap a pixel offset to the nearest px_per_hour/divisions boundary."""
    step = px_per_hour / divisions
    return round_half_up(y / step) * step


def pixels_to_minutes_in_slot(slot_index: int, relative_y: float, px_per_hour: float) -> int:
    """
    Minutes for a point inside an hour slot.

    The slot index gives the hour; relative_y is the offset from the top of
    that slot.
    """
    return slot_index * 60 + round_half_up(relative_y / px_per_hour * 60)


def top_position(time: str, px_per_hour: float) -> float:
    """Top pixel offset of an item starting at the given time."""
    return minutes_to_top_pixels(parse_time_to_minutes(time), px_per_hour)


@dataclass(frozen=True)
class TimeMapper:
    """Time/pixel conversions bound to one grid scale."""
    px_per_hour: int = 60
    drop_snap_minutes: int = 15
    min_item_height: int = 30
    selection_snap_divisions: int = 4

    @classmethod
    def from_config(cls, config: GridConfig) -> 'TimeMapper':
        return cls(
            px_per_hour=config.hour_height,
            drop_snap_minutes=config.drop_snap_minutes,
            min_item_height=config.min_item_height,
            selection_snap_divisions=config.selection_snap_divisions,
        )

    def minutes_to_pixels(self, minutes: float) -> float:
        return minutes_to_top_pixels(minutes, self.px_per_hour)

    def pixels_to_minutes(self, pixels: float) -> int:
        return pixels_to_minutes(pixels, self.px_per_hour)

    def height_for(self, start_minutes: float, end_minutes: float) -> float:
        return duration_to_height_pixels(start_minutes, end_minutes, self.px_per_hour)

    def snap_selection_y(self, y: float) -> float:
        return snap_pixels(y, self.px_per_hour, self.selection_snap_divisions)

    def drop_minutes(self, slot_index: int, relative_y: float) -> int:
        """Minutes of a drop point, snapped to the drop granularity."""
        raw = pixels_to_minutes_in_slot(slot_index, relative_y, self.px_per_hour)
        return snap_minutes(raw, self.drop_snap_minutes)

    def item_geometry(self, item) -> tuple[float, float]:
        """
        Return (top, height) in pixels for a timed item.

        Height never drops below min_item_height; stored times are unaffected.
        """
        start = parse_time_to_minutes(item.start_time)
        end = parse_time_to_minutes(item.end_time)
        top = top_position(item.start_time, self.px_per_hour)
        height = max(self.height_for(start, end), self.min_item_height)
        return top, height
