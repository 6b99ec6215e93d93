"""
The fixed window of consecutive dates shown as day columns.
"""

from datetime import date, timedelta
from typing import Optional


class DayWindow:
    """Maps day column indices (0..length-1) to calendar dates."""

    def __init__(self, start: date, length: int = 7):
        self.start = start
        self.length = length

    @classmethod
    def week_of(cls, day: date, first_weekday: int = 0) -> 'DayWindow':
        """Window of the week containing day (first_weekday: 0=Monday, 6=Sunday)."""
        offset = (day.weekday() - first_weekday) % 7
        return cls(day - timedelta(days=offset))

    def day(self, day_index: int) -> date:
        if not 0 <= day_index < self.length:
            raise IndexError(f"Day index {day_index} outside window of {self.length} days")
        return self.start + timedelta(days=day_index)

    def date_for(self, day_index: int) -> str:
        """ISO date string for a day column."""
        return self.day(day_index).isoformat()

    def index_of(self, iso_date: str) -> Optional[int]:
        """Day column of an ISO date, or None when outside the window."""
        offset = (date.fromisoformat(iso_date) - self.start).days
        if 0 <= offset < self.length:
            return offset
        return None

    def dates(self) -> list[date]:
        return [self.start + timedelta(days=i) for i in range(self.length)]

    def shifted(self, weeks: int) -> 'DayWindow':
        return DayWindow(self.start + timedelta(weeks=weeks), self.length)

    def __contains__(self, iso_date: str) -> bool:
        return self.index_of(iso_date) is not None

    def __repr__(self):
        return f"DayWindow(start={self.start.isoformat()}, length={self.length})"
