"""
tests/test_scrollbar.py

Covers:
  - Thumb size and position, including the minimum thumb size
  - No thumb when the content fits
  - Track position to scroll offset, clamped at both ends
  - Dragging only while the gesture is owned
"""

import pytest

from timegrid.gestures import Gesture, GestureOwner, get_gesture_owner
from timegrid.scrollbar import ScrollbarController, ThumbGeometry


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def gestures():
    return GestureOwner()


@pytest.fixture
def scrollbar(gestures):
    return ScrollbarController(gestures)


# ── Geometry ──────────────────────────────────────────────────────────────────

class TestThumbGeometry:

    def test_content_fits(self, scrollbar):
        assert scrollbar.thumb_geometry(500, 500, 0) is None
        assert scrollbar.thumb_geometry(400, 500, 0) is None

    def test_proportional_height(self, scrollbar):
        geometry = scrollbar.thumb_geometry(1440, 720, 0)
        assert geometry == ThumbGeometry(height_percent=50, top_percent=0)

    def test_bottom_position(self, scrollbar):
        geometry = scrollbar.thumb_geometry(1440, 720, 720)
        assert geometry.top_percent == pytest.approx(50)

    def test_middle_position(self, scrollbar):
        geometry = scrollbar.thumb_geometry(2000, 1000, 500)
        assert geometry.top_percent == pytest.approx(25)

    def test_minimum_thumb(self, scrollbar):
        geometry = scrollbar.thumb_geometry(10000, 100, 9900)
        assert geometry.height_percent == 10
        assert geometry.top_percent == pytest.approx(90)

    def test_custom_minimum(self, gestures):
        geometry = ScrollbarController(gestures, min_thumb_percent=20).thumb_geometry(10000, 100, 0)
        assert geometry.height_percent == 20


# ── Track mapping ─────────────────────────────────────────────────────────────

class TestScrollTopFor:

    def test_proportional(self, scrollbar):
        assert scrollbar.scroll_top_for(250, 500, 1440, 720) == pytest.approx(360)

    def test_clamped_top(self, scrollbar):
        assert scrollbar.scroll_top_for(-40, 500, 1440, 720) == 0

    def test_clamped_bottom(self, scrollbar):
        assert scrollbar.scroll_top_for(900, 500, 1440, 720) == pytest.approx(720)

    def test_empty_track(self, scrollbar):
        assert scrollbar.scroll_top_for(10, 0, 1440, 720) == 0.0


# ── Dragging ──────────────────────────────────────────────────────────────────

class TestDragging:

    def test_drag_cycle(self, scrollbar, gestures):
        assert scrollbar.begin_drag()
        assert scrollbar.dragging
        assert gestures.active is Gesture.SCROLLBAR_DRAGGING
        assert scrollbar.drag_to(500, 500, 1440, 720) == pytest.approx(720)
        scrollbar.end_drag()
        assert not scrollbar.dragging
        assert gestures.is_idle

    def test_drag_to_without_drag(self, scrollbar):
        assert scrollbar.drag_to(100, 500, 1440, 720) is None

    def test_blocked_by_selection(self, scrollbar, gestures):
        gestures.acquire(Gesture.SELECTING)
        assert not scrollbar.begin_drag()
        assert not scrollbar.dragging
        scrollbar.end_drag()
        assert gestures.active is Gesture.SELECTING

    def test_defaults_to_global_owner(self):
        scrollbar = ScrollbarController()
        scrollbar.begin_drag()
        assert get_gesture_owner().active is Gesture.SCROLLBAR_DRAGGING
        scrollbar.end_drag()
